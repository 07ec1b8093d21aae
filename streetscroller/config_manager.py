import json
import os
import logging
from pathlib import Path
from typing import Dict, Any, Optional, List

import jsonschema
from jsonschema import Draft7Validator, ValidationError

from streetscroller.config import ScrollerConfig
from streetscroller.exceptions import ConfigError
from streetscroller.logging_config import get_logger

SCROLLER_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "tile_width": {"type": "integer", "minimum": 1},
        "tile_height": {"type": "integer", "minimum": 1},
        "total_width": {"type": "integer", "minimum": 1},
        "recenter_threshold": {"type": "number", "exclusiveMinimum": 0, "maximum": 0.5},
        "container_height_ratio": {"type": "number", "exclusiveMinimum": 0, "maximum": 1},
        "viewport_width": {"type": "integer", "minimum": 1},
        "viewport_height": {"type": "integer", "minimum": 1},
        "scroll_speed": {"type": "number"},
        "frame_duration_ms": {"type": "integer", "minimum": 10},
        "label_text": {"type": "string"},
        "font_path": {"type": ["string", "null"]},
        "font_size": {"type": "integer", "minimum": 4},
        "text_color": {
            "type": "array",
            "items": {"type": "integer", "minimum": 0, "maximum": 255},
            "minItems": 3,
            "maxItems": 3
        },
        "background_color": {
            "type": "array",
            "items": {"type": "integer", "minimum": 0, "maximum": 255},
            "minItems": 3,
            "maxItems": 3
        }
    },
    "additionalProperties": False
}


class ConfigManager:
    def __init__(self, config_path: Optional[str] = None, template_path: Optional[str] = None) -> None:
        # Use current working directory as base
        self.config_path: str = config_path or "config/config.json"
        self.template_path: str = template_path or "config/config.template.json"
        self.config: Dict[str, Any] = {}
        self.logger: logging.Logger = get_logger(__name__)

    def get_config_path(self) -> str:
        return self.config_path

    def get_config(self) -> Dict[str, Any]:
        return self.config

    def load_config(self) -> Dict[str, Any]:
        """Load configuration from the JSON file, creating it from the template if missing."""
        try:
            if not os.path.exists(self.config_path):
                self._create_config_from_template()

            self.logger.info(f"Attempting to load config from: {os.path.abspath(self.config_path)}")
            with open(self.config_path, 'r') as f:
                self.config = json.load(f)

            self._merge_template_defaults()

        except FileNotFoundError as e:
            error_msg = f"Configuration file not found at {os.path.abspath(self.config_path)}"
            self.logger.error(error_msg, exc_info=True)
            raise ConfigError(error_msg, config_path=self.config_path) from e
        except json.JSONDecodeError as e:
            error_msg = f"Error parsing configuration file {os.path.abspath(self.config_path)}"
            self.logger.error(error_msg, exc_info=True)
            raise ConfigError(error_msg, config_path=self.config_path) from e
        except (IOError, OSError) as e:
            error_msg = f"Error loading configuration from {os.path.abspath(self.config_path)}"
            self.logger.error(error_msg, exc_info=True)
            raise ConfigError(error_msg, config_path=self.config_path) from e

        if not isinstance(self.config, dict):
            raise ConfigError("Configuration root must be a JSON object", config_path=self.config_path)

        errors = self.validate_scroller_section(self.config.get('scroller', {}))
        if errors:
            error_msg = f"Invalid scroller configuration: {'; '.join(errors)}"
            self.logger.error(error_msg)
            raise ConfigError(error_msg, config_path=self.config_path, field='scroller')

        return self.config

    def validate_scroller_section(self, section: Any) -> List[str]:
        """
        Validate the `scroller` section against its JSON Schema.

        Args:
            section: The config['scroller'] value

        Returns:
            List of readable error messages (empty if valid)
        """
        try:
            validator = Draft7Validator(SCROLLER_SCHEMA)
            return [self._format_validation_error(error) for error in validator.iter_errors(section)]
        except jsonschema.SchemaError as e:
            self.logger.error(f"Scroller schema error: {e}")
            return [f"Schema error: {e}"]

    def _format_validation_error(self, error: ValidationError) -> str:
        path = '.'.join(str(p) for p in error.path)
        field_path = f"'{path}'" if path else "root"

        if error.validator == 'type':
            expected = error.validator_value
            actual = type(error.instance).__name__
            return f"Field {field_path}: Expected type {expected}, got {actual}"
        elif error.validator in ['minimum', 'maximum', 'exclusiveMinimum']:
            limit = error.validator_value
            return f"Field {field_path}: Value {error.instance} violates {error.validator} constraint ({limit})"
        elif error.validator in ['minItems', 'maxItems']:
            limit = error.validator_value
            return f"Field {field_path}: Array length {len(error.instance)} violates {error.validator} constraint ({limit})"
        else:
            return f"Field {field_path}: {error.message}"

    def get_scroller_config(self) -> ScrollerConfig:
        """
        Build a validated ScrollerConfig from the loaded configuration.

        Raises:
            ConfigError: If the values are individually valid but inconsistent
        """
        if not self.config:
            self.load_config()

        scroller_config = ScrollerConfig.from_config(self.config)
        errors = scroller_config.validate()
        if errors:
            error_msg = f"Inconsistent scroller configuration: {'; '.join(errors)}"
            self.logger.error(error_msg)
            raise ConfigError(error_msg, config_path=self.config_path, field='scroller')
        return scroller_config

    def save_config(self, new_config_data: Dict[str, Any]) -> None:
        """Save configuration to the main JSON file."""
        try:
            Path(self.config_path).parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, 'w') as f:
                json.dump(new_config_data, f, indent=4)

            self.config = new_config_data
            self.logger.info(f"Configuration successfully saved to {os.path.abspath(self.config_path)}")

        except (IOError, OSError) as e:
            error_msg = f"Error writing configuration to file {os.path.abspath(self.config_path)}"
            self.logger.error(error_msg, exc_info=True)
            raise ConfigError(error_msg, config_path=self.config_path) from e

    def _deep_merge_missing(self, target: Dict[str, Any], defaults: Dict[str, Any]) -> bool:
        """Add keys from defaults that target lacks. Returns True if anything was added."""
        added = False
        for key, value in defaults.items():
            if key not in target:
                target[key] = value
                added = True
            elif isinstance(target[key], dict) and isinstance(value, dict):
                added = self._deep_merge_missing(target[key], value) or added
        return added

    def _load_template(self) -> Optional[Dict[str, Any]]:
        if not os.path.exists(self.template_path):
            return None
        with open(self.template_path, 'r') as f:
            return json.load(f)

    def _create_config_from_template(self) -> None:
        """Create the config file from the template if it doesn't exist."""
        template_data = self._load_template()
        if template_data is None:
            error_msg = f"Template file not found at {os.path.abspath(self.template_path)}"
            self.logger.error(error_msg)
            raise ConfigError(error_msg, config_path=self.template_path)

        self.logger.info(f"Creating config from template at {os.path.abspath(self.template_path)}")
        Path(self.config_path).parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, 'w') as config_file:
            json.dump(template_data, config_file, indent=4)

    def _merge_template_defaults(self) -> None:
        """Fill in configuration items the template has but the loaded config lacks."""
        template_data = self._load_template()
        if template_data is None:
            self.logger.warning(
                f"Template file not found at {os.path.abspath(self.template_path)}, skipping defaults merge"
            )
            return

        if isinstance(self.config, dict) and self._deep_merge_missing(self.config, template_data):
            self.logger.info("Added missing configuration items from template defaults")
            self.save_config(self.config)
