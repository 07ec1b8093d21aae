import json
import pytest
from pathlib import Path

from streetscroller.config_manager import ConfigManager
from streetscroller.exceptions import ConfigError


class TestConfigManager:
    """Test loading, validating and saving the JSON configuration."""

    @pytest.fixture
    def manager(self, config_files):
        config_path, template_path = config_files
        return ConfigManager(config_path=config_path, template_path=template_path)

    def test_creates_config_from_template(self, manager):
        assert not Path(manager.config_path).exists()

        config = manager.load_config()

        assert Path(manager.config_path).exists()
        assert config['scroller']['tile_width'] == 500

    def test_missing_template_raises(self, tmp_path):
        manager = ConfigManager(
            config_path=str(tmp_path / "config.json"),
            template_path=str(tmp_path / "missing.template.json")
        )
        with pytest.raises(ConfigError) as exc_info:
            manager.load_config()
        assert "Template file not found" in str(exc_info.value)

    def test_invalid_json_raises(self, manager):
        Path(manager.config_path).write_text("{not json")
        with pytest.raises(ConfigError) as exc_info:
            manager.load_config()
        assert exc_info.value.config_path == manager.config_path

    def test_missing_keys_filled_from_template(self, manager):
        Path(manager.config_path).write_text(json.dumps({'scroller': {'tile_width': 250}}))

        config = manager.load_config()

        assert config['scroller']['tile_width'] == 250
        assert config['scroller']['total_width'] == 5000

        saved = json.loads(Path(manager.config_path).read_text())
        assert saved['scroller']['tile_width'] == 250
        assert saved['scroller']['total_width'] == 5000

    def test_schema_violation_raises(self, manager):
        Path(manager.config_path).write_text(json.dumps({'scroller': {'tile_width': -5}}))

        with pytest.raises(ConfigError) as exc_info:
            manager.load_config()

        assert exc_info.value.field == 'scroller'
        assert "tile_width" in str(exc_info.value)

    def test_unknown_key_rejected(self, manager):
        errors = manager.validate_scroller_section({'tile_depth': 3})
        assert len(errors) == 1

    def test_wrong_type_message(self, manager):
        errors = manager.validate_scroller_section({'total_width': "wide"})
        assert errors == ["Field 'total_width': Expected type integer, got str"]

    def test_get_scroller_config(self, manager):
        scroller_config = manager.get_scroller_config()
        assert scroller_config.total_width == 5000
        assert scroller_config.viewport_width == 300

    def test_inconsistent_values_raise(self, manager):
        Path(manager.config_path).write_text(
            json.dumps({'scroller': {'total_width': 1000, 'viewport_width': 600}})
        )
        manager.load_config()

        with pytest.raises(ConfigError) as exc_info:
            manager.get_scroller_config()
        assert "too small" in str(exc_info.value)

    def test_save_config(self, manager):
        manager.load_config()
        new_config = {'scroller': {'tile_width': 400}}

        manager.save_config(new_config)

        with open(manager.config_path) as f:
            assert json.load(f) == new_config
        assert manager.get_config() == new_config
