"""
Scroller Configuration

Handles configuration for the infinite street scroller: tile geometry,
backing surface size, recentering threshold, viewport and label settings.
"""

import logging
import math
from typing import Dict, Any, List, Optional, Tuple
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_LABEL_TEXT = "1024 Block Street\nShaffer, CA\n95014"


@dataclass
class ScrollerConfig:
    """Configuration for the infinite scroll view and its render pipeline."""

    # Tile geometry
    tile_width: int = 500
    tile_height: int = 80

    # Backing surface
    total_width: int = 5000
    recenter_threshold: float = 0.25  # Fraction of total_width
    container_height_ratio: float = 0.5

    # Viewport
    viewport_width: int = 300
    viewport_height: int = 160

    # Scroll behavior
    scroll_speed: float = 40.0  # Pixels per frame
    frame_duration_ms: int = 40

    # Label content
    label_text: str = DEFAULT_LABEL_TEXT
    font_path: Optional[str] = None
    font_size: int = 18
    text_color: Tuple[int, int, int] = (0, 0, 0)
    background_color: Tuple[int, int, int] = (255, 255, 255)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'ScrollerConfig':
        """
        Create ScrollerConfig from main configuration dictionary.

        Args:
            config: Main config dict (expects config['scroller'])

        Returns:
            ScrollerConfig instance
        """
        scroller_config = config.get('scroller', {})

        return cls(
            tile_width=int(scroller_config.get('tile_width', 500)),
            tile_height=int(scroller_config.get('tile_height', 80)),
            total_width=int(scroller_config.get('total_width', 5000)),
            recenter_threshold=float(scroller_config.get('recenter_threshold', 0.25)),
            container_height_ratio=float(scroller_config.get('container_height_ratio', 0.5)),
            viewport_width=int(scroller_config.get('viewport_width', 300)),
            viewport_height=int(scroller_config.get('viewport_height', 160)),
            scroll_speed=float(scroller_config.get('scroll_speed', 40.0)),
            frame_duration_ms=int(scroller_config.get('frame_duration_ms', 40)),
            label_text=scroller_config.get('label_text', DEFAULT_LABEL_TEXT),
            font_path=scroller_config.get('font_path'),
            font_size=int(scroller_config.get('font_size', 18)),
            text_color=tuple(scroller_config.get('text_color', (0, 0, 0))),
            background_color=tuple(scroller_config.get('background_color', (255, 255, 255))),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for serialization."""
        return {
            'tile_width': self.tile_width,
            'tile_height': self.tile_height,
            'total_width': self.total_width,
            'recenter_threshold': self.recenter_threshold,
            'container_height_ratio': self.container_height_ratio,
            'viewport_width': self.viewport_width,
            'viewport_height': self.viewport_height,
            'scroll_speed': self.scroll_speed,
            'frame_duration_ms': self.frame_duration_ms,
            'label_text': self.label_text,
            'font_path': self.font_path,
            'font_size': self.font_size,
            'text_color': list(self.text_color),
            'background_color': list(self.background_color),
        }

    @property
    def recenter_distance(self) -> float:
        """Drift from center, in surface units, beyond which the view recenters."""
        return self.total_width * self.recenter_threshold

    @property
    def container_height(self) -> float:
        """Height of the tile container for the configured viewport."""
        return self.viewport_height * self.container_height_ratio

    def get_max_tile_count(self, viewport_width: Optional[float] = None) -> int:
        """
        Upper bound on placed tiles once tiling has converged.

        Args:
            viewport_width: Viewport width to bound for (defaults to configured width)

        Returns:
            ceil(viewport_width / tile_width) + 2
        """
        width = self.viewport_width if viewport_width is None else viewport_width
        return math.ceil(width / self.tile_width) + 2

    def validate_geometry(self) -> List[str]:
        """
        Validate the values the tiling core depends on.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if self.tile_width <= 0:
            errors.append(f"tile_width must be > 0, got {self.tile_width}")
        if self.tile_height <= 0:
            errors.append(f"tile_height must be > 0, got {self.tile_height}")
        if self.total_width <= 0:
            errors.append(f"total_width must be > 0, got {self.total_width}")
        if not 0.0 < self.recenter_threshold <= 0.5:
            errors.append(f"recenter_threshold must be in (0, 0.5], got {self.recenter_threshold}")
        if self.viewport_width > self.total_width:
            errors.append(
                f"viewport_width must be <= total_width ({self.total_width}), got {self.viewport_width}"
            )

        return errors

    def validate(self) -> List[str]:
        """
        Validate configuration values.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = self.validate_geometry()

        if self.viewport_width <= 0:
            errors.append(f"viewport_width must be > 0, got {self.viewport_width}")
        elif not errors:
            # The offset may drift recenter_distance past center before being
            # pulled back; it must still be inside [0, total_width - viewport_width].
            center_offset = (self.total_width - self.viewport_width) / 2.0
            if self.recenter_distance >= center_offset:
                errors.append(
                    f"total_width {self.total_width} too small for viewport_width "
                    f"{self.viewport_width} at recenter_threshold {self.recenter_threshold}"
                )

        if self.viewport_height <= 0:
            errors.append(f"viewport_height must be > 0, got {self.viewport_height}")
        if not 0.0 < self.container_height_ratio <= 1.0:
            errors.append(
                f"container_height_ratio must be in (0, 1], got {self.container_height_ratio}"
            )

        if abs(self.scroll_speed) >= self.recenter_distance:
            errors.append(
                f"scroll_speed must be < {self.recenter_distance} px/frame, got {self.scroll_speed}"
            )
        if self.frame_duration_ms < 10:
            errors.append(f"frame_duration_ms must be >= 10, got {self.frame_duration_ms}")
        if self.font_size < 4:
            errors.append(f"font_size must be >= 4, got {self.font_size}")

        return errors

    def update(self, new_config: Dict[str, Any]) -> None:
        """
        Update configuration from new values.

        Args:
            new_config: New configuration values to apply
        """
        scroller_config = new_config.get('scroller', {})

        if 'scroll_speed' in scroller_config:
            self.scroll_speed = float(scroller_config['scroll_speed'])
        if 'viewport_width' in scroller_config:
            self.viewport_width = int(scroller_config['viewport_width'])
        if 'viewport_height' in scroller_config:
            self.viewport_height = int(scroller_config['viewport_height'])
        if 'frame_duration_ms' in scroller_config:
            self.frame_duration_ms = int(scroller_config['frame_duration_ms'])
        if 'label_text' in scroller_config:
            self.label_text = scroller_config['label_text']

        logger.info(
            "Scroller config updated: viewport=%dx%d, speed=%.1f, frame=%dms",
            self.viewport_width, self.viewport_height, self.scroll_speed, self.frame_duration_ms
        )
