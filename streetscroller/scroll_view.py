"""
Infinite Scroll View

Host-facing entry point of the scroller. The host scroll container calls
on_layout() whenever it lays out (on scroll, resize or creation) and applies
the offset it returns. Each pass recenters first, then tiles the visible range.
"""

import math
from typing import Any, Callable, Dict, List, Optional, Tuple

from streetscroller.common.error_handler import log_and_raise
from streetscroller.config import ScrollerConfig
from streetscroller.exceptions import ConfigError, LayoutError
from streetscroller.logging_config import get_logger, log_debug, log_info
from streetscroller.tiling import (
    CoordinateTransform,
    RecenteringController,
    Tile,
    TileContent,
    TileManager,
)


class InfiniteScrollView:
    """
    Tiles repeating content to give the effect of unbounded horizontal scrolling.

    The backing surface is config.total_width wide. The view keeps the offset
    away from its edges by recentering, and keeps a run of tiles covering
    whatever part of the surface is visible.
    """

    def __init__(
        self,
        config: ScrollerConfig,
        create_tile_content: Callable[[], TileContent],
        release_tile_content: Optional[Callable[[TileContent], None]] = None,
        transform: Optional[CoordinateTransform] = None,
        view_id: str = "street"
    ):
        """
        Initialize the scroll view.

        Args:
            config: Scroller configuration (tile size, surface width, threshold)
            create_tile_content: Factory called each time a tile is materialized
            release_tile_content: Optional hook called when a tile is dropped
            transform: Viewport/tile space conversion (identity by default)
            view_id: Identifier used in log context

        Raises:
            ConfigError: If the tiling geometry is invalid
        """
        self.logger = get_logger(__name__)
        self.view_id = view_id

        errors = config.validate_geometry()
        if errors:
            log_and_raise(
                self.logger,
                f"Invalid scroller configuration: {'; '.join(errors)}",
                ConfigError,
                context={'view_id': view_id}
            )

        self.config = config
        self.transform = transform or CoordinateTransform()
        self.recentering = RecenteringController(
            config.total_width,
            config.recenter_threshold,
            self.transform
        )
        self.tile_manager = TileManager(
            create_tile_content,
            release_tile_content,
            container_height=config.container_height
        )

        self.offset = 0.0
        self.viewport_width = float(config.viewport_width)
        self.viewport_height = float(config.viewport_height)
        self.layout_pass = 0

        log_info(
            self.logger,
            f"InfiniteScrollView initialized: surface={config.total_width}, "
            f"tile={config.tile_width}x{config.tile_height}, "
            f"recenter at {config.recenter_threshold:.2f} of surface",
            view_id=view_id
        )

    @property
    def total_width(self) -> float:
        return self.config.total_width

    @property
    def content_size(self) -> Tuple[float, float]:
        return (self.config.total_width, self.viewport_height)

    @property
    def container_height(self) -> float:
        return self.viewport_height * self.config.container_height_ratio

    @property
    def visible_range(self) -> Tuple[float, float]:
        return self.transform.visible_range(self.offset, self.viewport_width)

    @property
    def visible_tiles(self) -> List[Tile]:
        """Tiles that overlap the current visible range."""
        min_x, max_x = self.visible_range
        return [tile for tile in self.tile_manager if tile.intersects(min_x, max_x)]

    def _check_layout_args(self, offset: float, viewport_width: float, viewport_height: float) -> None:
        if not math.isfinite(offset):
            raise LayoutError("Viewport offset must be finite", offset=offset)
        if not viewport_width > 0:
            raise LayoutError(
                "Viewport width must be positive",
                offset=offset,
                context={'viewport_width': viewport_width}
            )
        if viewport_width > self.config.total_width:
            raise LayoutError(
                "Viewport is wider than the backing surface",
                offset=offset,
                context={'viewport_width': viewport_width, 'total_width': self.config.total_width}
            )
        if viewport_height < 0:
            raise LayoutError(
                "Viewport height must not be negative",
                offset=offset,
                context={'viewport_height': viewport_height}
            )

    def on_layout(self, offset: float, viewport_width: float, viewport_height: float) -> float:
        """
        Run one layout pass.

        Args:
            offset: Current viewport offset on the backing surface
            viewport_width: Current viewport width
            viewport_height: Current viewport height

        Returns:
            The offset the host must apply (differs from `offset` after recentering)

        Raises:
            LayoutError: If the geometry violates the layout contract
        """
        self._check_layout_args(offset, viewport_width, viewport_height)

        self.viewport_width = float(viewport_width)
        self.viewport_height = float(viewport_height)
        self.tile_manager.set_container_height(self.container_height)
        self.layout_pass += 1

        new_offset = self.recentering.recenter_if_necessary(
            offset, self.viewport_width, self.tile_manager
        )
        if new_offset != offset:
            log_debug(
                self.logger,
                f"Recentered from {offset:.1f} to {new_offset:.1f}",
                view_id=self.view_id,
                layout_pass=self.layout_pass
            )
        self.offset = new_offset

        # tile content in visible bounds
        min_x, max_x = self.transform.visible_range(new_offset, self.viewport_width)
        self.tile_manager.tile(min_x, max_x)

        return new_offset

    def get_layout_info(self) -> Dict[str, Any]:
        """
        Get current layout state information.

        Returns:
            Dictionary with offset, viewport, tiling and recentering state
        """
        min_x, max_x = self.visible_range
        return {
            'view_id': self.view_id,
            'offset': self.offset,
            'viewport_width': self.viewport_width,
            'viewport_height': self.viewport_height,
            'visible_range': (min_x, max_x),
            'layout_pass': self.layout_pass,
            'tiles': self.tile_manager.get_tile_info(),
            'recentering': self.recentering.get_recenter_info(),
        }
