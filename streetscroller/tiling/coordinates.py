"""
Coordinate conversion between viewport space and tile space.

Viewport space is the scroll surface the host offsets into; tile space is the
coordinate system of the container the tiles are placed in. The two differ by
the container's horizontal origin.
"""

from typing import Tuple


class CoordinateTransform:
    """Translates x coordinates between viewport space and tile space."""

    def __init__(self, content_origin_x: float = 0.0) -> None:
        """
        Initialize the transform.

        Args:
            content_origin_x: X of the tile container's origin in viewport space
        """
        self.content_origin_x = content_origin_x

    def to_tile_space(self, x: float) -> float:
        return x - self.content_origin_x

    def to_viewport_space(self, x: float) -> float:
        return x + self.content_origin_x

    def visible_range(self, offset: float, viewport_width: float) -> Tuple[float, float]:
        """
        Express the viewport [offset, offset + viewport_width) in tile space.

        Returns:
            Tuple of (min_x, max_x)
        """
        return (
            self.to_tile_space(offset),
            self.to_tile_space(offset + viewport_width),
        )

    def __repr__(self) -> str:
        return f"CoordinateTransform(content_origin_x={self.content_origin_x})"
