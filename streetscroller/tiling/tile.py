"""
Tile data types for the scroll strip.

A Tile is one placed unit of repeating content. Its content handle comes from
an external factory; the tiling core only reads the handle's width and height
and owns the tile's position.
"""

from typing import Any, Optional
from dataclasses import dataclass, field


@dataclass
class TileContent:
    """Opaque content handle produced by a tile factory."""
    width: float
    height: float
    payload: Any = None


@dataclass
class Tile:
    """A fixed-size unit of content placed on the backing surface."""
    tile_id: int
    content: Optional[TileContent]
    x: float = 0.0
    y: float = 0.0
    width: float = field(init=False)
    height: float = field(init=False)

    def __post_init__(self) -> None:
        self.width = self.content.width
        self.height = self.content.height

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def is_released(self) -> bool:
        return self.content is None

    def intersects(self, min_x: float, max_x: float) -> bool:
        """Check whether the tile overlaps the half-open range [min_x, max_x)."""
        return self.x < max_x and self.right > min_x

    def release(self) -> Optional[TileContent]:
        """Drop the content handle, returning it so the factory can reclaim it."""
        content, self.content = self.content, None
        return content
