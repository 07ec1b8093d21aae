"""
Tile Manager

Owns the ordered run of tiles spanning the visible range. Each layout pass
extends the run on whichever side is under-covered and trims tiles that have
fully left the visible range, so the run stays contiguous, covers the viewport
and never grows beyond a couple of tiles more than the viewport needs.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Deque, Dict, Iterator, List, Optional

from streetscroller.exceptions import TileError
from streetscroller.tiling.tile import Tile, TileContent

logger = logging.getLogger(__name__)


@dataclass
class TilingResult:
    """Tiles created and removed during one layout pass."""
    created: int = 0
    removed: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.created or self.removed)


class TileManager:
    """
    Maintains a contiguous, left-to-right sequence of tiles.

    Key responsibilities:
    - Bootstrap the sequence with one tile on the first layout pass
    - Extend coverage right and left until the visible range is covered
    - Trim tiles that have fully exited the visible range
    - Release tile content as soon as a tile is dropped
    """

    def __init__(
        self,
        create_tile_content: Callable[[], TileContent],
        release_tile_content: Optional[Callable[[TileContent], None]] = None,
        container_height: float = 0.0
    ):
        """
        Initialize the tile manager.

        Args:
            create_tile_content: Factory invoked once per new tile
            release_tile_content: Optional hook invoked with the content of each removed tile
            container_height: Height of the tile container; tiles sit on its bottom edge
        """
        self.create_tile_content = create_tile_content
        self.release_tile_content = release_tile_content
        self.container_height = container_height

        self._tiles: Deque[Tile] = deque()
        self._next_tile_id = 0
        self._tile_width: Optional[float] = None

        self.stats = {
            'tiles_created': 0,
            'tiles_removed': 0,
            'layout_passes': 0,
        }

    def __len__(self) -> int:
        return len(self._tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self._tiles)

    @property
    def tiles(self) -> List[Tile]:
        """Snapshot of the current tiles, left to right."""
        return list(self._tiles)

    @property
    def left_edge(self) -> Optional[float]:
        return self._tiles[0].left if self._tiles else None

    @property
    def right_edge(self) -> Optional[float]:
        return self._tiles[-1].right if self._tiles else None

    def _insert_tile(self) -> Tile:
        """Materialize a new tile from the factory."""
        tile_id = self._next_tile_id
        content = self.create_tile_content()
        if content is None or content.width <= 0:
            raise TileError(
                "Tile factory returned content without a positive width",
                tile_id=tile_id,
                context={'width': getattr(content, 'width', None)}
            )
        if self._tile_width is None:
            self._tile_width = content.width
        elif content.width != self._tile_width:
            raise TileError(
                "Tile factory returned content of a different width",
                tile_id=tile_id,
                context={'width': content.width, 'expected_width': self._tile_width}
            )

        self._next_tile_id += 1
        tile = Tile(tile_id=tile_id, content=content)
        tile.y = self.container_height - tile.height
        self.stats['tiles_created'] += 1
        return tile

    def set_container_height(self, container_height: float) -> None:
        """Resize the container and re-seat placed tiles on its bottom edge."""
        if container_height == self.container_height:
            return
        self.container_height = container_height
        for tile in self._tiles:
            tile.y = container_height - tile.height

    def place_right(self, edge: float) -> float:
        """
        Place a new tile with its left edge at `edge` on the right end.

        Returns:
            Right edge of the new tile
        """
        tile = self._insert_tile()
        tile.x = edge
        self._tiles.append(tile)
        return tile.right

    def place_left(self, edge: float) -> float:
        """
        Place a new tile with its right edge at `edge` on the left end.

        Returns:
            Left edge of the new tile
        """
        tile = self._insert_tile()
        tile.x = edge - tile.width
        self._tiles.appendleft(tile)
        return tile.left

    def _release(self, tile: Tile) -> None:
        content = tile.release()
        if self.release_tile_content is not None and content is not None:
            self.release_tile_content(content)
        self.stats['tiles_removed'] += 1

    def remove_right(self) -> Optional[Tile]:
        """Drop the rightmost tile. No-op on an empty sequence."""
        if not self._tiles:
            return None
        tile = self._tiles.pop()
        self._release(tile)
        return tile

    def remove_left(self) -> Optional[Tile]:
        """Drop the leftmost tile. No-op on an empty sequence."""
        if not self._tiles:
            return None
        tile = self._tiles.popleft()
        self._release(tile)
        return tile

    def tile(self, min_x: float, max_x: float) -> TilingResult:
        """
        Converge the tile sequence to cover [min_x, max_x).

        Args:
            min_x: Left edge of the visible range in tile space
            max_x: Right edge of the visible range in tile space

        Returns:
            TilingResult with the number of tiles created and removed
        """
        created_before = self.stats['tiles_created']
        removed_before = self.stats['tiles_removed']
        self.stats['layout_passes'] += 1

        # The extension steps below need a tile to grow from
        if not self._tiles:
            self.place_right(min_x)

        # add tiles that are missing on the right side
        right_edge = self._tiles[-1].right
        while right_edge < max_x:
            right_edge = self.place_right(right_edge)

        # add tiles that are missing on the left side
        left_edge = self._tiles[0].left
        while left_edge > min_x:
            left_edge = self.place_left(left_edge)

        # remove tiles that have fallen off the right edge
        while self._tiles and self._tiles[-1].x > max_x:
            self.remove_right()

        # remove tiles that have fallen off the left edge
        while self._tiles and self._tiles[0].right < min_x:
            self.remove_left()

        result = TilingResult(
            created=self.stats['tiles_created'] - created_before,
            removed=self.stats['tiles_removed'] - removed_before,
        )
        if result.changed:
            logger.debug(
                "Tiled [%.1f, %.1f): +%d/-%d tiles, %d placed",
                min_x, max_x, result.created, result.removed, len(self._tiles)
            )
        return result

    def clear(self) -> None:
        """Release every placed tile."""
        while self._tiles:
            self.remove_right()

    def get_tile_info(self) -> Dict[str, Any]:
        """
        Get current tiling state information.

        Returns:
            Dictionary with tiling state information
        """
        return {
            'tile_count': len(self._tiles),
            'left_edge': self.left_edge,
            'right_edge': self.right_edge,
            'tile_ids': [tile.tile_id for tile in self._tiles],
            'container_height': self.container_height,
            **self.stats,
        }
