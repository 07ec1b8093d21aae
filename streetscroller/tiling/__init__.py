"""
Tiling core for the infinite scroll strip.

Components:
- TileManager: Keeps a contiguous run of tiles covering the visible range
- RecenteringController: Re-bases the scroll offset toward the surface center
- CoordinateTransform: Converts between viewport space and tile space
- Tile / TileContent: Placed tiles and the factory-supplied content handle
"""

from streetscroller.tiling.coordinates import CoordinateTransform
from streetscroller.tiling.recentering import RecenteringController
from streetscroller.tiling.tile import Tile, TileContent
from streetscroller.tiling.tile_manager import TileManager, TilingResult

__all__ = [
    'CoordinateTransform',
    'RecenteringController',
    'Tile',
    'TileContent',
    'TileManager',
    'TilingResult',
]
