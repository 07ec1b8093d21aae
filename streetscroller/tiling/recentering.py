"""
Recentering Controller

Keeps the viewport offset near the middle of the finite backing surface.
When the offset drifts too far from center it is moved back, and every placed
tile is shifted by the same amount so the visible content does not jump.
"""

import logging
from typing import Any, Dict, Iterable, Optional

from streetscroller.tiling.coordinates import CoordinateTransform
from streetscroller.tiling.tile import Tile

logger = logging.getLogger(__name__)


class RecenteringController:
    """
    Re-bases the scroll offset toward the center of the backing surface.

    The controller never creates or destroys tiles; it only moves the offset
    and applies the identical delta to every tile, so order and spacing of the
    tile sequence are preserved exactly.
    """

    def __init__(
        self,
        total_width: float,
        threshold_fraction: float = 0.25,
        transform: Optional[CoordinateTransform] = None
    ):
        """
        Initialize the recentering controller.

        Args:
            total_width: Width of the backing surface
            threshold_fraction: Fraction of total_width the offset may drift
                from center before recentering
            transform: Conversion between viewport space and tile space
        """
        self.total_width = total_width
        self.threshold_fraction = threshold_fraction
        self.transform = transform or CoordinateTransform()

        self.recenter_count = 0
        self.last_delta = 0.0

    @property
    def threshold(self) -> float:
        return self.total_width * self.threshold_fraction

    def center_offset(self, viewport_width: float) -> float:
        """Offset that places the viewport in the middle of the backing surface."""
        return (self.total_width - viewport_width) / 2.0

    def needs_recenter(self, offset: float, viewport_width: float) -> bool:
        return abs(offset - self.center_offset(viewport_width)) > self.threshold

    def recenter_if_necessary(
        self,
        offset: float,
        viewport_width: float,
        tiles: Iterable[Tile]
    ) -> float:
        """
        Recenter the offset and shift tiles when drift exceeds the threshold.

        Args:
            offset: Current viewport offset
            viewport_width: Current viewport width
            tiles: Live tile sequence, shifted in place on recenter

        Returns:
            The new offset (unchanged when no recentering was needed)
        """
        center_offset = self.center_offset(viewport_width)
        if abs(offset - center_offset) <= self.threshold:
            return offset

        delta = center_offset - offset
        shifted = 0
        for tile in tiles:
            position = self.transform.to_viewport_space(tile.x)
            tile.x = self.transform.to_tile_space(position + delta)
            shifted += 1

        self.recenter_count += 1
        self.last_delta = delta

        logger.debug(
            "Recentered offset %.1f -> %.1f (delta=%.1f, %d tiles shifted)",
            offset, center_offset, delta, shifted
        )
        return center_offset

    def get_recenter_info(self) -> Dict[str, Any]:
        """
        Get recentering state information.

        Returns:
            Dictionary with recentering statistics
        """
        return {
            'total_width': self.total_width,
            'threshold_fraction': self.threshold_fraction,
            'threshold': self.threshold,
            'recenter_count': self.recenter_count,
            'last_delta': self.last_delta,
        }
