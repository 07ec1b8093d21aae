"""
Frame Compositor

Assembles the visible viewport image from placed tiles using numpy slicing.

Performance notes:
- Tile bitmaps are converted to numpy arrays once and reused
- The output frame buffer is pre-allocated and only reallocated on resize
"""

import logging
import math
from typing import Iterable, Optional, Tuple

import numpy as np
from PIL import Image

from streetscroller.tiling.coordinates import CoordinateTransform
from streetscroller.tiling.tile import Tile

logger = logging.getLogger(__name__)


class FrameCompositor:
    """Copies the visible columns of each tile into a viewport-sized frame."""

    def __init__(
        self,
        background_color: Tuple[int, int, int] = (255, 255, 255),
        transform: Optional[CoordinateTransform] = None
    ):
        """
        Initialize the compositor.

        Args:
            background_color: RGB fill for areas no tile covers
            transform: Viewport/tile space conversion matching the scroll view's
        """
        self.background_color = np.array(background_color, dtype=np.uint8)
        self.transform = transform or CoordinateTransform()

        # Pre-allocated buffer for output frame (reused to avoid allocations)
        self._frame_buffer: Optional[np.ndarray] = None

        # Tiles usually share one bitmap; keep its array form
        self._source_image: Optional[Image.Image] = None
        self._source_array: Optional[np.ndarray] = None

        self.tiles_drawn = 0

    def _get_frame_buffer(self, width: int, height: int) -> np.ndarray:
        if self._frame_buffer is None or self._frame_buffer.shape != (height, width, 3):
            self._frame_buffer = np.zeros((height, width, 3), dtype=np.uint8)
            logger.debug("Allocated frame buffer %dx%d", width, height)
        self._frame_buffer[:, :] = self.background_color
        return self._frame_buffer

    def _tile_array(self, image: Image.Image) -> np.ndarray:
        if image is not self._source_image:
            self._source_image = image
            self._source_array = np.array(image.convert('RGB'))
        return self._source_array

    def compose(
        self,
        tiles: Iterable[Tile],
        offset: float,
        viewport_width: int,
        viewport_height: int
    ) -> Image.Image:
        """
        Compose the viewport frame.

        Args:
            tiles: Placed tiles (any order)
            offset: Viewport offset on the backing surface
            viewport_width: Frame width in pixels
            viewport_height: Frame height in pixels

        Returns:
            RGB image of the visible viewport
        """
        width = int(viewport_width)
        height = int(viewport_height)
        frame = self._get_frame_buffer(width, height)

        drawn = 0
        for tile in tiles:
            if tile.content is None or tile.content.payload is None:
                continue
            tile_array = self._tile_array(tile.content.payload)

            left = int(math.floor(self.transform.to_viewport_space(tile.x) - offset))
            top = int(round(tile.y))
            tile_h, tile_w = tile_array.shape[:2]

            # Clip the tile rectangle to the frame
            dst_x0 = max(0, left)
            dst_x1 = min(width, left + tile_w)
            dst_y0 = max(0, top)
            dst_y1 = min(height, top + tile_h)
            if dst_x0 >= dst_x1 or dst_y0 >= dst_y1:
                continue

            src_x0 = dst_x0 - left
            src_y0 = dst_y0 - top
            frame[dst_y0:dst_y1, dst_x0:dst_x1] = tile_array[
                src_y0:src_y0 + (dst_y1 - dst_y0),
                src_x0:src_x0 + (dst_x1 - dst_x0)
            ]
            drawn += 1

        self.tiles_drawn = drawn
        return Image.fromarray(frame.copy())
