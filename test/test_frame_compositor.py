"""
Tests for FrameCompositor.
"""

import numpy as np
import pytest
from PIL import Image

from streetscroller.render.frame_compositor import FrameCompositor
from streetscroller.tiling import CoordinateTransform, Tile, TileContent

RED = (255, 0, 0)
WHITE = (255, 255, 255)


def make_tile(x, y=0, width=10, height=4, color=RED, tile_id=0):
    image = Image.new('RGB', (width, height), color)
    tile = Tile(tile_id=tile_id, content=TileContent(width, height, payload=image))
    tile.x = x
    tile.y = y
    return tile


def red_columns(frame):
    pixels = np.array(frame)
    return [c for c in range(pixels.shape[1]) if tuple(pixels[0, c]) == RED]


class TestFrameCompositor:
    """Test composing viewport frames from tiles."""

    @pytest.fixture
    def compositor(self):
        return FrameCompositor(background_color=WHITE)

    def test_frame_size(self, compositor):
        frame = compositor.compose([], 0, 20, 4)
        assert frame.size == (20, 4)
        assert np.all(np.array(frame) == 255)

    def test_tile_inside_viewport(self, compositor):
        frame = compositor.compose([make_tile(105)], 100, 20, 4)
        assert red_columns(frame) == list(range(5, 15))
        assert compositor.tiles_drawn == 1

    def test_tile_clipped_on_left(self, compositor):
        frame = compositor.compose([make_tile(97)], 100, 20, 4)
        assert red_columns(frame) == list(range(0, 7))

    def test_tile_clipped_on_right(self, compositor):
        frame = compositor.compose([make_tile(115)], 100, 20, 4)
        assert red_columns(frame) == list(range(15, 20))

    def test_tile_outside_viewport_skipped(self, compositor):
        compositor.compose([make_tile(50), make_tile(130)], 100, 20, 4)
        assert compositor.tiles_drawn == 0

    def test_vertical_offset(self, compositor):
        frame = compositor.compose([make_tile(100, y=2)], 100, 20, 4)
        pixels = np.array(frame)
        assert tuple(pixels[1, 0]) == WHITE
        assert tuple(pixels[2, 0]) == RED
        assert tuple(pixels[3, 0]) == RED

    def test_released_tile_skipped(self, compositor):
        tile = make_tile(100)
        tile.release()
        compositor.compose([tile], 100, 20, 4)
        assert compositor.tiles_drawn == 0

    def test_content_origin_applied(self):
        compositor = FrameCompositor(transform=CoordinateTransform(content_origin_x=3))
        frame = compositor.compose([make_tile(0)], 0, 20, 4)
        assert red_columns(frame) == list(range(3, 13))

    def test_frames_are_independent(self, compositor):
        first = compositor.compose([make_tile(100)], 100, 20, 4)
        compositor.compose([], 100, 20, 4)
        assert red_columns(first) == list(range(0, 10))
