"""
Tests for AddressLabelFactory.

Tests label rendering, bitmap sharing and content release.
"""

import numpy as np
import pytest
from PIL import Image

from streetscroller.config import ScrollerConfig
from streetscroller.render.label_renderer import AddressLabelFactory


class TestAddressLabelFactory:
    """Test AddressLabelFactory functionality."""

    @pytest.fixture
    def factory(self):
        return AddressLabelFactory(width=500, height=80)

    def test_content_matches_tile_size(self, factory):
        content = factory.create_tile_content()

        assert (content.width, content.height) == (500, 80)
        assert isinstance(content.payload, Image.Image)
        assert content.payload.size == (500, 80)

    def test_label_has_text_pixels(self, factory):
        pixels = np.array(factory.render_label())
        assert pixels.min() < 255
        assert pixels.max() == 255

    def test_bitmap_shared_between_tiles(self, factory):
        first = factory.create_tile_content()
        second = factory.create_tile_content()

        assert first is not second
        assert first.payload is second.payload
        assert factory.created_count == 2

    def test_release(self, factory):
        content = factory.create_tile_content()
        factory.release_tile_content(content)

        assert content.payload is None
        assert factory.released_count == 1
        assert factory.live_count == 0

    def test_missing_font_falls_back_to_default(self):
        factory = AddressLabelFactory(font_path="/nonexistent/font.ttf")
        assert factory.render_label().size == (500, 80)

    def test_set_text_rerenders(self, factory):
        before = factory.render_label()
        factory.set_text("1 Infinite Loop\nCupertino, CA")

        assert factory.render_label() is not before

    def test_from_config(self):
        config = ScrollerConfig(tile_width=320, tile_height=40, background_color=(0, 0, 255))
        factory = AddressLabelFactory.from_config(config)

        label = factory.render_label()
        assert label.size == (320, 40)
        assert label.getpixel((319, 0)) == (0, 0, 255)
