"""
Tests for the RenderPipeline.

Frames are checked against the ideal unbounded strip: with labels placed every
500px starting at the first layout offset, the frame for virtual offset V shows
label columns (V + c - origin) mod 500.
"""

import numpy as np
import pytest

from streetscroller.config import ScrollerConfig
from streetscroller.render import AddressLabelFactory, RenderPipeline
from streetscroller.scroll_view import InfiniteScrollView


def build_pipeline(**overrides):
    config = ScrollerConfig(**overrides)
    factory = AddressLabelFactory.from_config(config)
    view = InfiniteScrollView(config, factory.create_tile_content, factory.release_tile_content)
    return RenderPipeline(config, view), factory


def expected_frame(label, virtual_offset, origin, viewport_width=300, viewport_height=160):
    columns = (virtual_offset + np.arange(viewport_width) - origin) % label.shape[1]
    frame = np.full((viewport_height, viewport_width, 3), 255, dtype=np.uint8)
    frame[:label.shape[0], :] = label[:, columns]
    return frame


class TestRenderPipeline:
    """Test frame loop behavior."""

    def test_initial_layout_recenters(self):
        pipeline, _ = build_pipeline()
        assert pipeline.offset == 2350
        assert pipeline.stats['recenters'] == 1
        assert len(pipeline.scroll_view.tile_manager) == 1

    def test_render_frame_size(self):
        pipeline, _ = build_pipeline()
        frame = pipeline.render_frame()
        assert frame.size == (300, 160)
        assert pipeline.stats['frames_rendered'] == 1

    def test_offset_recenters_during_run(self):
        pipeline, _ = build_pipeline()
        pipeline.run(40)

        # 32 frames of 40px exceed the 1250px threshold once
        assert pipeline.stats['recenters'] == 2
        assert pipeline.offset == 2350 + 8 * 40
        assert pipeline.total_distance_scrolled == 40 * 40

    @pytest.mark.parametrize("speed", [40.0, -40.0, 170.0])
    def test_frames_match_unbounded_strip(self, speed):
        pipeline, factory = build_pipeline(scroll_speed=speed)
        label = np.array(factory.render_label())
        origin = pipeline.offset

        for frame_number in range(1, 61):
            frame = pipeline.render_frame()
            virtual_offset = origin + speed * frame_number
            np.testing.assert_array_equal(
                np.array(frame),
                expected_frame(label, int(virtual_offset), int(origin))
            )

        assert pipeline.stats['recenters'] > 1

    def test_tile_count_bounded(self):
        pipeline, factory = build_pipeline(scroll_speed=-90.0)
        for _ in range(200):
            pipeline.render_frame()
            assert len(pipeline.scroll_view.tile_manager) <= 3
        assert factory.live_count == len(pipeline.scroll_view.tile_manager)

    def test_resize_covers_new_viewport(self):
        pipeline, _ = build_pipeline()
        pipeline.resize(1200, 160)

        tiles = pipeline.scroll_view.tile_manager.tiles
        assert tiles[0].x <= pipeline.offset
        assert tiles[-1].right >= pipeline.offset + 1200
        assert pipeline.compose_frame().size == (1200, 160)

    def test_height_resize_keeps_tiles_level(self):
        pipeline, _ = build_pipeline()
        pipeline.resize(300, 300)
        for _ in range(10):
            pipeline.render_frame()

        ys = {tile.y for tile in pipeline.scroll_view.tile_manager}
        assert len(pipeline.scroll_view.tile_manager) >= 2
        assert ys == {150 - 80}

    def test_get_stats(self):
        pipeline, _ = build_pipeline()
        pipeline.run(3)
        stats = pipeline.get_stats()

        assert stats['frames_rendered'] == 3
        assert stats['layout_passes'] == 4
        assert stats['offset'] == 2350 + 120
        assert stats['tile_count'] >= 1
