"""
Render Pipeline

Drives the scroll view the way a host scroll container would: it owns the
viewport offset, advances it every frame, runs the layout pass, applies the
offset the view hands back, and composes the visible frame.
"""

import logging
import time
from collections import deque
from typing import Any, Deque, Dict, List, Optional

from PIL import Image

from streetscroller.config import ScrollerConfig
from streetscroller.render.frame_compositor import FrameCompositor
from streetscroller.scroll_view import InfiniteScrollView

logger = logging.getLogger(__name__)


class RenderPipeline:
    """
    Frame loop for the infinite scroll view.

    Key responsibilities:
    - Hold the viewport offset and size on behalf of the host
    - Advance the offset by scroll_speed pixels per frame
    - Apply the recentered offset returned by each layout pass
    - Compose frames and track frame timing statistics
    """

    def __init__(
        self,
        config: ScrollerConfig,
        scroll_view: InfiniteScrollView,
        compositor: Optional[FrameCompositor] = None
    ):
        """
        Initialize the render pipeline.

        Args:
            config: Scroller configuration
            scroll_view: Scroll view to lay out every frame
            compositor: Frame compositor (created from config if omitted)
        """
        self.config = config
        self.scroll_view = scroll_view
        self.compositor = compositor or FrameCompositor(
            background_color=config.background_color,
            transform=scroll_view.transform
        )

        self.viewport_width = config.viewport_width
        self.viewport_height = config.viewport_height
        self.scroll_speed = config.scroll_speed
        self.offset = 0.0

        # Distance travelled regardless of recentering
        self.total_distance_scrolled = 0.0

        self.stats = {
            'frames_rendered': 0,
            'layout_passes': 0,
            'recenters': 0,
            'avg_frame_time_ms': 0.0,
        }
        self._frame_times: Deque[float] = deque(maxlen=100)

        # Creation counts as the first layout event
        self._layout(self.offset)

        logger.info(
            "RenderPipeline initialized: viewport %dx%d, %.1f px/frame",
            self.viewport_width, self.viewport_height, self.scroll_speed
        )

    def _layout(self, offset: float) -> float:
        recenters_before = self.scroll_view.recentering.recenter_count
        self.offset = self.scroll_view.on_layout(offset, self.viewport_width, self.viewport_height)
        self.stats['layout_passes'] += 1
        if self.scroll_view.recentering.recenter_count != recenters_before:
            self.stats['recenters'] += 1
        return self.offset

    def advance(self, pixels: float) -> float:
        """
        Scroll by `pixels` (negative scrolls left) and run a layout pass.

        Returns:
            The offset after layout
        """
        self.total_distance_scrolled += abs(pixels)
        return self._layout(self.offset + pixels)

    def resize(self, viewport_width: int, viewport_height: int) -> float:
        """Change the viewport size and run a layout pass."""
        self.viewport_width = viewport_width
        self.viewport_height = viewport_height
        logger.debug("Viewport resized to %dx%d", viewport_width, viewport_height)
        return self._layout(self.offset)

    def compose_frame(self) -> Image.Image:
        """Compose the frame for the current offset without scrolling."""
        return self.compositor.compose(
            self.scroll_view.tile_manager,
            self.offset,
            self.viewport_width,
            self.viewport_height
        )

    def render_frame(self) -> Image.Image:
        """
        Advance one frame and compose it.

        Returns:
            The composed viewport image
        """
        frame_start = time.time()

        self.advance(self.scroll_speed)
        frame = self.compose_frame()

        self._frame_times.append(time.time() - frame_start)
        self.stats['frames_rendered'] += 1
        self.stats['avg_frame_time_ms'] = (
            sum(self._frame_times) / len(self._frame_times) * 1000.0
        )
        return frame

    def run(self, frame_count: int) -> List[Image.Image]:
        """
        Render `frame_count` consecutive frames.

        Returns:
            List of composed frames in order
        """
        frames = [self.render_frame() for _ in range(frame_count)]
        logger.info(
            "Rendered %d frames: %.0f px scrolled, %d recenters, avg %.2f ms/frame",
            len(frames),
            self.total_distance_scrolled,
            self.stats['recenters'],
            self.stats['avg_frame_time_ms']
        )
        return frames

    def get_stats(self) -> Dict[str, Any]:
        """
        Get pipeline statistics.

        Returns:
            Dictionary with frame, layout and scroll statistics
        """
        return {
            **self.stats,
            'offset': self.offset,
            'total_distance_scrolled': self.total_distance_scrolled,
            'tile_count': len(self.scroll_view.tile_manager),
        }
