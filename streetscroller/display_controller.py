import time
from typing import Any, Dict, List, Optional

from PIL import Image

from streetscroller.common.error_handler import safe_execute
from streetscroller.config_manager import ConfigManager
from streetscroller.exceptions import RenderError
from streetscroller.logging_config import get_logger
from streetscroller.render import AddressLabelFactory, RenderPipeline
from streetscroller.scroll_view import InfiniteScrollView

# Get logger with consistent configuration
logger = get_logger(__name__)
DEFAULT_FRAME_COUNT = 200


class DisplayController:
    def __init__(
        self,
        config_path: Optional[str] = None,
        template_path: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None
    ):
        start_time = time.time()
        logger.info("Starting DisplayController initialization")

        self.config_manager = ConfigManager(config_path=config_path, template_path=template_path)
        config = self.config_manager.load_config()
        if overrides:
            config.setdefault('scroller', {}).update(overrides)
        self.scroller_config = self.config_manager.get_scroller_config()
        logger.info("Config loaded in %.3f seconds", time.time() - start_time)

        self.label_factory = AddressLabelFactory.from_config(self.scroller_config)
        self.scroll_view = InfiniteScrollView(
            self.scroller_config,
            self.label_factory.create_tile_content,
            self.label_factory.release_tile_content
        )
        self.pipeline = RenderPipeline(self.scroller_config, self.scroll_view)

        logger.info("DisplayController initialized in %.3f seconds", time.time() - start_time)

    def run(self, frame_count: int = DEFAULT_FRAME_COUNT, output_path: Optional[str] = None) -> List[Image.Image]:
        """
        Scroll for `frame_count` frames, optionally exporting them as a GIF.

        Returns:
            The rendered frames
        """
        frames = self.pipeline.run(frame_count)
        stats = self.pipeline.get_stats()
        logger.info(
            "Scroll finished at offset %.1f with %d tiles placed (%d created, %d released)",
            stats['offset'],
            stats['tile_count'],
            self.label_factory.created_count,
            self.label_factory.released_count
        )

        if output_path and frames:
            self.save_animation(frames, output_path)
        return frames

    def save_animation(self, frames: List[Image.Image], output_path: str) -> None:
        """Write frames to an animated GIF."""
        def _save() -> None:
            frames[0].save(
                output_path,
                save_all=True,
                append_images=frames[1:],
                duration=self.scroller_config.frame_duration_ms,
                loop=0
            )

        safe_execute(
            _save,
            f"Could not write animation to {output_path}",
            logger,
            raise_on_error=True,
            exception_type=RenderError
        )
        logger.info("Saved %d frames to %s", len(frames), output_path)


def main(
    config_path: Optional[str] = None,
    frame_count: int = DEFAULT_FRAME_COUNT,
    scroll_speed: Optional[float] = None,
    output_path: Optional[str] = None
) -> None:
    overrides = {'scroll_speed': scroll_speed} if scroll_speed is not None else None
    controller = DisplayController(config_path=config_path, overrides=overrides)
    controller.run(frame_count, output_path)


if __name__ == "__main__":
    main()
