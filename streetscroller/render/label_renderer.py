"""
Address label rendering for street tiles.

Supplies tile content to the scroll view: each tile shows the same multi-line
street address, so the label bitmap is rendered once and shared by every
content handle the factory hands out.
"""

import logging
from typing import Any, Optional, Tuple, Union

from PIL import Image, ImageDraw, ImageFont

from streetscroller.config import ScrollerConfig, DEFAULT_LABEL_TEXT
from streetscroller.tiling.tile import TileContent

logger = logging.getLogger(__name__)


class AddressLabelFactory:
    """
    Tile content factory rendering a street address label with Pillow.

    Pass `create_tile_content` and `release_tile_content` to the scroll view.
    """

    LEFT_PADDING = 4

    def __init__(
        self,
        width: int = 500,
        height: int = 80,
        text: str = DEFAULT_LABEL_TEXT,
        font_path: Optional[str] = None,
        font_size: int = 18,
        text_color: Tuple[int, int, int] = (0, 0, 0),
        background_color: Tuple[int, int, int] = (255, 255, 255)
    ):
        self.width = width
        self.height = height
        self.text = text
        self.font_path = font_path
        self.font_size = font_size
        self.text_color = tuple(text_color)
        self.background_color = tuple(background_color)

        self.font = self._load_font()
        self._label_image: Optional[Image.Image] = None

        self.created_count = 0
        self.released_count = 0

    @classmethod
    def from_config(cls, config: ScrollerConfig) -> 'AddressLabelFactory':
        return cls(
            width=config.tile_width,
            height=config.tile_height,
            text=config.label_text,
            font_path=config.font_path,
            font_size=config.font_size,
            text_color=config.text_color,
            background_color=config.background_color,
        )

    def _load_font(self) -> Union[ImageFont.FreeTypeFont, Any]:
        """Load the configured TrueType font, falling back to Pillow's default."""
        if self.font_path:
            try:
                return ImageFont.truetype(self.font_path, self.font_size)
            except (OSError, IOError) as e:
                logger.warning("Could not load font %s (%s), using default font", self.font_path, e)
        return ImageFont.load_default()

    @property
    def live_count(self) -> int:
        """Number of content handles handed out and not yet released."""
        return self.created_count - self.released_count

    def set_text(self, text: str) -> None:
        """Change the label text; tiles created afterwards show the new text."""
        if text != self.text:
            self.text = text
            self._label_image = None

    def render_label(self) -> Image.Image:
        """
        Render the label bitmap, reusing the cached one when available.

        Returns:
            RGB image of width x height with the text left aligned and vertically centered
        """
        if self._label_image is not None:
            return self._label_image

        image = Image.new('RGB', (self.width, self.height), self.background_color)
        draw = ImageDraw.Draw(image)

        bbox = draw.multiline_textbbox((0, 0), self.text, font=self.font)
        text_height = bbox[3] - bbox[1]
        y = (self.height - text_height) // 2 - bbox[1]
        draw.multiline_text((self.LEFT_PADDING, y), self.text, font=self.font, fill=self.text_color)

        self._label_image = image
        logger.debug("Rendered label bitmap %dx%d", self.width, self.height)
        return image

    def create_tile_content(self) -> TileContent:
        self.created_count += 1
        return TileContent(width=self.width, height=self.height, payload=self.render_label())

    def release_tile_content(self, content: TileContent) -> None:
        self.released_count += 1
        content.payload = None
