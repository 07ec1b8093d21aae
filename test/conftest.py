"""
Pytest configuration and fixtures for StreetScroller tests.

Provides a fake tile factory, scroller configurations and test setup.
"""

import json
import pytest
import sys
from pathlib import Path
from typing import List

# Add project root to path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from streetscroller.config import ScrollerConfig
from streetscroller.tiling import TileContent


class FakeTileFactory:
    """Hands out fixed-size content handles and records releases."""

    def __init__(self, width: float = 500, height: float = 80):
        self.width = width
        self.height = height
        self.created: List[TileContent] = []
        self.released: List[TileContent] = []

    def create_tile_content(self) -> TileContent:
        content = TileContent(width=self.width, height=self.height, payload=len(self.created))
        self.created.append(content)
        return content

    def release_tile_content(self, content: TileContent) -> None:
        self.released.append(content)


def assert_converged(tiles, min_x, max_x, viewport_width=None, tile_width=500):
    """Check coverage, contiguity and boundedness of a tile sequence."""
    assert tiles, "tile sequence is empty"
    assert tiles[0].x <= min_x
    assert tiles[-1].right >= max_x
    for left, right in zip(tiles, tiles[1:]):
        assert left.x + left.width == right.x
    assert tiles[-1].x <= max_x
    assert tiles[0].right >= min_x
    width = (max_x - min_x) if viewport_width is None else viewport_width
    assert len(tiles) <= -(-width // tile_width) + 2


@pytest.fixture
def fake_factory():
    """Create a FakeTileFactory producing 500x80 tiles."""
    return FakeTileFactory()


@pytest.fixture
def scroller_config():
    """Provide the default scroller configuration (500px tiles on a 5000px surface)."""
    return ScrollerConfig()


@pytest.fixture
def test_config():
    """Provide a test configuration dictionary."""
    return {
        'scroller': {
            'tile_width': 500,
            'tile_height': 80,
            'total_width': 5000,
            'recenter_threshold': 0.25,
            'viewport_width': 300,
            'viewport_height': 160,
            'scroll_speed': 40.0,
        }
    }


@pytest.fixture
def config_files(tmp_path, test_config):
    """Create a config directory with a template; returns (config_path, template_path)."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    template_path = config_dir / "config.template.json"
    template = {'scroller': dict(test_config['scroller'], frame_duration_ms=40, font_size=18)}
    template_path.write_text(json.dumps(template))
    return str(config_dir / "config.json"), str(template_path)


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration before each test."""
    import logging
    logging.root.handlers = []
    logging.root.setLevel(logging.WARNING)
    yield
    for handler in logging.root.handlers:
        handler.close()
    logging.root.handlers = []
    logging.root.setLevel(logging.WARNING)
