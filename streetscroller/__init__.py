"""
StreetScroller - an endlessly scrolling street of address labels.

A finite backing surface is made to look unbounded: tiles are created and
dropped as the viewport moves, and the offset is periodically recentered with
all tiles shifted by the same amount.
"""

from streetscroller.config import ScrollerConfig
from streetscroller.scroll_view import InfiniteScrollView

__all__ = [
    'ScrollerConfig',
    'InfiniteScrollView',
]

__version__ = '1.2.0'
