"""
Common utilities and helpers for StreetScroller.
"""

from streetscroller.common.error_handler import (
    safe_execute,
    log_and_raise
)

__all__ = [
    'safe_execute',
    'log_and_raise',
]
