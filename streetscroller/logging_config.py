"""
Logging setup for StreetScroller.

Layout passes run many times per second, so per-pass records carry the scroll
view id and layout pass number as `extra` fields rather than in the message
text. Both formatters render those fields: the readable one as a bracketed
prefix, the JSON one as top-level keys.
"""

import logging
import sys
import os
import json
from typing import Optional, Dict, Any
from datetime import datetime

DEBUG_ENV_VAR = 'STREETSCROLLER_DEBUG'
FORMAT_TYPES = ('readable', 'json')

_READABLE_FORMAT = '%(asctime)s.%(msecs)03d - %(levelname)s - %(name)s - %(message)s'
_LOCATION_FORMAT = (
    '%(asctime)s.%(msecs)03d - %(levelname)s - %(name)s - '
    '%(module)s.%(funcName)s:%(lineno)d - %(message)s'
)


def _layout_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Collect the scroller extras attached to a record."""
    fields = {}
    for name in ('view_id', 'layout_pass', 'context'):
        if hasattr(record, name):
            fields[name] = getattr(record, name)
    return fields


class StructuredFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'location': f"{record.module}.{record.funcName}:{record.lineno}",
        }
        payload.update(_layout_fields(record))
        if record.exc_info:
            payload['exception'] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class ContextualFormatter(logging.Formatter):
    """Readable formatter that prefixes messages with view and pass context."""

    def __init__(self, include_context: bool = True, include_location: bool = False):
        fmt = _LOCATION_FORMAT if include_location else _READABLE_FORMAT
        super().__init__(fmt=fmt, datefmt='%Y-%m-%d %H:%M:%S')
        self.include_context = include_context

    def _prefix(self, record: logging.LogRecord) -> str:
        fields = _layout_fields(record)
        parts = []
        if 'view_id' in fields:
            parts.append(f"[View: {fields['view_id']}]")
        if 'layout_pass' in fields:
            parts.append(f"[Pass: {fields['layout_pass']}]")
        context = fields.get('context')
        if isinstance(context, dict):
            parts.extend(f"[{key}: {value}]" for key, value in context.items())
        return ' '.join(parts)

    def format(self, record: logging.LogRecord) -> str:
        prefix = self._prefix(record) if self.include_context else ''
        if not prefix:
            return super().format(record)

        # Handlers share the record; prefix a copy so each formats it once
        prefixed = logging.makeLogRecord(record.__dict__)
        prefixed.msg = f"{prefix} {record.getMessage()}"
        prefixed.args = None
        return super().format(prefixed)


def setup_logging(
    level: Optional[int] = None,
    format_type: str = 'readable',
    include_location: bool = False,
    log_file: Optional[str] = None
) -> None:
    """
    Configure the root logger.

    Args:
        level: Log level; INFO unless STREETSCROLLER_DEBUG=true selects DEBUG
        format_type: 'readable' or 'json'
        include_location: Add module/function/line to readable output
        log_file: Also write records to this file
    """
    if format_type not in FORMAT_TYPES:
        raise ValueError(f"format_type must be one of {FORMAT_TYPES}, got {format_type!r}")

    if level is None:
        debug = os.environ.get(DEBUG_ENV_VAR, '').lower() == 'true'
        level = logging.DEBUG if debug else logging.INFO

    if format_type == 'json':
        formatter = StructuredFormatter()
    else:
        formatter = ContextualFormatter(include_location=include_location)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file))
        except OSError as e:
            sys.stderr.write(f"Warning: Could not set up file logging to {log_file}: {e}\n")

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    context: Optional[Dict[str, Any]] = None,
    view_id: Optional[str] = None,
    layout_pass: Optional[int] = None,
    exc_info: Optional[Any] = None
) -> None:
    """Log `message` with the scroller extras that are set."""
    extra = {
        name: value
        for name, value in (('context', context), ('view_id', view_id), ('layout_pass', layout_pass))
        if value is not None and value != {}
    }
    logger.log(level, message, extra=extra, exc_info=exc_info)


def log_info(logger: logging.Logger, message: str, **kwargs) -> None:
    log_with_context(logger, logging.INFO, message, **kwargs)


def log_debug(logger: logging.Logger, message: str, **kwargs) -> None:
    log_with_context(logger, logging.DEBUG, message, **kwargs)
