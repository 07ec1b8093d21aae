"""
Error Handling Utilities

Common error handling patterns and utilities for consistent error handling
across the StreetScroller codebase.
"""

import logging
from typing import Any, Callable, Optional, TypeVar, Dict
from streetscroller.exceptions import StreetScrollerError

T = TypeVar('T')


def safe_execute(
    operation: Callable[[], T],
    error_message: str,
    logger: logging.Logger,
    default: Optional[T] = None,
    raise_on_error: bool = False,
    exception_type: type = StreetScrollerError
) -> Optional[T]:
    """
    Safely execute an operation with error handling.
    
    Args:
        operation: Function to execute
        error_message: Base error message
        logger: Logger instance
        default: Default value to return on error
        raise_on_error: If True, raise exception instead of returning default
        exception_type: Type of exception to raise if raise_on_error is True
        
    Returns:
        Result of operation or default value (or raises exception)
    """
    try:
        return operation()
    except StreetScrollerError:
        # Re-raise our own errors as-is
        raise
    except Exception as e:
        logger.error("%s: %s", error_message, e, exc_info=True)
        if raise_on_error:
            raise exception_type(error_message, context={'original_error': str(e)}) from e
        return default


def log_and_raise(
    logger: logging.Logger,
    message: str,
    exception_type: type = StreetScrollerError,
    context: Optional[Dict[str, Any]] = None
):
    """
    Log an error and raise an exception.
    
    Args:
        logger: Logger instance
        message: Error message
        exception_type: Type of exception to raise
        context: Optional context dictionary
        
    Raises:
        exception_type: The specified exception type
    """
    logger.error(message)
    raise exception_type(message, context=context)
