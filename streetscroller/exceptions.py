"""
Custom exception hierarchy for StreetScroller.

Provides specific exception types for the contract violations the scroller
can detect, each carrying a context dictionary for debugging.
"""


class StreetScrollerError(Exception):
    """Base exception for all StreetScroller errors."""
    
    def __init__(self, message: str, context: dict = None):
        """
        Initialize the exception.
        
        Args:
            message: Error message
            context: Optional context dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
    
    def __str__(self) -> str:
        """Return formatted error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ConfigError(StreetScrollerError):
    """Exception raised for configuration-related errors."""
    
    def __init__(self, message: str, config_path: str = None, field: str = None, context: dict = None):
        """
        Initialize config error.
        
        Args:
            message: Error message
            config_path: Optional path to config file
            field: Optional field name that caused the error
            context: Optional context dictionary
        """
        if config_path or field:
            context = context or {}
            if config_path:
                context['config_path'] = config_path
            if field:
                context['field'] = field
        super().__init__(message, context)
        self.config_path = config_path
        self.field = field


class LayoutError(StreetScrollerError):
    """Exception raised when a layout pass is called with unusable geometry."""
    
    def __init__(self, message: str, offset: float = None, context: dict = None):
        """
        Initialize layout error.
        
        Args:
            message: Error message
            offset: Optional viewport offset passed to the layout pass
            context: Optional context dictionary
        """
        if offset is not None:
            context = context or {}
            context['offset'] = offset
        super().__init__(message, context)
        self.offset = offset


class TileError(StreetScrollerError):
    """Exception raised when a tile factory produces unusable content."""
    
    def __init__(self, message: str, tile_id: int = None, context: dict = None):
        """
        Initialize tile error.
        
        Args:
            message: Error message
            tile_id: Optional id of the tile being placed
            context: Optional context dictionary
        """
        if tile_id is not None:
            context = context or {}
            context['tile_id'] = tile_id
        super().__init__(message, context)
        self.tile_id = tile_id


class RenderError(StreetScrollerError):
    """Exception raised for frame composition and export errors."""
