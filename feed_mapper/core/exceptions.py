"""
Error taxonomy for feed loading, transformation and serialization.
"""


class FeedError(Exception):
    """Base class for all feed-mapper errors."""


class ParseError(FeedError):
    """Raised when a feed document is malformed or contains no items."""

    def __init__(self, message: str, line: int | None = None):
        self.message = message
        self.line = line
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)


class NoDataError(FeedError):
    """Raised when an operation needs a loaded feed and none is present."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot {operation}: no feed loaded")


class SerializeError(FeedError):
    """Raised when records cannot be written as well-formed XML."""

    def __init__(self, field_name: str, message: str):
        self.field_name = field_name
        self.message = message
        super().__init__(f"{field_name}: {message}")
