"""
Custom exception classes for the Time Server.
"""


class TimeServerError(Exception):
    """Base class for Time Server errors."""


class ToolError(TimeServerError):
    """Raised by a tool when its arguments cannot be used."""


class UnknownToolError(ToolError):
    """Raised when a call names a tool that is not registered."""

    def __init__(self, name):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class InvalidTimestampError(ToolError):
    """Raised when a timestamp does not describe a representable instant."""

    def __init__(self, message: str = "Invalid timestamp"):
        super().__init__(message)


class InvalidTimezoneError(TimeServerError, ValueError):
    """Raised when a timezone name cannot be resolved."""

    def __init__(self, timezone):
        super().__init__(f"Invalid time zone specified: {timezone}")
        self.timezone = timezone


class InvalidFormatOptionError(TimeServerError, ValueError):
    """Raised when a date/time format option has an unsupported value."""
