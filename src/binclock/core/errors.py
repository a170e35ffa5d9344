"""Custom exception hierarchy for the binary clock.

Provides structured error handling with severity levels and context.
"""

from enum import Enum
from typing import Any


class ErrorSeverity(Enum):
    """Error severity levels for monitoring and logging."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class BinaryClockError(Exception):
    """Base exception for all binary clock errors.

    Attributes:
        message: Human-readable error message
        details: Additional context as key-value pairs
        severity: Error severity level
    """

    severity: ErrorSeverity = ErrorSeverity.ERROR

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "severity": self.severity.value,
            "details": self.details,
        }


class ConfigurationError(BinaryClockError):
    """Configuration validation or loading error.

    Raised when:
    - Config file is malformed
    - A style edit fails validation
    """

    pass


class InvalidDigitError(BinaryClockError):
    """A value outside 0-9 was passed to the digit encoder.

    The time and date decomposers only ever produce 0-9, so this
    signals a caller bug.
    """

    pass


class StyleDecodeError(BinaryClockError):
    """Persisted style payload is malformed or has an unknown tag.

    Raised when:
    - Required fields are missing or have the wrong type
    - Values fail range validation
    - The marker shape tag is unknown

    Stores recover from this by falling back to the default style.
    """

    severity = ErrorSeverity.WARNING


class StoreUnavailableError(BinaryClockError):
    """The style persistence backend cannot be reached.

    Raised when:
    - The shared storage directory does not exist
    - The style file cannot be read or written

    Stores recover from this: defaults on read, no-op on write.
    """

    severity = ErrorSeverity.WARNING


class RenderError(BinaryClockError):
    """Renderer was given input it cannot draw.

    Raised when:
    - A digit matrix does not have 4 columns of 4 bits
    - The canvas is too small to hold the layout
    """

    pass
