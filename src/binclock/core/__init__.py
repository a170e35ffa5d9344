"""Core infrastructure module.

Provides foundational components:
- Configuration management with validation
- Custom exception hierarchy
- Structured logging
"""

from .config import Config, ConfigManager
from .errors import (
    BinaryClockError,
    ConfigurationError,
    ErrorSeverity,
    InvalidDigitError,
    RenderError,
    StoreUnavailableError,
    StyleDecodeError,
)
from .logging import setup_logging

__all__ = [
    # Config
    "Config",
    "ConfigManager",
    # Errors
    "BinaryClockError",
    "ConfigurationError",
    "ErrorSeverity",
    "InvalidDigitError",
    "RenderError",
    "StoreUnavailableError",
    "StyleDecodeError",
    # Logging
    "setup_logging",
]
