"""Logging setup for the binary clock.

Console lines go to stderr so command output on stdout stays parseable.
Records about one widget carry a ``size`` extra (the display size token,
e.g. ``systemSmall``); both formatters surface it.
"""

import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .config import LoggingConfig

# Attributes every LogRecord has; anything else came in via ``extra``
_STANDARD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
RESET = "\033[0m"


def record_extras(record: logging.LogRecord) -> dict[str, Any]:
    """Fields passed via ``extra={...}`` on the logging call."""
    return {k: v for k, v in record.__dict__.items() if k not in _STANDARD_ATTRS}


class JSONFormatter(logging.Formatter):
    """One JSON object per line, used for log files."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "source": f"{record.module}:{record.lineno}",
            "message": record.getMessage(),
        }
        entry.update(record_extras(record))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """``HH:MM:SS LEVEL [module size] message``, optionally colored."""

    def __init__(self, use_colors: bool = False) -> None:
        super().__init__(datefmt="%H:%M:%S")
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        level = f"{record.levelname:8}"
        if self.use_colors and record.levelname in LEVEL_COLORS:
            level = f"{LEVEL_COLORS[record.levelname]}{level}{RESET}"

        source = record.name.rsplit(".", 1)[-1]
        size = getattr(record, "size", None)
        if size:
            source = f"{source} {size}"

        line = f"{self.formatTime(record, self.datefmt)} {level} [{source}] {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(config: LoggingConfig | None = None, debug: bool = False) -> None:
    """Install console and optional rotating file handlers on the root logger.

    Args:
        config: Logging section of the app config (defaults if None)
        debug: Force DEBUG level regardless of the configured level
    """
    config = config or LoggingConfig()
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if debug else getattr(logging, config.level.upper(), logging.INFO))
    root.handlers.clear()

    console = logging.StreamHandler(sys.stderr)
    if config.format == "structured":
        console.setFormatter(JSONFormatter())
    else:
        console.setFormatter(ConsoleFormatter(use_colors=sys.stderr.isatty()))
    root.addHandler(console)

    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=config.max_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(JSONFormatter())
        root.addHandler(file_handler)

    # PNG chunk tracing is noise at DEBUG
    logging.getLogger("PIL").setLevel(logging.WARNING)
