"""Configuration management with Pydantic validation.

Provides type-safe configuration with:
- Pydantic models for validation
- YAML file persistence
- Thread-safe updates
- Defaults suitable for a desktop preview
"""

import logging
import threading
from pathlib import Path
from typing import Any, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("~/.config/binclock/config.yaml")
DEFAULT_STYLE_PATH = "~/.config/binclock/styles.yaml"


# =============================================================================
# Configuration Models
# =============================================================================


class ClockConfig(BaseModel):
    """Clock source settings."""

    timezone: str | None = Field(None, description="IANA zone name (None=host local)")
    show_date: bool = Field(True, description="Render date layers below time")
    live_interval: float = Field(
        1.0, ge=0.1, le=60.0, description="Live preview tick in seconds"
    )
    widget_interval: float = Field(
        60.0, ge=1.0, le=3600.0, description="Widget refresh interval in seconds"
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str | None) -> str | None:
        """Validate the zone name resolves in the tz database."""
        if v is None:
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    def zone(self) -> ZoneInfo | None:
        """Resolve the configured zone (None means host local)."""
        return ZoneInfo(self.timezone) if self.timezone else None


class StoreConfig(BaseModel):
    """Style persistence settings."""

    path: str | None = Field(
        DEFAULT_STYLE_PATH, description="YAML style file (None=in-memory)"
    )
    key_prefix: str = Field(
        "widgetStyle_", min_length=1, description="Namespace prefix for style keys"
    )


class RenderConfig(BaseModel):
    """Image rendering settings."""

    scale: int = Field(2, ge=1, le=4, description="Pixel density multiplier")
    corner_radius: int = Field(16, ge=0, le=64, description="Preview frame corner radius")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field("INFO", description="Log level")
    format: Literal["simple", "structured"] = Field("simple", description="Console format")
    file: str | None = Field(None, description="Log file path")
    max_size_mb: int = Field(10, ge=1, description="Max log file size")
    backup_count: int = Field(3, ge=0, description="Number of backup files")


class Config(BaseModel):
    """Root configuration model."""

    clock: ClockConfig = Field(default_factory=ClockConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# =============================================================================
# Configuration Manager
# =============================================================================


class ConfigManager:
    """Thread-safe configuration manager with file persistence.

    Provides:
    - Pydantic validation on load/save
    - Thread-safe read/write operations
    - Automatic persistence to YAML

    Usage:
        config_manager = ConfigManager("/path/to/config.yaml")
        config = config_manager.get()
        config_manager.update_section("clock", timezone="Europe/Paris")
    """

    _instance: "ConfigManager | None" = None
    _instance_lock: threading.Lock = threading.Lock()

    def __init__(self, config_path: str | Path) -> None:
        self._config_path = Path(config_path).expanduser()
        self._config: Config
        self._lock = threading.RLock()
        self._load()

    @classmethod
    def get_instance(cls, config_path: str | Path | None = None) -> "ConfigManager":
        """Get singleton instance.

        Args:
            config_path: Path to config file (only used on first call)

        Returns:
            ConfigManager singleton instance
        """
        with cls._instance_lock:
            if cls._instance is None:
                if config_path is None:
                    config_path = DEFAULT_CONFIG_PATH
                cls._instance = cls(config_path)
            return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset singleton instance (for testing)."""
        with cls._instance_lock:
            cls._instance = None

    @property
    def path(self) -> Path:
        return self._config_path

    def _load(self) -> None:
        """Load and validate configuration from file."""
        if self._config_path.exists():
            try:
                with open(self._config_path) as f:
                    data = yaml.safe_load(f) or {}
                self._config = Config.model_validate(data)
                logger.info("Loaded config from %s", self._config_path)
            except Exception as e:
                logger.warning("Failed to load config, using defaults: %s", e)
                self._config = Config()
        else:
            logger.info("Config file not found, using defaults")
            self._config = Config()
            try:
                self._save()
            except OSError:
                # Read-only home directories still get a working config
                pass

    def _save(self) -> None:
        """Persist configuration to file."""
        try:
            self._config_path.parent.mkdir(parents=True, exist_ok=True)
            data = self._config.model_dump(mode="json")

            # Write atomically via temp file
            temp_path = self._config_path.with_suffix(".tmp")
            with open(temp_path, "w") as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
            temp_path.replace(self._config_path)

            logger.debug("Saved config to %s", self._config_path)
        except OSError as e:
            logger.error("Failed to save config: %s", e)
            raise

    def _apply(self, data: dict[str, Any]) -> None:
        try:
            self._config = Config.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid configuration", details={"errors": e.error_count()}, cause=e
            ) from e
        self._save()

    def get(self) -> Config:
        """Get current configuration (thread-safe copy).

        Returns:
            Deep copy of current configuration
        """
        with self._lock:
            return self._config.model_copy(deep=True)

    def update_section(self, section: str, **kwargs: Any) -> None:
        """Update fields of a single config section.

        Args:
            section: Section name (clock, store, render, logging)
            **kwargs: Fields to update

        Raises:
            ConfigurationError: If the section or a field is unknown, or values
                are invalid
        """
        with self._lock:
            data = self._config.model_dump()
            if section not in data:
                raise ConfigurationError(f"Unknown config section: {section}")
            unknown = set(kwargs) - set(data[section])
            if unknown:
                raise ConfigurationError(
                    f"Unknown {section} setting", details={"fields": ", ".join(sorted(unknown))}
                )
            data[section].update(kwargs)
            self._apply(data)

