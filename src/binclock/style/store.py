"""Style persistence keyed by display size.

Stores never let a persistence problem reach the rendering path: reads
fall back to the default style and failed writes are logged and dropped.
"""

import copy
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable

import yaml

from ..core.config import StoreConfig
from ..core.errors import StoreUnavailableError
from .codec import decode_style_or_default, encode_style
from .defaults import default_style, ensure_bar_defaults
from .models import DisplaySize, StyleConfig

logger = logging.getLogger(__name__)

DEFAULT_KEY_PREFIX = "widgetStyle_"

StyleListener = Callable[[DisplaySize], None]


def style_key(size: DisplaySize, prefix: str = DEFAULT_KEY_PREFIX) -> str:
    """Storage key for a display size, e.g. 'widgetStyle_systemSmall'."""
    return f"{prefix}{DisplaySize(size).value}"


class StyleStore(ABC):
    """Base class for style persistence backends.

    Subclasses implement raw record access; this class handles key
    derivation, decoding with fallback, bar defaulting and change
    notification.

    Thread Safety:
        - Record access is serialized with an RLock
        - Listeners are called on the saving thread
    """

    def __init__(self, key_prefix: str = DEFAULT_KEY_PREFIX) -> None:
        self._key_prefix = key_prefix
        self._lock = threading.RLock()
        self._listeners: list[StyleListener] = []

    def key(self, size: DisplaySize) -> str:
        return style_key(size, self._key_prefix)

    @abstractmethod
    def _read(self, key: str) -> Any | None:
        """Return the raw record for key, or None if nothing is stored.

        Raises:
            StoreUnavailableError: If the backend cannot be reached
        """

    @abstractmethod
    def _write(self, key: str, payload: dict[str, Any]) -> None:
        """Store the raw record for key.

        Raises:
            StoreUnavailableError: If the backend cannot be reached
        """

    @abstractmethod
    def _delete(self, key: str) -> None:
        """Remove the record for key if present.

        Raises:
            StoreUnavailableError: If the backend cannot be reached
        """

    def load(self, size: DisplaySize) -> StyleConfig:
        """Load the style for a display size.

        Never raises: missing, malformed or unreachable records resolve to
        the default style for the size.
        """
        size = DisplaySize(size)
        key = self.key(size)
        try:
            with self._lock:
                payload = self._read(key)
        except StoreUnavailableError as e:
            logger.warning(
                "Style store unavailable, using default: %s", e, extra={"size": size.value}
            )
            return default_style(size)

        if payload is None:
            logger.debug("No saved style, using default", extra={"size": size.value})
            return default_style(size)

        return ensure_bar_defaults(decode_style_or_default(payload, size))

    def save(self, size: DisplaySize, style: StyleConfig) -> bool:
        """Persist the style for a display size and notify listeners.

        Returns:
            True if the style was written, False if the store was unavailable
        """
        size = DisplaySize(size)
        try:
            with self._lock:
                self._write(self.key(size), encode_style(style))
        except StoreUnavailableError as e:
            logger.warning("Style store unavailable, not saving: %s", e, extra={"size": size.value})
            return False

        logger.debug("Saved style", extra={"size": size.value})
        self._notify(size)
        return True

    def reset(self, size: DisplaySize) -> bool:
        """Forget the saved style so the default applies again."""
        size = DisplaySize(size)
        try:
            with self._lock:
                self._delete(self.key(size))
        except StoreUnavailableError as e:
            logger.warning(
                "Style store unavailable, not resetting: %s", e, extra={"size": size.value}
            )
            return False

        self._notify(size)
        return True

    def subscribe(self, listener: StyleListener) -> Callable[[], None]:
        """Register a change listener.

        Returns:
            Function that removes the listener again
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, size: DisplaySize) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(size)
            except Exception:
                logger.exception("Style listener failed", extra={"size": size.value})


class MemoryStyleStore(StyleStore):
    """In-process store holding encoded records in a dict."""

    def __init__(self, key_prefix: str = DEFAULT_KEY_PREFIX) -> None:
        super().__init__(key_prefix)
        self._records: dict[str, dict[str, Any]] = {}

    def _read(self, key: str) -> Any | None:
        record = self._records.get(key)
        return copy.deepcopy(record) if record is not None else None

    def _write(self, key: str, payload: dict[str, Any]) -> None:
        self._records[key] = copy.deepcopy(payload)

    def _delete(self, key: str) -> None:
        self._records.pop(key, None)

    def put_raw(self, key: str, payload: Any) -> None:
        """Store an arbitrary record as-is (for migrations and tests)."""
        with self._lock:
            self._records[key] = payload


class YamlStyleStore(StyleStore):
    """Styles kept in a single YAML document mapping key -> record.

    The directory holding the file is the shared namespace. If it does not
    exist the store reports itself unavailable unless create_dirs is set.

    Usage:
        store = YamlStyleStore("~/.config/binclock/styles.yaml")
        style = store.load(DisplaySize.COMPACT)
        store.save(DisplaySize.COMPACT, style)
    """

    def __init__(
        self,
        path: str | Path,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        create_dirs: bool = False,
    ) -> None:
        super().__init__(key_prefix)
        self._path = Path(path).expanduser()
        if create_dirs:
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                logger.warning("Could not create style directory %s: %s", self._path.parent, e)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, Any]:
        if not self._path.parent.is_dir():
            raise StoreUnavailableError(
                "Style directory does not exist", details={"path": str(self._path.parent)}
            )
        if not self._path.exists():
            return {}

        try:
            with open(self._path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            logger.warning("Style file %s is corrupt, ignoring it: %s", self._path, e)
            return {}
        except OSError as e:
            raise StoreUnavailableError(
                "Cannot read style file", details={"path": str(self._path)}, cause=e
            ) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning("Style file %s is not a mapping, ignoring it", self._path)
            return {}
        return data

    def _write_all(self, data: dict[str, Any]) -> None:
        if not self._path.parent.is_dir():
            raise StoreUnavailableError(
                "Style directory does not exist", details={"path": str(self._path.parent)}
            )
        try:
            # Write atomically via temp file
            temp_path = self._path.with_suffix(".tmp")
            with open(temp_path, "w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=True)
            temp_path.replace(self._path)
        except OSError as e:
            raise StoreUnavailableError(
                "Cannot write style file", details={"path": str(self._path)}, cause=e
            ) from e

    def _read(self, key: str) -> Any | None:
        return self._read_all().get(key)

    def _write(self, key: str, payload: dict[str, Any]) -> None:
        data = self._read_all()
        data[key] = payload
        self._write_all(data)

    def _delete(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)


def create_store(config: StoreConfig, create_dirs: bool = True) -> StyleStore:
    """Build the store described by the store config section."""
    if config.path is None:
        logger.info("No style path configured, keeping styles in memory")
        return MemoryStyleStore(config.key_prefix)
    return YamlStyleStore(config.path, config.key_prefix, create_dirs=create_dirs)
