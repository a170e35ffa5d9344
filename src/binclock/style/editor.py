"""Editing surface model for one display size's style.

The editor owns the in-memory copy; every accepted change is saved to
the store, which notifies listeners (widget timelines) to reload.
"""

import logging
from typing import Any

from pydantic import ValidationError

from ..core.errors import ConfigurationError
from .defaults import default_style, ensure_bar_defaults
from .models import BarStyle, DisplaySize, RepresentationMode, RGBAColor, StyleConfig
from .store import StyleStore

logger = logging.getLogger(__name__)


class StyleEditor:
    """Single writer for the style of one display size.

    Usage:
        editor = StyleEditor(store, DisplaySize.STANDARD)
        editor.update(representation=RepresentationMode.BARS, line_width=4.0)
        editor.update_bar(spacing=5.0)
    """

    def __init__(self, store: StyleStore, size: DisplaySize) -> None:
        self._store = store
        self._size = DisplaySize(size)
        self._style = store.load(self._size)

    @property
    def size(self) -> DisplaySize:
        return self._size

    @property
    def style(self) -> StyleConfig:
        return self._style

    def _validated(self, data: dict[str, Any]) -> StyleConfig:
        try:
            return StyleConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid style edit",
                details={"size": self._size.value, "errors": e.error_count()},
                cause=e,
            ) from e

    def _commit(self, style: StyleConfig) -> StyleConfig:
        if style == self._style:
            return self._style
        self._style = style
        self._store.save(self._size, style)
        return style

    def update(self, **fields: Any) -> StyleConfig:
        """Apply field edits, validate, and save.

        Switching into bar-chart fills in default bar fields; switching
        out of it drops them.

        Args:
            **fields: StyleConfig field names (snake_case) and new values

        Returns:
            The new style

        Raises:
            ConfigurationError: If a field is unknown or a value is invalid
        """
        unknown = set(fields) - set(StyleConfig.model_fields)
        if unknown:
            raise ConfigurationError(
                "Unknown style field", details={"fields": ", ".join(sorted(unknown))}
            )

        data = self._style.model_dump()
        data.update(fields)
        style = self._validated(data)

        if style.representation is not RepresentationMode.BARS:
            # Bar fields only exist in bar-chart records
            if style.bar is not None:
                style = style.model_copy(update={"bar": None})
        elif self._style.representation is not RepresentationMode.BARS:
            logger.info("Switched to bar chart", extra={"size": self._size.value})
        style = ensure_bar_defaults(style)
        return self._commit(style)

    def set_line_color(self, index: int, color: RGBAColor) -> StyleConfig:
        """Replace one line color; the index wraps around the four slots."""
        colors = list(self._style.line_colors)
        colors[index % len(colors)] = color
        return self.update(line_colors=tuple(colors))

    def update_bar(self, **fields: Any) -> StyleConfig:
        """Edit bar-chart fields.

        Raises:
            ConfigurationError: If the style is not in bar-chart mode or a
                value is invalid
        """
        if self._style.representation is not RepresentationMode.BARS:
            raise ConfigurationError(
                "Bar settings only apply in bar-chart mode",
                details={"representation": self._style.representation.value},
            )
        current = self._style.bar or BarStyle()
        data = current.model_dump()
        data.update(fields)
        try:
            bar = BarStyle.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid bar setting", details={"errors": e.error_count()}, cause=e
            ) from e
        return self.update(bar=bar)

    def reload(self) -> StyleConfig:
        """Discard the in-memory copy and read the stored style again."""
        self._style = self._store.load(self._size)
        return self._style

    def reset(self) -> StyleConfig:
        """Restore the default style for this size and save it."""
        self._style = default_style(self._size)
        self._store.save(self._size, self._style)
        return self._style
