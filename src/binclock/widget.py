"""Widget timeline entries and provider.

A timeline entry bundles an instant with its binary layers and the
resolved style. Its accessibility label is decoded from the same layers
that are drawn, so the spoken text always matches the plot.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, tzinfo

from .converter import (
    DigitMatrix,
    date_to_digit_matrix,
    digit_to_binary,
    matrix_to_digits,
    time_to_digit_matrix,
)
from .style.models import DisplaySize, StyleConfig
from .style.store import StyleStore

logger = logging.getLogger(__name__)

REFRESH_INTERVAL = timedelta(minutes=1)

# 10:08, the classic watch-face pose
PLACEHOLDER_DIGITS = (1, 0, 0, 8)


def accessibility_label(time_layers: DigitMatrix, date_layers: DigitMatrix | None = None) -> str:
    """Human-readable label for binary layers.

    Args:
        time_layers: H1 H2 M1 M2 matrix
        date_layers: Optional D1 D2 M1 M2 matrix

    Returns:
        "Time H:MM", followed by ", Date D/M" when date layers are given
    """
    h1, h2, m1, m2 = matrix_to_digits(time_layers)
    label = f"Time {h1 * 10 + h2}:{m1}{m2}"
    if date_layers is not None:
        d1, d2, mo1, mo2 = matrix_to_digits(date_layers)
        label += f", Date {d1 * 10 + d2}/{mo1 * 10 + mo2}"
    return label


@dataclass(frozen=True)
class WidgetEntry:
    """One timeline entry.

    Attributes:
        date: Instant the entry represents
        time_layers: Binary layers for the time
        date_layers: Binary layers for the date, if shown
        style: Resolved style for the widget's display size
    """

    date: datetime
    time_layers: DigitMatrix
    style: StyleConfig
    date_layers: DigitMatrix | None = None

    @classmethod
    def at(
        cls,
        instant: datetime,
        style: StyleConfig,
        zone: tzinfo | str | None = None,
        show_date: bool = True,
    ) -> "WidgetEntry":
        """Build an entry by converting the instant."""
        return cls(
            date=instant,
            time_layers=time_to_digit_matrix(instant, zone),
            style=style,
            date_layers=date_to_digit_matrix(instant, zone) if show_date else None,
        )

    @property
    def accessibility_label(self) -> str:
        return accessibility_label(self.time_layers, self.date_layers)


@dataclass(frozen=True)
class Timeline:
    """Entries to show plus the instant to ask for the next timeline."""

    entries: list[WidgetEntry] = field(default_factory=list)
    refresh_at: datetime | None = None


class TimelineProvider:
    """Produces widget entries for one display size.

    Usage:
        provider = TimelineProvider(store, DisplaySize.COMPACT)
        timeline = provider.timeline(datetime.now())
    """

    def __init__(
        self,
        store: StyleStore,
        size: DisplaySize,
        zone: tzinfo | str | None = None,
        show_date: bool = True,
        refresh_interval: timedelta = REFRESH_INTERVAL,
    ) -> None:
        if refresh_interval <= timedelta(0):
            raise ValueError("Refresh interval must be positive")
        self._store = store
        self._size = DisplaySize(size)
        self._zone = zone
        self._show_date = show_date
        self._refresh_interval = refresh_interval

    @property
    def size(self) -> DisplaySize:
        return self._size

    @property
    def refresh_interval(self) -> timedelta:
        return self._refresh_interval

    def placeholder(self, now: datetime | None = None) -> WidgetEntry:
        """Sample entry showing 10:08 for widget galleries."""
        now = now or datetime.now()
        time_layers = [digit_to_binary(d) for d in PLACEHOLDER_DIGITS]
        date_layers = date_to_digit_matrix(now, self._zone) if self._show_date else None
        return WidgetEntry(
            date=now,
            time_layers=time_layers,
            style=self._store.load(self._size),
            date_layers=date_layers,
        )

    def snapshot(self, now: datetime | None = None) -> WidgetEntry:
        """Entry for the current instant."""
        now = now or datetime.now()
        return WidgetEntry.at(now, self._store.load(self._size), self._zone, self._show_date)

    def timeline(self, now: datetime | None = None) -> Timeline:
        """Single-entry timeline refreshing one interval later (default one minute)."""
        entry = self.snapshot(now)
        refresh_at = entry.date + self._refresh_interval
        logger.debug("Timeline refreshes at %s", refresh_at, extra={"size": self._size.value})
        return Timeline(entries=[entry], refresh_at=refresh_at)
