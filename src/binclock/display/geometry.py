"""Pure layout math for binary digit plots.

Maps digit columns and bounding rectangles to points and rectangles.
Coordinates use the image convention: origin top-left, y grows down,
so a 1 bit is plotted near the top of its row.
"""

from dataclasses import dataclass

from ..converter import BITS_PER_DIGIT, DigitColumn
from ..style.models import BarStyle

Point = tuple[float, float]


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def inset(self, amount: float) -> "Rect":
        """Shrink by amount on every side, never below zero size."""
        return Rect(
            self.x + amount,
            self.y + amount,
            max(0.0, self.width - 2 * amount),
            max(0.0, self.height - 2 * amount),
        )

    def to_box(self) -> tuple[int, int, int, int]:
        """Integer (x0, y0, x1, y1) box for Pillow drawing calls."""
        x0, y0 = round(self.x), round(self.y)
        return (x0, y0, max(x0, round(self.right)), max(y0, round(self.bottom)))


def row_rects(bounds: Rect, count: int, spacing: float, padding: float = 0.0) -> list[Rect]:
    """Split bounds into `count` equal rows stacked top to bottom."""
    if count <= 0:
        return []
    inner = bounds.inset(padding)
    height = max(0.0, (inner.height - spacing * (count - 1)) / count)
    return [
        Rect(inner.x, inner.y + i * (height + spacing), inner.width, height)
        for i in range(count)
    ]


def column_rects(bounds: Rect, count: int, spacing: float, padding: float = 0.0) -> list[Rect]:
    """Split bounds into `count` equal columns laid out left to right."""
    if count <= 0:
        return []
    inner = bounds.inset(padding)
    width = max(0.0, (inner.width - spacing * (count - 1)) / count)
    return [
        Rect(inner.x + i * (width + spacing), inner.y, width, inner.height)
        for i in range(count)
    ]


def line_points(
    digits: DigitColumn,
    rect: Rect,
    amplitude_percent: float,
    horizontal_padding_percent: float = 0.0,
) -> list[Point]:
    """Points of the line plot for one digit column.

    Args:
        digits: Four bits, most significant first
        rect: Row to plot in
        amplitude_percent: Vertical excursion as fraction of row height
        horizontal_padding_percent: Inset fraction on each side

    Returns:
        Four (x, y) points, left to right
    """
    y_amplitude = rect.height * amplitude_percent
    y_offset = (rect.height - y_amplitude) / 2
    x_offset = rect.width * horizontal_padding_percent
    effective_width = rect.width * (1.0 - 2.0 * horizontal_padding_percent)
    x_step = effective_width / (BITS_PER_DIGIT - 1)

    return [
        (
            rect.x + x_offset + i * x_step,
            rect.y + y_offset + (1 - bit) * y_amplitude,
        )
        for i, bit in enumerate(digits)
    ]


def marker_boxes(points: list[Point], size: float) -> list[Rect]:
    """Square boxes of side `size` centered on each point."""
    half = size / 2
    return [Rect(x - half, y - half, size, size) for x, y in points]


def dot_cells(digits: DigitColumn, rect: Rect, marker_size: float) -> list[tuple[Rect, bool]]:
    """Dot boxes for one digit column stacked vertically.

    Dots have a diameter of twice the marker size and are separated by half
    the marker size. The stack is centered in rect.

    Returns:
        (box, filled) per bit, top to bottom
    """
    diameter = marker_size * 2
    gap = marker_size / 2
    total = diameter * len(digits) + gap * (len(digits) - 1)
    x = rect.x + (rect.width - diameter) / 2
    y = rect.y + (rect.height - total) / 2
    return [
        (Rect(x, y + i * (diameter + gap), diameter, diameter), bit == 1)
        for i, bit in enumerate(digits)
    ]


def bar_rects(
    digits: DigitColumn,
    rect: Rect,
    bar: BarStyle,
    horizontal_padding_percent: float = 0.0,
) -> list[Rect]:
    """Bottom-aligned bars for one digit column.

    A 1 bit is drawn at the maximum height, a 0 bit at the minimum height.
    """
    x_offset = rect.width * horizontal_padding_percent
    effective_width = rect.width * (1.0 - 2.0 * horizontal_padding_percent)
    count = len(digits)
    width = max(0.0, (effective_width - bar.spacing * (count - 1)) / count)

    bars = []
    for i, bit in enumerate(digits):
        percent = bar.max_height_percent if bit else bar.min_height_percent
        height = rect.height * percent
        bars.append(
            Rect(
                rect.x + x_offset + i * (width + bar.spacing),
                rect.bottom - height,
                width,
                height,
            )
        )
    return bars
