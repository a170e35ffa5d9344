"""Style models for the binary clock.

Defines the persisted rendering record (StyleConfig) along with the
enumerations and value types it is built from.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DisplaySize(str, Enum):
    """Widget footprint class, used as the style partition key."""

    COMPACT = "systemSmall"
    STANDARD = "systemMedium"
    EXPANDED = "systemLarge"

    @classmethod
    def parse(cls, value: "str | DisplaySize") -> "DisplaySize":
        """Accept an enum, its token, or a short name (small/medium/large)."""
        if isinstance(value, cls):
            return value
        aliases = {
            "small": cls.COMPACT,
            "compact": cls.COMPACT,
            "medium": cls.STANDARD,
            "standard": cls.STANDARD,
            "large": cls.EXPANDED,
            "expanded": cls.EXPANDED,
        }
        lowered = value.lower()
        if lowered in aliases:
            return aliases[lowered]
        return cls(value)


class RepresentationMode(str, Enum):
    """Rendering strategy for a digit matrix."""

    LINE_GRAPH = "lineGraph"
    DOTS = "dots"
    BARS = "bars"


class MarkerShape(str, Enum):
    """Marker drawn at each point of a line graph."""

    CIRCLE = "circle"
    SQUARE = "square"


class RGBAColor(BaseModel):
    """Color with four channels normalized to 0.0-1.0."""

    model_config = ConfigDict(frozen=True)

    red: float = Field(..., ge=0.0, le=1.0)
    green: float = Field(..., ge=0.0, le=1.0)
    blue: float = Field(..., ge=0.0, le=1.0)
    alpha: float = Field(1.0, ge=0.0, le=1.0)

    @classmethod
    def from_hex(cls, hex_color: str) -> "RGBAColor":
        """Create color from hex string ('#FF5500', 'FF5500' or '#FF550080')."""
        hex_color = hex_color.lstrip("#")
        if len(hex_color) in (3, 4):
            hex_color = "".join(c * 2 for c in hex_color)
        if len(hex_color) not in (6, 8):
            raise ValueError(f"Invalid hex color: #{hex_color}")
        channels = [int(hex_color[i : i + 2], 16) / 255 for i in range(0, len(hex_color), 2)]
        return cls(red=channels[0], green=channels[1], blue=channels[2],
                   alpha=channels[3] if len(channels) == 4 else 1.0)

    def to_tuple(self) -> tuple[int, int, int, int]:
        """Convert to an 8-bit RGBA tuple."""
        return (
            round(self.red * 255),
            round(self.green * 255),
            round(self.blue * 255),
            round(self.alpha * 255),
        )

    def to_hex(self) -> str:
        """Convert to hex string, including alpha only when not opaque."""
        r, g, b, a = self.to_tuple()
        if a == 255:
            return f"#{r:02x}{g:02x}{b:02x}"
        return f"#{r:02x}{g:02x}{b:02x}{a:02x}"


class Colors:
    """Named colors used by the default styles (iOS system palette)."""

    BLACK = RGBAColor(red=0.0, green=0.0, blue=0.0)
    WHITE = RGBAColor(red=1.0, green=1.0, blue=1.0)
    CLEAR = RGBAColor(red=0.0, green=0.0, blue=0.0, alpha=0.0)
    BLUE = RGBAColor(red=0.0, green=0.478, blue=1.0)
    CYAN = RGBAColor(red=0.196, green=0.678, blue=0.902)
    YELLOW = RGBAColor(red=1.0, green=0.8, blue=0.0)
    ORANGE = RGBAColor(red=1.0, green=0.584, blue=0.0)


class BarStyle(BaseModel):
    """Bar-chart-only settings, present as a group or not at all.

    Attributes:
        max_height_percent: Bar height for a 1 bit, fraction of row height
        min_height_percent: Bar height for a 0 bit, fraction of row height
        corner_radius: Rounded corner radius in points
        spacing: Gap between neighbouring bars in points
    """

    model_config = ConfigDict(frozen=True)

    max_height_percent: float = Field(0.9, ge=0.0, le=1.0)
    min_height_percent: float = Field(0.25, ge=0.0, le=1.0)
    corner_radius: float = Field(4.0, ge=0.0)
    spacing: float = Field(3.0, ge=0.0)


class StyleConfig(BaseModel):
    """Rendering parameters for one display size.

    Instances are immutable; edits produce new copies via model_copy or
    StyleEditor. Field aliases are the camelCase names used in the
    persisted record.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    background_color: RGBAColor
    line_colors: tuple[RGBAColor, ...] = Field(..., min_length=4, max_length=4)
    representation: RepresentationMode = RepresentationMode.LINE_GRAPH
    line_width: float = Field(..., gt=0.0)
    marker_size: float = Field(..., gt=0.0)
    line_amplitude_percent: float = Field(..., ge=0.0, le=1.0)
    vertical_spacing: float = Field(..., ge=0.0)
    widget_padding: float = Field(..., ge=0.0)
    horizontal_padding_percent: float = Field(..., ge=0.0, lt=0.5)
    marker_shape: MarkerShape = MarkerShape.CIRCLE
    bar: BarStyle | None = None

    def line_color(self, index: int) -> RGBAColor:
        """Color for layer `index`, wrapping around the four line colors."""
        return self.line_colors[index % len(self.line_colors)]

    @property
    def bar_max_height_percent(self) -> float | None:
        return self.bar.max_height_percent if self.bar else None

    @property
    def bar_min_height_percent(self) -> float | None:
        return self.bar.min_height_percent if self.bar else None

    @property
    def bar_corner_radius(self) -> float | None:
        return self.bar.corner_radius if self.bar else None

    @property
    def bar_spacing(self) -> float | None:
        return self.bar.spacing if self.bar else None
