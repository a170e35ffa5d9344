"""Pillow renderer for binary time plots.

Consumes digit matrices and a StyleConfig and produces an RGBA image.
Style dimensions are in points; the renderer multiplies them by its
scale to get pixels.
"""

import logging

from PIL import Image, ImageDraw

from ..converter import DigitMatrix, is_valid_matrix
from ..core.errors import RenderError
from ..style.defaults import DEFAULT_BAR_STYLE, ensure_bar_defaults
from ..style.models import BarStyle, DisplaySize, RepresentationMode, StyleConfig
from . import geometry
from .geometry import Rect
from .graphics import draw_bar, draw_dot, draw_marker, draw_polyline

logger = logging.getLogger(__name__)

# Nominal widget footprints in points
FOOTPRINTS: dict[DisplaySize, tuple[int, int]] = {
    DisplaySize.COMPACT: (158, 158),
    DisplaySize.STANDARD: (338, 158),
    DisplaySize.EXPANDED: (338, 354),
}


def footprint(size: DisplaySize) -> tuple[int, int]:
    """Nominal (width, height) in points for a display size."""
    return FOOTPRINTS[DisplaySize(size)]


class BinaryRenderer:
    """Draws digit matrices in the style's representation mode.

    Line graph and bar chart stack one row per layer (time layers first,
    then date layers). Dots place one vertical column per layer. Layer i
    is drawn in style.line_color(i).
    """

    def __init__(self, width: int, height: int, scale: int = 1) -> None:
        """Initialize renderer with target dimensions.

        Args:
            width: Canvas width in points
            height: Canvas height in points
            scale: Pixels per point
        """
        if width <= 0 or height <= 0 or scale <= 0:
            raise RenderError(
                "Canvas dimensions must be positive",
                details={"width": width, "height": height, "scale": scale},
            )
        self.width = width
        self.height = height
        self.scale = scale

    @classmethod
    def for_size(cls, size: DisplaySize, scale: int = 1) -> "BinaryRenderer":
        width, height = footprint(size)
        return cls(width, height, scale)

    @property
    def pixel_size(self) -> tuple[int, int]:
        return (self.width * self.scale, self.height * self.scale)

    def render(
        self,
        time_layers: DigitMatrix,
        style: StyleConfig,
        date_layers: DigitMatrix | None = None,
    ) -> Image.Image:
        """Render matrices into a new RGBA image.

        Args:
            time_layers: H1 H2 M1 M2 matrix
            style: Rendering parameters
            date_layers: Optional D1 D2 M1 M2 matrix drawn after the time

        Returns:
            Image of pixel_size

        Raises:
            RenderError: If a matrix is not 4 columns of 4 bits
        """
        layers = list(time_layers)
        matrices = [time_layers] if date_layers is None else [time_layers, date_layers]
        for matrix in matrices:
            if not is_valid_matrix(matrix):
                raise RenderError("Digit matrix must be 4 columns of 4 bits",
                                  details={"matrix": matrix})
        if date_layers is not None:
            layers.extend(date_layers)

        image = Image.new("RGBA", self.pixel_size, style.background_color.to_tuple())
        draw = ImageDraw.Draw(image)
        bounds = Rect(0, 0, *self.pixel_size)

        if style.representation is RepresentationMode.DOTS:
            self._draw_dots(draw, bounds, layers, style)
        elif style.representation is RepresentationMode.BARS:
            self._draw_bars(draw, bounds, layers, style)
        else:
            self._draw_line_graph(draw, bounds, layers, style)

        return image

    def _draw_line_graph(
        self,
        draw: ImageDraw.ImageDraw,
        bounds: Rect,
        layers: DigitMatrix,
        style: StyleConfig,
    ) -> None:
        s = self.scale
        rows = geometry.row_rects(
            bounds, len(layers), style.vertical_spacing * s, style.widget_padding * s
        )
        for index, (digits, row) in enumerate(zip(layers, rows)):
            color = style.line_color(index)
            points = geometry.line_points(
                digits, row, style.line_amplitude_percent, style.horizontal_padding_percent
            )
            draw_polyline(draw, points, color, width=round(style.line_width * s))
            for box in geometry.marker_boxes(points, style.marker_size * s):
                draw_marker(draw, box, color, style.marker_shape)

    def _draw_dots(
        self,
        draw: ImageDraw.ImageDraw,
        bounds: Rect,
        layers: DigitMatrix,
        style: StyleConfig,
    ) -> None:
        s = self.scale
        columns = geometry.column_rects(
            bounds, len(layers), style.vertical_spacing * s, style.widget_padding * s
        )
        outline = round(style.line_width * s / 2)
        for index, (digits, column) in enumerate(zip(layers, columns)):
            color = style.line_color(index)
            for box, filled in geometry.dot_cells(digits, column, style.marker_size * s):
                draw_dot(draw, box, color, filled, outline_width=outline)

    def _draw_bars(
        self,
        draw: ImageDraw.ImageDraw,
        bounds: Rect,
        layers: DigitMatrix,
        style: StyleConfig,
    ) -> None:
        s = self.scale
        bar = ensure_bar_defaults(style).bar or DEFAULT_BAR_STYLE
        scaled = BarStyle(
            max_height_percent=bar.max_height_percent,
            min_height_percent=bar.min_height_percent,
            corner_radius=bar.corner_radius * s,
            spacing=bar.spacing * s,
        )
        rows = geometry.row_rects(
            bounds, len(layers), style.vertical_spacing * s, style.widget_padding * s
        )
        for index, (digits, row) in enumerate(zip(layers, rows)):
            color = style.line_color(index)
            for box in geometry.bar_rects(
                digits, row, scaled, style.horizontal_padding_percent
            ):
                draw_bar(draw, box, color, corner_radius=round(scaled.corner_radius))
