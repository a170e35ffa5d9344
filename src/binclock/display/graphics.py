"""Pillow drawing primitives for binary plots."""

from PIL import Image, ImageDraw

from ..style.models import MarkerShape, RGBAColor
from .geometry import Point, Rect

RGBA = tuple[int, int, int, int]


def draw_polyline(
    draw: ImageDraw.ImageDraw,
    points: list[Point],
    color: RGBAColor,
    width: int = 1,
) -> None:
    """Draw connected line segments through points.

    Args:
        draw: Target ImageDraw
        points: Points in drawing order
        color: Line color
        width: Line width in pixels
    """
    if len(points) < 2:
        return
    draw.line(
        [(round(x), round(y)) for x, y in points],
        fill=color.to_tuple(),
        width=max(1, width),
        joint="curve",
    )


def draw_marker(
    draw: ImageDraw.ImageDraw,
    box: Rect,
    color: RGBAColor,
    shape: MarkerShape = MarkerShape.CIRCLE,
) -> None:
    """Draw a filled circle or square marker in box."""
    if shape is MarkerShape.SQUARE:
        draw.rectangle(box.to_box(), fill=color.to_tuple())
    else:
        draw.ellipse(box.to_box(), fill=color.to_tuple())


def draw_dot(
    draw: ImageDraw.ImageDraw,
    box: Rect,
    color: RGBAColor,
    filled: bool,
    outline_width: int = 1,
) -> None:
    """Draw a dot: filled for a 1 bit, outline only for a 0 bit."""
    draw.ellipse(
        box.to_box(),
        fill=color.to_tuple() if filled else None,
        outline=color.to_tuple(),
        width=max(1, outline_width),
    )


def draw_bar(
    draw: ImageDraw.ImageDraw,
    box: Rect,
    color: RGBAColor,
    corner_radius: int = 0,
) -> None:
    """Draw a filled bar, rounded when corner_radius is positive."""
    if box.width <= 0 or box.height <= 0:
        return
    if corner_radius > 0:
        draw.rounded_rectangle(box.to_box(), radius=corner_radius, fill=color.to_tuple())
    else:
        draw.rectangle(box.to_box(), fill=color.to_tuple())


def apply_rounded_corners(image: Image.Image, radius: int) -> Image.Image:
    """Return a copy of image with transparent rounded corners."""
    if radius <= 0:
        return image
    rounded = image.convert("RGBA")
    mask = Image.new("L", rounded.size, 0)
    ImageDraw.Draw(mask).rounded_rectangle(
        (0, 0, rounded.width - 1, rounded.height - 1), radius=radius, fill=255
    )
    alpha = rounded.getchannel("A")
    rounded.putalpha(Image.composite(alpha, mask, mask))
    return rounded
