"""Default styles and lazy resolution of mode-specific fields."""

import logging

from .models import (
    BarStyle,
    Colors,
    DisplaySize,
    MarkerShape,
    RepresentationMode,
    StyleConfig,
)

logger = logging.getLogger(__name__)

# The only size-dependent default
VERTICAL_SPACING = {
    DisplaySize.COMPACT: 5.0,
    DisplaySize.STANDARD: 6.0,
    DisplaySize.EXPANDED: 8.0,
}

DEFAULT_BAR_STYLE = BarStyle(
    max_height_percent=0.9,
    min_height_percent=0.25,
    corner_radius=4.0,
    spacing=3.0,
)


def default_style(size: DisplaySize) -> StyleConfig:
    """Baseline style for a display size.

    Args:
        size: Widget footprint class

    Returns:
        Line-graph style with no bar fields
    """
    return StyleConfig(
        background_color=Colors.BLACK,
        line_colors=(Colors.BLUE, Colors.CYAN, Colors.YELLOW, Colors.ORANGE),
        representation=RepresentationMode.LINE_GRAPH,
        line_width=3.0,
        marker_size=5.0,
        line_amplitude_percent=1.0,
        vertical_spacing=VERTICAL_SPACING[DisplaySize(size)],
        widget_padding=12.0,
        horizontal_padding_percent=0.1,
        marker_shape=MarkerShape.CIRCLE,
        bar=None,
    )


def ensure_bar_defaults(style: StyleConfig) -> StyleConfig:
    """Populate bar fields when the style is in bar-chart mode without them.

    Returns the input unchanged in every other case, so applying it twice
    is the same as applying it once.
    """
    if style.representation is RepresentationMode.BARS and style.bar is None:
        logger.debug("Populating bar defaults")
        return style.model_copy(update={"bar": DEFAULT_BAR_STYLE})
    return style
