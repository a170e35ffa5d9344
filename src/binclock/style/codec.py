"""Encoding and decoding of persisted style records.

The persisted shape is a flat mapping with camelCase keys. Colors are
``{red, green, blue, alpha}`` mappings and enums are their string tags.
The four bar-chart fields are written flat and only when present:

    {
        "backgroundColor": {"red": 0.0, "green": 0.0, "blue": 0.0, "alpha": 1.0},
        "lineColors": [...4 colors...],
        "representation": "bars",
        ...
        "barMaxHeightPercent": 0.9,
        "barMinHeightPercent": 0.25,
        "barCornerRadius": 4.0,
        "barSpacing": 3.0
    }
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from ..core.errors import StyleDecodeError
from .defaults import default_style
from .models import DisplaySize, RepresentationMode, StyleConfig

logger = logging.getLogger(__name__)

# Persisted key -> BarStyle attribute
BAR_FIELDS = {
    "barMaxHeightPercent": "max_height_percent",
    "barMinHeightPercent": "min_height_percent",
    "barCornerRadius": "corner_radius",
    "barSpacing": "spacing",
}

# Labels written by earlier releases
LEGACY_REPRESENTATION_TAGS = {
    "Line Graph": RepresentationMode.LINE_GRAPH,
    "Dots": RepresentationMode.DOTS,
    "Artistic Bars": RepresentationMode.BARS,
}


def upgrade_representation(tag: Any) -> RepresentationMode:
    """Map a stored representation tag onto a supported mode.

    Current tags map to themselves, legacy labels to their successor, and
    anything else falls back to the line graph.

    Raises:
        StyleDecodeError: If the tag is not a string
    """
    if not isinstance(tag, str):
        raise StyleDecodeError("Representation tag must be a string", details={"tag": tag})
    try:
        return RepresentationMode(tag)
    except ValueError:
        pass
    if tag in LEGACY_REPRESENTATION_TAGS:
        return LEGACY_REPRESENTATION_TAGS[tag]
    logger.warning("Unknown representation %r, falling back to line graph", tag)
    return RepresentationMode.LINE_GRAPH


def encode_style(style: StyleConfig) -> dict[str, Any]:
    """Encode a style into its persisted mapping."""
    data = style.model_dump(mode="json", by_alias=True, exclude={"bar"})
    if style.bar is not None:
        for key, attr in BAR_FIELDS.items():
            data[key] = getattr(style.bar, attr)
    return data


def decode_style(payload: Any) -> StyleConfig:
    """Decode a persisted mapping into a style.

    Args:
        payload: Mapping as produced by encode_style

    Returns:
        Fully validated StyleConfig

    Raises:
        StyleDecodeError: If the payload is malformed
    """
    if not isinstance(payload, Mapping):
        raise StyleDecodeError(
            "Style payload must be a mapping",
            details={"type": type(payload).__name__},
        )

    data = dict(payload)
    # Explicit nulls count as absent
    popped = {attr: data.pop(key, None) for key, attr in BAR_FIELDS.items()}
    bar_values = {attr: value for attr, value in popped.items() if value is not None}

    if "representation" in data:
        data["representation"] = upgrade_representation(data["representation"])

    if len(bar_values) == len(BAR_FIELDS):
        data["bar"] = bar_values
    elif bar_values:
        # Incomplete group counts as absent; bar defaulting refills all four
        logger.warning("Ignoring incomplete bar fields: %s", sorted(bar_values))

    try:
        return StyleConfig.model_validate(data)
    except ValidationError as e:
        raise StyleDecodeError(
            "Invalid style payload",
            details={"errors": e.error_count()},
            cause=e,
        ) from e


def encode_style_json(style: StyleConfig) -> str:
    """Encode a style as a JSON string."""
    return json.dumps(encode_style(style), sort_keys=True)


def decode_style_json(text: str | bytes) -> StyleConfig:
    """Decode a style from a JSON string.

    Raises:
        StyleDecodeError: If the text is not JSON or the payload is malformed
    """
    try:
        payload = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise StyleDecodeError("Style payload is not valid JSON", cause=e) from e
    return decode_style(payload)


def decode_style_or_default(payload: Any, size: DisplaySize) -> StyleConfig:
    """Decode a payload, falling back to the size's default style on failure."""
    try:
        return decode_style(payload)
    except StyleDecodeError as e:
        logger.warning("Failed to decode style, using default: %s", e, extra={"size": size.value})
        return default_style(size)
