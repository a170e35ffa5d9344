import pytest

from binclock.core.errors import StyleDecodeError
from binclock.style import (
    BarStyle,
    DisplaySize,
    MarkerShape,
    RepresentationMode,
    RGBAColor,
    decode_style,
    decode_style_json,
    decode_style_or_default,
    default_style,
    encode_style,
    encode_style_json,
    ensure_bar_defaults,
)


@pytest.fixture
def custom_bar_style():
    return default_style(DisplaySize.EXPANDED).model_copy(
        update={
            "representation": RepresentationMode.BARS,
            "marker_shape": MarkerShape.SQUARE,
            "background_color": RGBAColor(red=0.1, green=0.2, blue=0.3, alpha=0.4),
            "bar": BarStyle(max_height_percent=0.8, min_height_percent=0.2,
                            corner_radius=2.5, spacing=1.0),
        }
    )


def test_encoded_keys_match_persisted_shape():
    encoded = encode_style(default_style(DisplaySize.COMPACT))

    assert set(encoded) == {
        "backgroundColor",
        "lineColors",
        "representation",
        "lineWidth",
        "markerSize",
        "lineAmplitudePercent",
        "verticalSpacing",
        "widgetPadding",
        "horizontalPaddingPercent",
        "markerShape",
    }
    assert encoded["backgroundColor"] == {"red": 0.0, "green": 0.0, "blue": 0.0, "alpha": 1.0}
    assert encoded["representation"] == "lineGraph"
    assert encoded["markerShape"] == "circle"
    assert len(encoded["lineColors"]) == 4


def test_bar_fields_are_flat_when_present(custom_bar_style):
    encoded = encode_style(custom_bar_style)

    assert encoded["representation"] == "bars"
    assert encoded["barMaxHeightPercent"] == 0.8
    assert encoded["barMinHeightPercent"] == 0.2
    assert encoded["barCornerRadius"] == 2.5
    assert encoded["barSpacing"] == 1.0
    assert "bar" not in encoded


@pytest.mark.parametrize("size", list(DisplaySize))
def test_default_styles_round_trip(size):
    style = default_style(size)
    decoded = decode_style(encode_style(style))

    assert decoded == style
    assert decoded.bar is None


def test_custom_style_round_trips(custom_bar_style):
    assert decode_style(encode_style(custom_bar_style)) == custom_bar_style
    assert decode_style_json(encode_style_json(custom_bar_style)) == custom_bar_style


def test_dots_style_keeps_bar_fields_absent():
    style = default_style(DisplaySize.STANDARD).model_copy(
        update={"representation": RepresentationMode.DOTS}
    )
    encoded = encode_style(style)

    assert not any(key.startswith("bar") for key in encoded)
    assert decode_style(encoded) == style


@pytest.mark.parametrize(
    "tag, expected",
    [
        ("Line Graph", RepresentationMode.LINE_GRAPH),
        ("Dots", RepresentationMode.DOTS),
        ("Artistic Bars", RepresentationMode.BARS),
        ("spiral", RepresentationMode.LINE_GRAPH),
    ],
)
def test_legacy_and_unknown_representation_tags(tag, expected):
    encoded = encode_style(default_style(DisplaySize.COMPACT))
    encoded["representation"] = tag
    assert decode_style(encoded).representation is expected


def test_missing_representation_means_line_graph():
    encoded = encode_style(default_style(DisplaySize.COMPACT))
    del encoded["representation"]
    del encoded["markerShape"]

    decoded = decode_style(encoded)
    assert decoded.representation is RepresentationMode.LINE_GRAPH
    assert decoded.marker_shape is MarkerShape.CIRCLE


def test_incomplete_bar_group_is_dropped_then_refilled(custom_bar_style):
    encoded = encode_style(custom_bar_style)
    del encoded["barSpacing"]

    decoded = decode_style(encoded)
    assert decoded.bar is None
    assert ensure_bar_defaults(decoded).bar == BarStyle()


@pytest.mark.parametrize(
    "mutate",
    [
        lambda d: d.pop("lineWidth"),
        lambda d: d.update(lineColors=d["lineColors"][:2]),
        lambda d: d.update(markerShape="triangle"),
        lambda d: d.update(representation=3),
        lambda d: d.update(lineAmplitudePercent="tall"),
        lambda d: d.update(backgroundColor={"red": 2.0, "green": 0, "blue": 0, "alpha": 1}),
    ],
)
def test_malformed_payloads_fail_cleanly(mutate):
    encoded = encode_style(default_style(DisplaySize.STANDARD))
    mutate(encoded)
    with pytest.raises(StyleDecodeError):
        decode_style(encoded)


@pytest.mark.parametrize("payload", [None, [], "style", 42])
def test_non_mapping_payload_fails(payload):
    with pytest.raises(StyleDecodeError):
        decode_style(payload)


def test_invalid_json_fails():
    with pytest.raises(StyleDecodeError):
        decode_style_json("{not json")


def test_malformed_payload_falls_back_to_size_default():
    style = decode_style_or_default({"lineWidth": "wide"}, DisplaySize.STANDARD)
    assert style == default_style(DisplaySize.STANDARD)


def test_decode_does_not_mutate_payload(custom_bar_style):
    encoded = encode_style(custom_bar_style)
    snapshot = dict(encoded)
    decode_style(encoded)
    assert encoded == snapshot


def test_null_bar_fields_count_as_absent():
    encoded = encode_style(default_style(DisplaySize.COMPACT))
    encoded.update(barMaxHeightPercent=None, barMinHeightPercent=None,
                   barCornerRadius=None, barSpacing=None)
    assert decode_style(encoded) == default_style(DisplaySize.COMPACT)
