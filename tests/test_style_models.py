import pytest
from pydantic import ValidationError

from binclock.style import (
    BarStyle,
    Colors,
    DisplaySize,
    MarkerShape,
    RepresentationMode,
    RGBAColor,
    default_style,
    ensure_bar_defaults,
)


class TestDefaultStyle:
    @pytest.mark.parametrize(
        "size, spacing",
        [
            (DisplaySize.COMPACT, 5.0),
            (DisplaySize.STANDARD, 6.0),
            (DisplaySize.EXPANDED, 8.0),
        ],
    )
    def test_vertical_spacing_depends_on_size(self, size, spacing):
        assert default_style(size).vertical_spacing == spacing

    def test_baseline_values(self):
        style = default_style(DisplaySize.STANDARD)

        assert style.background_color == Colors.BLACK
        assert style.line_colors == (Colors.BLUE, Colors.CYAN, Colors.YELLOW, Colors.ORANGE)
        assert style.representation is RepresentationMode.LINE_GRAPH
        assert style.line_width == 3.0
        assert style.marker_size == 5.0
        assert style.line_amplitude_percent == 1.0
        assert style.widget_padding == 12.0
        assert style.horizontal_padding_percent == 0.1
        assert style.marker_shape is MarkerShape.CIRCLE
        assert style.bar is None

    def test_only_spacing_differs_between_sizes(self):
        compact = default_style(DisplaySize.COMPACT)
        expanded = default_style(DisplaySize.EXPANDED)
        assert compact != expanded
        assert compact.model_copy(update={"vertical_spacing": 8.0}) == expanded


class TestEnsureBarDefaults:
    def test_populates_all_bar_fields_in_bar_mode(self):
        style = default_style(DisplaySize.COMPACT).model_copy(
            update={"representation": RepresentationMode.BARS}
        )
        resolved = ensure_bar_defaults(style)

        assert resolved.bar_max_height_percent == 0.9
        assert resolved.bar_min_height_percent == 0.25
        assert resolved.bar_corner_radius == 4
        assert resolved.bar_spacing == 3

    @pytest.mark.parametrize("mode", [RepresentationMode.LINE_GRAPH, RepresentationMode.DOTS])
    def test_leaves_other_modes_alone(self, mode):
        style = default_style(DisplaySize.COMPACT).model_copy(update={"representation": mode})
        assert ensure_bar_defaults(style) is style
        assert style.bar_spacing is None

    def test_keeps_existing_bar_fields(self):
        bar = BarStyle(max_height_percent=0.7, min_height_percent=0.1, corner_radius=0, spacing=8)
        style = default_style(DisplaySize.COMPACT).model_copy(
            update={"representation": RepresentationMode.BARS, "bar": bar}
        )
        assert ensure_bar_defaults(style).bar == bar

    @pytest.mark.parametrize("mode", list(RepresentationMode))
    def test_is_idempotent(self, mode):
        style = default_style(DisplaySize.EXPANDED).model_copy(update={"representation": mode})
        once = ensure_bar_defaults(style)
        assert ensure_bar_defaults(once) == once


class TestStyleConfig:
    def test_equality_is_field_wise(self):
        assert default_style(DisplaySize.STANDARD) == default_style(DisplaySize.STANDARD)
        changed = default_style(DisplaySize.STANDARD).model_copy(update={"line_width": 4.0})
        assert changed != default_style(DisplaySize.STANDARD)

    def test_line_color_wraps_around(self):
        style = default_style(DisplaySize.COMPACT)
        assert style.line_color(4) == style.line_colors[0]
        assert style.line_color(7) == style.line_colors[3]

    def test_requires_exactly_four_line_colors(self):
        data = default_style(DisplaySize.COMPACT).model_dump()
        data["line_colors"] = data["line_colors"][:3]
        with pytest.raises(ValidationError):
            type(default_style(DisplaySize.COMPACT)).model_validate(data)

    @pytest.mark.parametrize(
        "field, value",
        [
            ("line_width", 0.0),
            ("marker_size", -1.0),
            ("line_amplitude_percent", 1.5),
            ("vertical_spacing", -0.1),
            ("horizontal_padding_percent", 0.5),
        ],
    )
    def test_rejects_out_of_range_dimensions(self, field, value):
        data = default_style(DisplaySize.COMPACT).model_dump()
        data[field] = value
        with pytest.raises(ValidationError):
            type(default_style(DisplaySize.COMPACT)).model_validate(data)

    def test_is_immutable(self):
        style = default_style(DisplaySize.COMPACT)
        with pytest.raises(ValidationError):
            style.line_width = 10.0


class TestRGBAColor:
    def test_from_hex(self):
        assert RGBAColor.from_hex("#ff0000") == RGBAColor(red=1.0, green=0.0, blue=0.0)
        assert RGBAColor.from_hex("00f").to_tuple() == (0, 0, 255, 255)
        assert RGBAColor.from_hex("#00000080").alpha == pytest.approx(128 / 255)

    def test_from_hex_rejects_garbage(self):
        with pytest.raises(ValueError):
            RGBAColor.from_hex("#12345")

    def test_to_hex_round_trip(self):
        assert RGBAColor.from_hex("#3366cc").to_hex() == "#3366cc"
        assert Colors.CLEAR.to_hex() == "#00000000"

    def test_channels_are_bounded(self):
        with pytest.raises(ValidationError):
            RGBAColor(red=1.2, green=0.0, blue=0.0)


class TestDisplaySize:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("small", DisplaySize.COMPACT),
            ("Medium", DisplaySize.STANDARD),
            ("expanded", DisplaySize.EXPANDED),
            ("systemLarge", DisplaySize.EXPANDED),
            (DisplaySize.COMPACT, DisplaySize.COMPACT),
        ],
    )
    def test_parse(self, value, expected):
        assert DisplaySize.parse(value) is expected

    def test_parse_rejects_unknown(self):
        with pytest.raises(ValueError):
            DisplaySize.parse("huge")
