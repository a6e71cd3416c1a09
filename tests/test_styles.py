"""Tests for raw style extraction."""

import pytest

from thermalprint.ir import TextStyle, ViewStyle, parse_length


class TestParseLength:
    """Tests for parse_length()."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(12, 12.0), ("18", 18.0), ("18px", 18.0), (" 7.5px ", 7.5), ("9pt", 12.0)],
    )
    def test_lengths(self, value, expected) -> None:
        assert parse_length(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", [None, True, "auto", "1em", [], "12%"])
    def test_unsupported(self, value) -> None:
        assert parse_length(value) is None


class TestTextStyle:
    """Tests for TextStyle.from_mapping()."""

    def test_empty(self) -> None:
        assert TextStyle.from_mapping(None) == TextStyle()

    def test_fields(self) -> None:
        style = TextStyle.from_mapping({
            "fontSize": "24px", "fontWeight": "bold", "textAlign": "right", "padding": 4, "paddingLeft": 8,
        })
        assert style.font_size == 24
        assert style.font_weight == "bold"
        assert style.text_align == "right"
        assert style.padding_left == 8
        assert style.padding_right == 4


class TestViewStyle:
    """Tests for ViewStyle.from_mapping()."""

    def test_defaults(self) -> None:
        style = ViewStyle.from_mapping({})
        assert not style.is_row
        assert not style.has_width

    def test_edge_overrides_shorthand(self) -> None:
        style = ViewStyle.from_mapping({"margin": 20, "marginBottom": 0})
        assert style.margin_top == 20
        assert style.margin_bottom == 0

    def test_row_and_borders(self) -> None:
        style = ViewStyle.from_mapping({
            "flexDirection": "row", "borderTop": "1px dashed #000", "borderBottom": "", "width": "50%",
        })
        assert style.is_row
        assert style.border_top == "1px dashed #000"
        assert style.border_bottom is None
        assert style.width == "50%"
