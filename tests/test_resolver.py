"""Tests for style resolution."""

import pytest

from thermalprint.ir import TextStyle, ViewStyle
from thermalprint.layout import (
    Alignment,
    BorderStyle,
    CharacterSize,
    StyleResolver,
    Target,
    classify_font_size,
    divider_text,
    is_bold,
    px_to_lines,
    resolve_alignment,
)


class TestFontSizeClassification:
    """Tests for classify_font_size()."""

    @pytest.mark.parametrize(
        ("px", "expected"),
        [
            (12, (1, 1)),
            (13, (1, 2)),
            (18, (1, 2)),
            (19, (2, 1)),
            (24, (2, 1)),
            (25, (2, 2)),
            (60, (2, 2)),
        ],
    )
    def test_boundaries(self, px: int, expected) -> None:
        assert classify_font_size(px) == CharacterSize(*expected)

    def test_missing_size(self) -> None:
        assert classify_font_size(None) == CharacterSize(1, 1)

    def test_clamped_to_backend_maximum(self) -> None:
        resolver = StyleResolver(max_size=CharacterSize(1, 1))
        assert resolver.resolve_text(TextStyle(font_size=30)).size == CharacterSize(1, 1)


class TestBold:
    """Tests for is_bold()."""

    @pytest.mark.parametrize(
        "style",
        [
            TextStyle(font_weight="bold"),
            TextStyle(font_weight=700),
            TextStyle(font_weight=900),
            TextStyle(font_weight="700"),
            TextStyle(font_family="Helvetica-Bold"),
            TextStyle(font_weight=400, font_family="Helvetica-Bold"),
        ],
    )
    def test_bold(self, style: TextStyle) -> None:
        assert is_bold(style)

    @pytest.mark.parametrize(
        "style",
        [
            TextStyle(),
            TextStyle(font_weight=699),
            TextStyle(font_weight="normal"),
            TextStyle(font_family="Helvetica"),
            TextStyle(font_family="Arial Bold"),
        ],
    )
    def test_not_bold(self, style: TextStyle) -> None:
        assert not is_bold(style)


class TestAlignment:
    """Alignment precedence: textAlign, then inherited fallback, then left."""

    def test_explicit_wins(self) -> None:
        assert resolve_alignment("right", Alignment.CENTER) is Alignment.RIGHT

    def test_fallback(self) -> None:
        assert resolve_alignment(None, Alignment.CENTER) is Alignment.CENTER

    def test_default_left(self) -> None:
        assert resolve_alignment("justify") is Alignment.LEFT

    def test_align_items_fallback(self) -> None:
        resolver = StyleResolver()
        assert resolver.resolve_view(ViewStyle(align_items="flex-end"), 48).align is Alignment.RIGHT


class TestSpacing:
    """Tests for pixel to line conversion."""

    @pytest.mark.parametrize(("px", "lines"), [(None, 0), (-10, 0), (19, 0), (20, 1), (39, 1), (40, 2)])
    def test_px_to_lines(self, px, lines: int) -> None:
        assert px_to_lines(px) == lines

    def test_thermal_drops_horizontal_edges(self) -> None:
        style = ViewStyle.from_mapping({"padding": 40, "marginBottom": 20})
        resolved = StyleResolver(Target.THERMAL).resolve_view(style, 48)
        assert resolved.padding.top == 2
        assert resolved.padding.left == 0
        assert resolved.margin.bottom == 1

    def test_vector_keeps_all_edges(self) -> None:
        style = ViewStyle.from_mapping({"padding": 8})
        resolved = StyleResolver(Target.VECTOR).resolve_view(style, 205)
        assert resolved.padding.left == pytest.approx(6.0)
        assert resolved.padding.bottom == pytest.approx(6.0)


class TestBorders:
    """Tests for divider resolution."""

    def test_dashed(self) -> None:
        resolved = StyleResolver().resolve_view(ViewStyle(border_top="1px dashed #000"), 48)
        assert resolved.border_top is BorderStyle.DASHED
        assert divider_text(BorderStyle.DASHED, 48) == "-" * 48

    def test_solid(self) -> None:
        resolved = StyleResolver().resolve_view(ViewStyle(border_bottom="1px solid black"), 48)
        assert resolved.border_bottom is BorderStyle.SOLID
        assert divider_text(BorderStyle.SOLID, 32) == "─" * 32


class TestWidths:
    """Tests for row width resolution."""

    def test_percentage_and_equal_split(self) -> None:
        resolver = StyleResolver(Target.THERMAL)
        assert resolver.resolve_widths(["25%", None, None], 48) == [12, 18, 18]

    def test_remainder_goes_to_earliest_cells(self) -> None:
        resolver = StyleResolver(Target.THERMAL)
        assert resolver.resolve_widths([None] * 5, 48) == [10, 10, 10, 9, 9]

    def test_explicit_widths_never_exceed_total(self) -> None:
        resolver = StyleResolver(Target.THERMAL)
        assert resolver.resolve_widths(["60%", "60%"], 48) == [29, 19]
        assert resolver.resolve_widths(["60%", "60%", None], 48) == [29, 19, 0]

    def test_absolute_width_clamped_to_parent(self) -> None:
        resolver = StyleResolver(Target.THERMAL)
        assert resolver.resolve_width(100, 48) == 48

    def test_vector_pixels_become_points(self) -> None:
        resolver = StyleResolver(Target.VECTOR)
        assert resolver.resolve_width(100, 205) == pytest.approx(75.0)

    def test_unsupported_width_ignored(self) -> None:
        assert StyleResolver().resolve_width("auto", 48) is None
