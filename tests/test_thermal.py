"""End-to-end tests for thermal conversion."""

from thermalprint import PrintNode, convert, document, image, page, qr_code, row, text, to_escpos, view
from thermalprint.settings import ConversionOptions

INIT = b"\x1b@\x1bt\x03"


class TestText:
    """Tests for text emission."""

    def test_total_line(self) -> None:
        tree = document(page(text("TOTAL", style={"fontSize": 24, "textAlign": "center"})))
        data = to_escpos(tree, cut="none")
        assert data == INIT + b"\x1ba\x01" + b"\x1b!\x20" + b"\x1bE\x00" + b"TOTAL\n"

    def test_registers_not_repeated(self) -> None:
        tree = document(page(text("one"), text("two"), text("three")))
        data = to_escpos(tree, cut="none")
        assert data.count(b"\x1ba") == 1
        assert data.count(b"\x1b!") == 1
        assert data.count(b"\x1bE") == 1
        assert data.endswith(b"one\ntwo\nthree\n")

    def test_bold_toggles(self) -> None:
        tree = document(page(text("a", style={"fontWeight": "bold"}), text("b")))
        data = to_escpos(tree, cut="none")
        assert data.endswith(b"\x1bE\x01a\n\x1bE\x00b\n")

    def test_wrap_uses_width_multiplier(self) -> None:
        tree = document(page(text("x" * 30, style={"fontSize": 30})))
        data = to_escpos(tree, cut="none")
        # 2x2 text: 24 columns
        assert b"x" * 24 + b"\n" + b"x" * 6 + b"\n" in data

    def test_empty_text_is_bare_line(self) -> None:
        data = to_escpos(document(page(text(""))), cut="none")
        assert data == INIT + b"\n"

    def test_alignment_inherited_from_view(self) -> None:
        tree = document(page(view(text("hi"), style={"alignItems": "center"})))
        assert b"\x1ba\x01" in to_escpos(tree, cut="none")

    def test_portuguese_text(self) -> None:
        data = to_escpos(document(page(text("Ação"))), cut="none")
        assert b"A\x87\x84o\n" in data


class TestRows:
    """Tests for row layout in thermal output."""

    def test_space_between_line(self) -> None:
        tree = document(page(row(text("Coffee"), text("R$ 5.00"), style={"justifyContent": "space-between"})))
        data = to_escpos(tree, cut="none")
        line = "Coffee" + " " * 35 + "R$ 5.00"
        assert len(line) == 48
        assert data.endswith(line.encode("ascii") + b"\n")

    def test_single_child_row_is_column(self) -> None:
        tree = document(page(row(text("solo", style={"fontSize": 20}), style={"justifyContent": "space-between"})))
        data = to_escpos(tree, cut="none")
        assert b"\x1b!\x20" in data
        assert data.endswith(b"solo\n")

    def test_row_prints_normal_size(self) -> None:
        tree = document(page(row(text("a", style={"fontSize": 30}), text("b"))))
        data = to_escpos(tree, cut="none")
        assert b"\x1b!\x00" in data
        assert b"\x1b!\x30" not in data


class TestBoxModel:
    """Tests for spacing and dividers."""

    def test_dashed_border(self) -> None:
        tree = document(page(view(text("x"), style={"borderBottom": "1px dashed #000"})))
        data = to_escpos(tree, cut="none")
        assert data.endswith(b"x\n" + b"-" * 48 + b"\n")

    def test_solid_border(self) -> None:
        tree = document(page(view(text("x"), style={"borderTop": "1px solid #000"})))
        data = to_escpos(tree, cut="none")
        assert b"\xc4" * 48 + b"\n" in data
        assert b"\xc4" * 49 not in data

    def test_border_inside_narrow_view(self) -> None:
        tree = document(page(view(text("x"), style={"width": "50%", "borderTop": "1px dashed"})))
        data = to_escpos(tree, cut="none")
        assert b"-" * 24 + b"\n" in data
        assert b"-" * 25 not in data

    def test_vertical_spacing(self) -> None:
        tree = document(page(view(text("x"), style={"marginTop": 40, "paddingBottom": 25})))
        data = to_escpos(tree, cut="none")
        assert data == INIT + b"\n\n" + b"\x1ba\x00\x1b!\x00\x1bE\x00x\n" + b"\n"

    def test_non_page_document_children_ignored(self) -> None:
        tree = document(text("stray"), page(text("kept")))
        data = to_escpos(tree, cut="none")
        assert b"stray" not in data
        assert b"kept" in data


class TestImages:
    """Tests for raster images and QR codes."""

    def test_raster_image(self, black_png: bytes) -> None:
        data = to_escpos(document(page(image(black_png))), cut="none")
        # 48 columns * 12 dots = 576 dots: 72 bytes per row, 576 rows
        assert b"\x1dv0\x00\x48\x00\x40\x02" in data

    def test_image_width_follows_view(self, black_png: bytes) -> None:
        tree = document(page(view(image(black_png), style={"width": 24, "alignItems": "center"})))
        data = to_escpos(tree, cut="none")
        assert b"\x1ba\x01\x1b!\x00\x1dv0\x00\x24\x00\x20\x01" in data

    def test_image_own_alignment(self, black_png: bytes) -> None:
        tree = document(page(image(black_png, style={"alignItems": "center"})))
        data = to_escpos(tree, cut="none")
        assert data.startswith(INIT + b"\x1ba\x01\x1b!\x00\x1dv0\x00\x48\x00\x40\x02")

    def test_image_text_align_beats_view(self, black_png: bytes) -> None:
        tree = document(page(view(image(black_png, style={"textAlign": "right"}), style={"alignItems": "center"})))
        assert b"\x1ba\x02\x1b!\x00\x1dv0" in to_escpos(tree, cut="none")

    def test_only_nearest_view_constrains_image(self, black_png: bytes) -> None:
        tree = document(page(view(view(image(black_png)), style={"width": 24, "alignItems": "center"})))
        data = to_escpos(tree, cut="none")
        assert b"\x1ba\x00\x1b!\x00\x1dv0\x00\x48\x00\x40\x02" in data
        assert b"\x1ba\x01" not in data

    def test_broken_image_is_skipped(self) -> None:
        result = convert(document(page(image(b"garbage"), text("after"))), ConversionOptions(cut="none"))
        assert b"\x1dv0" not in result.data
        assert b"after\n" in result.data
        assert len(result.diagnostics) == 1
        assert result.diagnostics[0].path == "Document/Page[0]/Image[0]"

    def test_qr_code(self) -> None:
        data = to_escpos(document(page(qr_code("https://example.com", size=4))), cut="none")
        assert b"\x1d(k\x03\x001C\x04" in data

    def test_qr_unsupported_on_bematech(self) -> None:
        result = convert(
            document(page(qr_code("hello"), text("ok"))),
            ConversionOptions(backend="escbematech", cut="none"),
        )
        assert b"\x1d(k" not in result.data
        assert b"ok\n" in result.data
        assert result.degraded


class TestDocument:
    """Tests for document-level commands."""

    def test_cut_after_feed(self) -> None:
        data = to_escpos(document(page(text("x"))))
        assert data.endswith(b"x\n\x1bd\x03\x1bi")

    def test_partial_cut(self) -> None:
        data = to_escpos(document(page(text("x"))), cut="partial", feed_before_cut=1)
        assert data.endswith(b"\x1bd\x01\x1bm")

    def test_line_spacing_after_init(self) -> None:
        data = to_escpos(document(page()), line_spacing=30, cut="none")
        assert data == INIT + b"\x1b3\x1e"

    def test_bematech(self) -> None:
        tree = document(page(text("x", style={"fontWeight": 700}), text("y")))
        data = to_escpos(tree, backend="escbematech", cut="partial")
        assert data.startswith(b"\x1b@\x1bt\x04")
        assert b"\x1bEx\n\x1bFy\n" in data
        assert data.endswith(b"\n\n\n\x1bi")

    def test_bare_page_root(self) -> None:
        data = to_escpos(page(text("x")), cut="none")
        assert data.startswith(INIT)

    def test_component_mapping(self) -> None:
        tree = PrintNode("Receipt", {}, (PrintNode("Page", {}, (PrintNode("Line", {"children": "hi"}),)),))
        data = to_escpos(tree, cut="none", component_mapping={"Receipt": "document", "Line": "text"})
        assert data.endswith(b"hi\n")

    def test_unknown_elements_are_transparent(self) -> None:
        tree = document(page(PrintNode("Fragment", {}, (text("inside"),))))
        assert b"inside\n" in to_escpos(tree, cut="none")

    def test_deterministic(self) -> None:
        tree = document(page(view(text("A", style={"fontSize": 20}), row(text("b"), text("c")))))
        assert to_escpos(tree) == to_escpos(tree)
