"""Golden-byte tests for the thermal backends."""

import pytest

from thermalprint.backends import (
    CutKind,
    EscBematechBackend,
    EscPosBackend,
    ProtocolBackend,
    create_thermal_backend,
)
from thermalprint.errors import ConfigurationError, UnsupportedCommand
from thermalprint.layout import Alignment, CharacterSize


class TestEscPos:
    """Tests for EscPosBackend."""

    @pytest.fixture
    def backend(self) -> EscPosBackend:
        return EscPosBackend()

    def test_init_selects_cp860(self, backend: EscPosBackend) -> None:
        assert backend.init() == b"\x1b\x40\x1b\x74\x03"

    @pytest.mark.parametrize(
        ("alignment", "expected"),
        [(Alignment.LEFT, b"\x1ba\x00"), (Alignment.CENTER, b"\x1ba\x01"), (Alignment.RIGHT, b"\x1ba\x02")],
    )
    def test_align(self, backend: EscPosBackend, alignment: Alignment, expected: bytes) -> None:
        assert backend.align(alignment) == expected

    @pytest.mark.parametrize(
        ("width", "height", "bold", "n"),
        [(1, 1, False, 0x00), (1, 2, False, 0x10), (2, 1, False, 0x20), (2, 2, True, 0x38)],
    )
    def test_character_size(self, backend: EscPosBackend, width: int, height: int, bold: bool, n: int) -> None:
        assert backend.character_size(width, height, bold) == b"\x1b!" + bytes([n])

    def test_emphasis(self, backend: EscPosBackend) -> None:
        assert backend.emphasis(True) == b"\x1bE\x01"
        assert backend.emphasis(False) == b"\x1bE\x00"

    def test_line_spacing(self, backend: EscPosBackend) -> None:
        assert backend.line_spacing(30) == b"\x1b3\x1e"
        assert backend.line_spacing(400) == b"\x1b3\xff"
        assert backend.line_spacing(None) == b"\x1b2"

    def test_feeds(self, backend: EscPosBackend) -> None:
        assert backend.line_feed(3) == b"\n\n\n"
        assert backend.feed_lines(4) == b"\x1bd\x04"
        assert backend.feed_lines(0) == b""

    def test_cut(self, backend: EscPosBackend) -> None:
        assert backend.cut(CutKind.FULL, 3) == b"\x1bd\x03\x1bi"
        assert backend.cut(CutKind.PARTIAL) == b"\x1bm"

    def test_raster(self, backend: EscPosBackend) -> None:
        data = backend.raster_image(b"\xff\xc0\x00\x00", 10, 2)
        assert data == b"\x1dv0\x00\x02\x00\x02\x00\xff\xc0\x00\x00"

    def test_raster_size_mismatch(self, backend: EscPosBackend) -> None:
        with pytest.raises(ValueError):
            backend.raster_image(b"\xff", 16, 1)

    def test_qr(self, backend: EscPosBackend) -> None:
        assert backend.barcode_2d("hi").startswith(b"\x1d(k")

    def test_max_size(self, backend: EscPosBackend) -> None:
        assert backend.max_character_size == CharacterSize(2, 2)


class TestEscBematech:
    """Tests for EscBematechBackend."""

    @pytest.fixture
    def backend(self) -> EscBematechBackend:
        return EscBematechBackend()

    def test_init(self, backend: EscBematechBackend) -> None:
        assert backend.init() == b"\x1b\x40\x1b\x74\x04"

    def test_emphasis(self, backend: EscBematechBackend) -> None:
        assert backend.emphasis(True) == b"\x1bE"
        assert backend.emphasis(False) == b"\x1bF"

    def test_line_spacing_range(self, backend: EscBematechBackend) -> None:
        assert backend.line_spacing(5) == b"\x1b3\x12"
        assert backend.line_spacing(30) == b"\x1b3\x1e"
        assert backend.line_spacing() == b"\x1b2"

    def test_feed_uses_line_feeds(self, backend: EscBematechBackend) -> None:
        assert backend.feed_lines(2) == b"\n\n"

    def test_partial_cut_degrades_to_full(self, backend: EscBematechBackend) -> None:
        assert backend.cut(CutKind.PARTIAL, 3) == b"\n\n\n\x1bi"
        assert backend.cut(CutKind.FULL) == b"\x1bi"

    def test_qr_unsupported(self, backend: EscBematechBackend) -> None:
        with pytest.raises(UnsupportedCommand) as exc:
            backend.barcode_2d("hi")
        assert exc.value.backend == "ESC/Bematech"

    def test_shared_commands(self, backend: EscBematechBackend) -> None:
        assert backend.align(Alignment.CENTER) == b"\x1ba\x01"
        assert backend.character_size(2, 2) == b"\x1b!\x30"
        assert backend.character_size(1, 1, bold=True) == b"\x1b!\x08"

    def test_raster(self, backend: EscBematechBackend) -> None:
        assert backend.raster_image(b"\xff\x80", 9, 1) == b"\x1dv0\x00\x02\x00\x01\x00\xff\x80"
        with pytest.raises(ValueError):
            backend.raster_image(b"\xff", 9, 1)

    def test_is_independent_of_escpos(self, backend: EscBematechBackend) -> None:
        assert isinstance(backend, ProtocolBackend)
        assert not isinstance(backend, EscPosBackend)


class TestRegistry:
    """Tests for create_thermal_backend()."""

    def test_known(self) -> None:
        assert isinstance(create_thermal_backend("escbematech"), EscBematechBackend)

    def test_unknown(self) -> None:
        with pytest.raises(ConfigurationError):
            create_thermal_backend("zpl")
