"""
Test decoding of the cmap table, which is mostly about format 4.
"""

import struct

import pytest

from sfntinfo import settings
from sfntinfo.cmap import find_unicode_subtable, parse_cmap, parse_format4
from sfntinfo.exceptions import (
    InvalidContainer,
    NoSuitableCmapSubtable,
    OutOfBounds,
    UnsupportedCmapFormat,
)
from sfntinfo.reader import ByteReader

from .data import build_cmap, build_format4


def decode(*segments, sentinel: bool = True):
    return parse_cmap(
        ByteReader(build_cmap([(3, 1, build_format4(segments, sentinel=sentinel))]))
    )


def test_delta_segment() -> None:
    """Verify a single segment with neither delta nor range offset."""
    assert decode((65, 67, 0, None)) == {65: 65, 66: 66, 67: 67}


def test_negative_delta() -> None:
    """Verify that idDelta is signed."""
    assert decode((100, 100, -1, None)) == {100: 99}
    # Check it is really 0xFFFF in the table
    subtable = build_format4([(100, 100, -1, None)])
    segcount = 2
    (delta,) = struct.unpack_from(">H", subtable, 14 + 2 * segcount + 2 + 2 * segcount)
    assert delta == 0xFFFF


def test_delta_wraps() -> None:
    """Verify that glyph indices are computed modulo 65536."""
    assert decode((0xFFF0, 0xFFF2, 16, None)) == {0xFFF0: 0, 0xFFF1: 1, 0xFFF2: 2}
    assert decode((1, 2, -1, None)) == {1: 0, 2: 1}


def test_range_offset() -> None:
    """Verify glyph lookup through idRangeOffset, with zeros left
    unmapped and the delta applied to everything else."""
    assert decode((65, 67, 0, [10, 0, 12])) == {65: 10, 66: 0, 67: 12}
    assert decode((65, 67, 5, [10, 0, 12])) == {65: 15, 66: 0, 67: 17}
    assert decode((65, 67, -11, [10, 0, 12])) == {65: 0xFFFF, 66: 0, 67: 1}


def test_multiple_segments() -> None:
    """Verify that segments sharing a glyph array find their own part
    of it."""
    cmap = decode(
        (32, 33, 0, [3, 4]),
        (48, 50, -45, None),
        (0x20AC, 0x20AD, 1, [100, 200]),
    )
    assert cmap == {
        32: 3,
        33: 4,
        48: 3,
        49: 4,
        50: 5,
        0x20AC: 101,
        0x20AD: 201,
    }


def test_sentinel_only() -> None:
    """Verify that the terminating segment is never included."""
    assert decode() == {}
    # Even if it maps to something
    assert decode((0xFFFF, 0xFFFF, 0, None), sentinel=False) == {}


def test_unterminated() -> None:
    """Verify that a table without the terminating segment is decoded
    in full, or rejected in strict mode."""
    assert decode((65, 66, 1, None), sentinel=False) == {65: 66, 66: 67}


def test_strict_unterminated(monkeypatch) -> None:
    monkeypatch.setattr(settings, "STRICT", True)
    with pytest.raises(InvalidContainer):
        decode((65, 66, 1, None), sentinel=False)


def test_empty_format4() -> None:
    subtable = struct.pack(">7H", 4, 14, 0, 0, 0, 0, 0)
    assert parse_format4(ByteReader(subtable)) == {}


def test_range_offset_out_of_bounds() -> None:
    """Verify that glyph array lookups past the end of the table fail."""
    subtable = build_format4([(65, 67, 0, [10, 0, 12])])
    with pytest.raises(OutOfBounds):
        parse_format4(ByteReader(subtable[:-2]))


def test_truncated_arrays() -> None:
    subtable = build_format4([(65, 67, 0, None)])
    with pytest.raises(OutOfBounds):
        parse_format4(ByteReader(subtable[:20]))


def test_subtable_selection() -> None:
    """Verify that the first Windows Unicode subtable is used."""
    ignored = build_format4([(65, 65, 1, None)])
    wanted = build_format4([(65, 65, 2, None)])
    also_wanted = build_format4([(65, 65, 3, None)])
    table = build_cmap([(0, 3, ignored), (3, 0, ignored), (3, 10, wanted), (3, 1, also_wanted)])
    assert find_unicode_subtable(ByteReader(table)) == 4 + 4 * 8 + 2 * len(ignored)
    assert parse_cmap(ByteReader(table)) == {65: 67}


def test_no_suitable_subtable() -> None:
    table = build_cmap([(0, 3, build_format4([])), (1, 0, build_format4([]))])
    with pytest.raises(NoSuitableCmapSubtable):
        parse_cmap(ByteReader(table))
    with pytest.raises(NoSuitableCmapSubtable):
        parse_cmap(ByteReader(build_cmap([])))


def test_unsupported_format() -> None:
    # Format 6: trimmed table mapping
    subtable = struct.pack(">5H3H", 6, 16, 0, 65, 3, 1, 2, 3)
    with pytest.raises(UnsupportedCmapFormat) as e:
        parse_cmap(ByteReader(build_cmap([(3, 1, subtable)])))
    assert e.value.format == 6
    assert isinstance(e.value, NotImplementedError)


def test_subtable_out_of_bounds() -> None:
    table = struct.pack(">HHHHL", 0, 1, 3, 1, 1000)
    with pytest.raises(OutOfBounds):
        parse_cmap(ByteReader(table))
