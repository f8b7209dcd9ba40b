"""Decoding of the `cmap` table.

Only the Windows Unicode subtables in format 4 (segment mapping to
delta values) are supported, which covers the Basic Multilingual Plane
in practically every TrueType and OpenType font in existence.

Reference: https://learn.microsoft.com/en-us/typography/opentype/spec/cmap
"""

import logging
from typing import Dict

from sfntinfo import settings
from sfntinfo.exceptions import (
    InvalidContainer,
    NoSuitableCmapSubtable,
    UnsupportedCmapFormat,
)
from sfntinfo.reader import ByteReader

log = logging.getLogger(__name__)

PLATFORM_WINDOWS = 3
# Unicode BMP and Unicode full repertoire
UNICODE_ENCODINGS = (1, 10)
SUBTABLE_RECORD_SIZE = 8
FORMAT4_HEADER_SIZE = 14
SENTINEL = 0xFFFF


def find_unicode_subtable(table: ByteReader) -> int:
    """Find the offset (relative to the `cmap` table) of the first
    Windows Unicode subtable.

    Raises:
      NoSuitableCmapSubtable: if there isn't one.
    """
    nsubtables = table.uint16(2)
    for idx in range(nsubtables):
        (platform_id, encoding_id, offset) = table.unpack(
            "HHL", 4 + idx * SUBTABLE_RECORD_SIZE
        )
        if platform_id == PLATFORM_WINDOWS and encoding_id in UNICODE_ENCODINGS:
            log.debug(
                "using cmap subtable %d (%d, %d) at %d",
                idx,
                platform_id,
                encoding_id,
                offset,
            )
            return offset
    raise NoSuitableCmapSubtable(
        f"No Windows Unicode subtable among {nsubtables} cmap subtables"
    )


def parse_format4(subtable: ByteReader) -> Dict[int, int]:
    """Expand a format 4 subtable into a mapping of code points to
    glyph indices.

    The subtable consists of four parallel arrays describing segments
    of contiguous code points.  Each segment either maps its code
    points by adding a (16-bit, wrapping) delta, or, if its
    `idRangeOffset` is non-zero, by looking them up in a glyph array,
    whose location is given as a byte offset from the `idRangeOffset`
    entry itself, i.e.:

        *(&idRangeOffset[i] + idRangeOffset[i] / 2 + (c - startCode[i]))

    in the words of the OpenType documentation.

    Glyph index 0 means that the code point is not mapped, but such
    entries are kept in the result.
    """
    segcount = subtable.uint16(6) // 2
    if segcount == 0:
        return {}
    ends_pos = FORMAT4_HEADER_SIZE
    # Skip reservedPad after endCode
    starts_pos = ends_pos + 2 * segcount + 2
    deltas_pos = starts_pos + 2 * segcount
    ranges_pos = deltas_pos + 2 * segcount
    ends = subtable.uint16_array(ends_pos, segcount)
    starts = subtable.uint16_array(starts_pos, segcount)
    deltas = subtable.int16_array(deltas_pos, segcount)
    ranges = subtable.uint16_array(ranges_pos, segcount)
    # The last segment maps 0xFFFF and only exists to terminate the table
    if ends[-1] == SENTINEL:
        nsegments = segcount - 1
    elif settings.STRICT:
        raise InvalidContainer(
            "Last cmap segment ends at %#x, not %#x" % (ends[-1], SENTINEL)
        )
    else:
        log.warning("cmap format 4 subtable is not terminated, using all segments")
        nsegments = segcount
    char2gid: Dict[int, int] = {}
    for idx in range(nsegments):
        start, end, delta, idr = starts[idx], ends[idx], deltas[idx], ranges[idx]
        if idr == 0:
            for c in range(start, end + 1):
                char2gid[c] = (c + delta) & 0xFFFF
        else:
            pos = ranges_pos + 2 * idx + idr
            for c in range(start, end + 1):
                gid = subtable.uint16(pos + 2 * (c - start))
                if gid:
                    gid = (gid + delta) & 0xFFFF
                char2gid[c] = gid
    log.debug("cmap format 4: %d segments, %d code points", nsegments, len(char2gid))
    return char2gid


def parse_cmap(table: ByteReader) -> Dict[int, int]:
    """Get the Unicode to glyph index mapping from a `cmap` table.

    Raises:
      NoSuitableCmapSubtable: if there is no Windows Unicode subtable.
      UnsupportedCmapFormat: if it is not in format 4.
      OutOfBounds: if anything points outside the table.
    """
    offset = find_unicode_subtable(table)
    fmt = table.uint16(offset)
    if fmt != 4:
        raise UnsupportedCmapFormat(fmt)
    # Bounded by the cmap table, not by the subtable's own length field
    return parse_format4(table.region(offset))
