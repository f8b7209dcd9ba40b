"""Decoding of the `maxp` (maximum profile) table."""

from sfntinfo.reader import ByteReader


def parse_maxp(table: ByteReader) -> int:
    """Get the number of glyphs from a `maxp` table.

    Both version 0.5 (CFF) and 1.0 (TrueType) tables start with the
    version followed by `numGlyphs`, which is all we need, so the
    version is not checked.
    """
    return table.uint16(4)
