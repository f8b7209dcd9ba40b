"""Schemas for font metadata.

This module contains schemas (as TypedDict) and extractors for the
metadata of fonts and the records in them, as well as a
single-dispatch function to extract said metadata from any object.

Unlike `sfntinfo.Font`, this is an entirely non-lazy API, and it never
raises an exception for a table which is missing or broken: the
corresponding key is simply left out (and the problem is logged).  It
is provided here because the sfntinfo CLI uses it, and to prevent
users of the library from reimplementing it themselves.
"""

import binascii
import functools
import logging
from typing import Dict, List, TypedDict, TypeVar

from sfntinfo.directory import TableEntry as _TableEntry
from sfntinfo.exceptions import SFNTException
from sfntinfo.font import Font as _Font
from sfntinfo.name import NameRecord as _NameRecord

log = logging.getLogger(__name__)
VERSION = "1.0"


class Font(TypedDict, total=False):
    """Metadata for a font."""

    flavor: str
    """Either "TrueType" or "OpenType" (with CFF outlines)."""
    tables: List["Table"]
    """Tables in this font, in directory order."""
    family_name: str
    """Font family name."""
    designer: str
    """Designer (or manufacturer) of this font."""
    glyph_count: int
    """Number of glyphs."""
    codepoint_count: int
    """Number of Unicode code points mapped to a glyph."""
    names: List["NameRecord"]
    """All strings in the name table."""


class Table(TypedDict, total=False):
    """Entry in the table directory."""

    tag: str
    """Four-character table tag."""
    checksum: str
    """Checksum (unverified) as hexadecimal."""
    offset: int
    """Offset of the table in the file."""
    length: int
    """Length of the table in bytes."""


class NameRecord(TypedDict, total=False):
    """String from the name table."""

    name_id: int
    """What this string is, numerically."""
    label: str
    """What this string is, for humans."""
    platform_id: int
    """Platform (0 = Unicode, 1 = Macintosh, 3 = Windows)."""
    encoding_id: int
    """Platform-specific encoding."""
    language_id: int
    """Platform-specific language."""
    value: str
    """Decoded text."""


@functools.singledispatch
def asobj(obj):
    """JSON serializable representation of font metadata."""
    # Catch NamedTuples that don't have a specific serializer
    if hasattr(obj, "_asdict"):
        return {k: asobj(v) for k, v in obj._asdict().items()}
    return repr(obj)


_S = TypeVar("_S", int, float, bool, str)


def asobj_simple(obj: _S) -> _S:
    return obj


asobj.register(int, asobj_simple)
asobj.register(float, asobj_simple)
asobj.register(bool, asobj_simple)
asobj.register(str, asobj_simple)


@asobj.register(bytes)
def asobj_bytes(obj: bytes) -> str:
    return "<%s>" % binascii.hexlify(obj).decode("ascii")


@asobj.register(dict)
def asobj_dict(obj: dict) -> dict:
    return {k: asobj(v) for k, v in obj.items()}


@asobj.register(list)
def asobj_list(obj: list) -> list:
    return [asobj(v) for v in obj]


@asobj.register(_TableEntry)
def asobj_table(entry: _TableEntry) -> Table:
    return Table(
        tag=entry.tag,
        checksum="%08x" % entry.checksum,
        offset=entry.offset,
        length=entry.length,
    )


@asobj.register(_NameRecord)
def asobj_name(record: _NameRecord) -> NameRecord:
    return NameRecord(
        name_id=record.name_id,
        label=record.label,
        platform_id=record.platform_id,
        encoding_id=record.encoding_id,
        language_id=record.language_id,
        value=record.value,
    )


@asobj.register(_Font)
def asobj_font(font: _Font) -> Font:
    meta: Dict = {
        "flavor": font.flavor,
        "tables": [asobj(font.directory[tag]) for tag in font.tables],
    }
    try:
        meta["family_name"] = font.family_name
        meta["designer"] = font.designer
        meta["names"] = [asobj(record) for record in font.name_records]
    except SFNTException as e:
        log.warning("Could not read names: %s", e)
    try:
        meta["glyph_count"] = font.glyph_count
    except SFNTException as e:
        log.warning("Could not read glyph count: %s", e)
    try:
        meta["codepoint_count"] = sum(1 for _ in font.renderable_codepoints())
    except SFNTException as e:
        log.warning("Could not read character map: %s", e)
    return Font(**meta)
