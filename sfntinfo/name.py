"""Decoding of the `name` table.

The `name` table holds all the human-readable strings in a font, each
one tagged with a platform, an encoding, a language and a name ID
saying what it is (family name, designer, license...).  The same
string is frequently present several times for different platforms
and languages.

Reference: https://learn.microsoft.com/en-us/typography/opentype/spec/name
"""

import logging
from typing import Iterable, List, NamedTuple, Sequence, Tuple, Union

from sfntinfo.reader import ByteReader

log = logging.getLogger(__name__)

PLATFORM_UNICODE = 0
PLATFORM_MACINTOSH = 1
PLATFORM_WINDOWS = 3
HEADER_SIZE = 6
RECORD_SIZE = 12

NAME_IDS = {
    0: "Copyright Notice",
    1: "Font Family Name",
    2: "Font Subfamily Name",
    3: "Unique Font Identifier",
    4: "Full Font Name",
    5: "Version String",
    6: "PostScript Name",
    7: "Trademark",
    8: "Manufacturer",
    9: "Designer",
    10: "Description",
    11: "URL Vendor",
    12: "URL Designer",
    13: "License Description",
    14: "License Info URL",
    15: "Reserved",
    16: "Typographic Family Name",
    17: "Typographic Subfamily Name",
    18: "Compatible Full Name",
    19: "Sample Text",
    20: "PostScript CID Findfont Name",
    21: "WWS Family Name",
    22: "WWS Subfamily Name",
    23: "Light Background Palette",
    24: "Dark Background Palette",
    25: "Variations PostScript Name Prefix",
}

# Lookup rules: name IDs to try, in order
NameRule = Tuple[int, ...]
FAMILY_NAME: NameRule = (1,)
# Designer, or failing that, Manufacturer
DESIGNER_NAME: NameRule = (9, 8)


def name_label(name_id: int) -> str:
    """Get a human-readable label for a name ID."""
    return NAME_IDS.get(name_id, f"Unknown NameID ({name_id})")


def decode_name(platform_id: int, encoding_id: int, raw: bytes) -> str:
    """Decode the raw bytes of a name record.

    Windows and Unicode platform strings are always UTF-16BE (the
    encoding ID only says which repertoire is used), Macintosh ones
    are assumed to be MacRoman, and for anything else we just pass the
    bytes through as Latin-1 so that nothing is lost.
    """
    if platform_id in (PLATFORM_WINDOWS, PLATFORM_UNICODE):
        return raw.decode("utf-16-be", errors="replace")
    elif platform_id == PLATFORM_MACINTOSH:
        return raw.decode("mac_roman")
    return raw.decode("latin-1")


class NameRecord(NamedTuple):
    """A string from the `name` table."""

    platform_id: int
    encoding_id: int
    language_id: int
    name_id: int
    raw: bytes

    @property
    def value(self) -> str:
        """Decoded text of this record."""
        return decode_name(self.platform_id, self.encoding_id, self.raw)

    @property
    def label(self) -> str:
        """What this record is (e.g. "Designer")."""
        return name_label(self.name_id)


def parse_name_table(table: ByteReader) -> List[NameRecord]:
    """Read all the records in a `name` table, in table order.

    Raises:
      OutOfBounds: if any record (or its string) is outside the table.
    """
    (_version, count, storage) = table.unpack("HHH", 0)
    log.debug("name table: %d records, storage at %d", count, storage)
    records: List[NameRecord] = []
    for idx in range(count):
        (platform_id, encoding_id, language_id, name_id, length, offset) = (
            table.unpack("6H", HEADER_SIZE + idx * RECORD_SIZE)
        )
        raw = table.bytes(storage + offset, length)
        records.append(
            NameRecord(platform_id, encoding_id, language_id, name_id, raw)
        )
    return records


def find_name(
    records: Iterable[NameRecord],
    name_ids: Sequence[int],
    platform_id: int = PLATFORM_WINDOWS,
) -> Union[NameRecord, None]:
    """Find the best record for a lookup rule.

    Name IDs in `name_ids` are tried in order.  For the first one which
    has any records, the first one on `platform_id` is returned if there
    is one, otherwise the first one on any platform.

    Returns:
      The record found, or `None` if none of the name IDs are present.
    """
    records = list(records)
    for name_id in name_ids:
        candidates = [r for r in records if r.name_id == name_id]
        if not candidates:
            continue
        for record in candidates:
            if record.platform_id == platform_id:
                return record
        return candidates[0]
    return None
