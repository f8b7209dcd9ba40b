"""sfnt header and table directory."""

import logging
from typing import Dict, Iterator, List, NamedTuple

from sfntinfo import settings
from sfntinfo.exceptions import InvalidContainer, TableNotFound, UnsupportedFont
from sfntinfo.reader import ByteReader

log = logging.getLogger(__name__)

# sfnt version tags that we know how to read
SFNT_VERSIONS = {
    b"\x00\x01\x00\x00": "TrueType",
    b"OTTO": "OpenType",
}
# Things that are fonts, but not ones we handle
OTHER_CONTAINERS = {
    b"wOFF": "WOFF",
    b"wOF2": "WOFF2",
    b"ttcf": "TrueType Collection",
}
HEADER_SIZE = 12
ENTRY_SIZE = 16


class TableEntry(NamedTuple):
    """An entry in the table directory."""

    tag: str
    checksum: int
    offset: int
    length: int


class TableDirectory:
    """Table directory of an sfnt font.

    This maps four-character tags (which are case-sensitive, and may
    contain spaces, e.g. `"cvt "`) to the location of the table in the
    buffer.  Tables are only checked against the size of the buffer
    when they are requested with `table`, so that one bogus entry does
    not prevent us from reading the others (unless `settings.STRICT`
    is set).

    Args:
      data: The entire font file.

    Raises:
      InvalidContainer: if this isn't a TrueType or OpenType font.
      OutOfBounds: if the directory itself is truncated.
    """

    def __init__(self, data: bytes) -> None:
        self.data = data
        if len(data) < HEADER_SIZE:
            raise InvalidContainer(
                f"Buffer of {len(data)} bytes is too short for an sfnt header"
            )
        reader = ByteReader(data)
        self.sfnt_version = reader.bytes(0, 4)
        if self.sfnt_version not in SFNT_VERSIONS:
            if self.sfnt_version in OTHER_CONTAINERS:
                raise UnsupportedFont(
                    "%s fonts are not supported"
                    % OTHER_CONTAINERS[self.sfnt_version]
                )
            raise InvalidContainer(
                "Unknown sfnt version %r - is this really a font?" % self.sfnt_version
            )
        ntables = reader.uint16(4)
        self.entries: Dict[str, TableEntry] = {}
        for idx in range(ntables):
            pos = HEADER_SIZE + idx * ENTRY_SIZE
            tag = reader.bytes(pos, 4).decode("latin-1")
            (checksum, offset, length) = reader.unpack("LLL", pos + 4)
            if tag in self.entries:
                if settings.STRICT:
                    raise InvalidContainer(f"Duplicate table {tag!r} in directory")
                log.warning("Duplicate table %r in directory, using the last one", tag)
                # Keep directory order consistent with "last one wins"
                del self.entries[tag]
            self.entries[tag] = TableEntry(tag, checksum, offset, length)
        log.debug("table directory: %r", self.entries)
        if settings.STRICT:
            for tag in self.entries:
                self.table(tag)

    def __repr__(self) -> str:
        return "<TableDirectory: flavor=%s tags=%r>" % (self.flavor, self.tags)

    def __contains__(self, tag: object) -> bool:
        return tag in self.entries

    def __getitem__(self, tag: str) -> TableEntry:
        try:
            return self.entries[tag]
        except KeyError:
            raise TableNotFound(tag) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def flavor(self) -> str:
        """Either "TrueType" or "OpenType" (with CFF outlines)."""
        return SFNT_VERSIONS[self.sfnt_version]

    @property
    def tags(self) -> List[str]:
        """Tags of all tables, in directory order."""
        return list(self.entries)

    def table(self, tag: str) -> ByteReader:
        """Get a bounds-checked view on a table.

        Raises:
          TableNotFound: if there is no such table.
          OutOfBounds: if the table extends past the end of the buffer.
        """
        entry = self[tag]
        return ByteReader(self.data, entry.offset, entry.length)
