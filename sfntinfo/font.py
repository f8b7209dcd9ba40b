import functools
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, List, Mapping, Sequence, Tuple, Union

from sfntinfo.cmap import parse_cmap
from sfntinfo.directory import TableDirectory
from sfntinfo.maxp import parse_maxp
from sfntinfo.name import (
    DESIGNER_NAME,
    FAMILY_NAME,
    NameRecord,
    find_name,
    parse_name_table,
)
from sfntinfo.reader import ByteReader

log = logging.getLogger(__name__)

UNKNOWN_FONT_NAME = "Unknown Font Name"


class Font:
    """A TrueType or OpenType font in memory.

    Creating a `Font` does nothing more than verifying that the data
    looks like an sfnt font and reading its table directory.  Tables
    are decoded lazily, when the corresponding property is first
    accessed, and the results are cached.  Since each table is decoded
    independently, a font with a broken or missing `cmap` can still
    tell you its name, and vice versa.

    Fonts are read-only, so they can be shared between threads.  At
    worst two threads will decode the same table at the same time and
    store identical results.

    Args:
      data: Contents of the font file.
      path: Where the data came from, if anywhere, for the benefit of
        renderers which want a file.

    Raises:
      InvalidContainer: if this is not an sfnt font.
      OutOfBounds: if the table directory is truncated.
    """

    def __init__(self, data: bytes, path: Union[Path, None] = None) -> None:
        self.buffer = bytes(data)
        self.path = path
        self.directory = TableDirectory(self.buffer)

    def __repr__(self) -> str:
        return "<Font: flavor=%s path=%s>" % (self.flavor, self.path)

    @property
    def flavor(self) -> str:
        """Either "TrueType" or "OpenType" (with CFF outlines)."""
        return self.directory.flavor

    @property
    def tables(self) -> List[str]:
        """Tags of all tables in the font."""
        return self.directory.tags

    def table(self, tag: str) -> ByteReader:
        """Get a bounds-checked view on the table `tag`."""
        return self.directory.table(tag)

    @functools.cached_property
    def name_records(self) -> Tuple[NameRecord, ...]:
        """All records in the `name` table, in table order."""
        return tuple(parse_name_table(self.table("name")))

    def name(
        self, name_ids: Sequence[int], default: Union[str, None] = None
    ) -> Union[str, None]:
        """Look up a name according to a rule.

        Args:
          name_ids: Name IDs to try in order (see `sfntinfo.name`
            for some useful ones)
          default: What to return if none of them are present.

        Raises:
          TableNotFound: if there is no `name` table at all.
        """
        record = find_name(self.name_records, name_ids)
        if record is None:
            return default
        return record.value

    @property
    def family_name(self) -> str:
        """Font family name, or "Unknown Font Name"."""
        name = self.name(FAMILY_NAME)
        return UNKNOWN_FONT_NAME if name is None else name

    @property
    def designer(self) -> str:
        """Designer of the font, or its manufacturer if not known."""
        name = self.name(DESIGNER_NAME)
        return f"Unknown Record #{DESIGNER_NAME[0]}" if name is None else name

    @functools.cached_property
    def glyph_count(self) -> int:
        """Number of glyphs in the font."""
        return parse_maxp(self.table("maxp"))

    @functools.cached_property
    def cmap(self) -> Mapping[int, int]:
        """Mapping of Unicode code points to glyph indices.

        Unmapped code points inside the ranges covered by the font
        are present with glyph index 0 (i.e. `.notdef`).
        """
        return MappingProxyType(parse_cmap(self.table("cmap")))

    def renderable_codepoints(self) -> Iterator[int]:
        """Iterate over code points which are mapped to an actual glyph."""
        return (c for c, gid in self.cmap.items() if gid != 0)
