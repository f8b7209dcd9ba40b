"""
sfntinfo gets the metadata out of TrueType and OpenType fonts: names,
designers, glyph counts, and which characters they can display.

Basic usage:

    font = sfntinfo.open(path)
    print(f"{font.family_name} by {font.designer}")
    print(f"{font.glyph_count} glyphs")
    for record in font.name_records:
        print(f"    {record.label}: {record.value}")
    for codepoint in font.renderable_codepoints():
        print(f"    U+{codepoint:04X} -> {font.cmap[codepoint]}")
"""

import builtins
from os import PathLike
from pathlib import Path
from typing import Union

from sfntinfo.font import Font
from sfntinfo._version import __version__  # noqa: F401

__all__ = ["Font", "open"]


def open(path: Union[PathLike, str]) -> Font:
    """Open a font from a path on the filesystem.

    The whole file is read into memory and closed before returning.
    """
    with builtins.open(path, "rb") as fp:
        data = fp.read()
    return Font(data, path=Path(path))
