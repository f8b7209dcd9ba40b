"""sfntinfo's CLI, which can get stuff out of a font (one font) for you.

By default this will just print some hopefully useful metadata about
the font as a JSON dictionary.  This dictionary will contain the
following keys, unless the table they come from is missing or broken:

- `flavor`: "TrueType" or "OpenType" (meaning CFF outlines)
- `tables`: list of tables in the font, containing:
  - `tag`: the four-character table tag
  - `checksum`: the table checksum, in hexadecimal, unverified
  - `offset`: where the table is in the file
  - `length`: how big the table is
- `family_name`: the font family name
- `designer`: the designer, or the manufacturer if there is none
- `glyph_count`: the number of glyphs in the font
- `codepoint_count`: the number of Unicode characters with a glyph
- `names`: list of all strings in the `name` table, containing:
  - `name_id`: what the string is, as a number
  - `label`: what the string is, in English
  - `platform_id`, `encoding_id`, `language_id`: where it applies
  - `value`: the string itself

You may also want the complete Unicode to glyph mapping:

    sfntinfo --cmap foo.ttf

Or just the list of characters that have glyphs, for instance to feed
them to a renderer:

    sfntinfo --renderable foo.ttf

"""

import argparse
import json
import logging
import sys
from pathlib import Path

import sfntinfo
from sfntinfo.exceptions import SFNTException
from sfntinfo.font import Font
from sfntinfo.metadata import asobj


def make_argparse() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("font", type=Path)
    parser.add_argument(
        "-m",
        "--cmap",
        action="store_true",
        help="Print the mapping of Unicode code points to glyph indices",
    )
    parser.add_argument(
        "-r",
        "--renderable",
        action="store_true",
        help="Print the list of Unicode code points which have a glyph",
    )
    parser.add_argument(
        "-o",
        "--outfile",
        help="File to write output (or - for standard output)",
        type=argparse.FileType("wt", encoding="utf-8"),
        default="-",
    )
    parser.add_argument(
        "--debug",
        help="Very verbose debugging output",
        action="store_true",
    )
    return parser


def extract_cmap(font: Font, args: argparse.Namespace) -> None:
    """Extract the character map."""
    # JSON keys have to be strings
    json.dump({str(c): gid for c, gid in font.cmap.items()}, args.outfile, indent=2)


def extract_renderable(font: Font, args: argparse.Namespace) -> None:
    """Extract code points with glyphs."""
    json.dump(list(font.renderable_codepoints()), args.outfile)


def extract_metadata(font: Font, args: argparse.Namespace) -> None:
    """Extract random metadata."""
    json.dump(asobj(font), args.outfile, indent=2, ensure_ascii=False)


def main() -> None:
    parser = make_argparse()
    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)
    try:
        font = sfntinfo.open(args.font)
        if args.cmap:
            extract_cmap(font, args)
        elif args.renderable:
            extract_renderable(font, args)
        else:
            extract_metadata(font, args)
    except (OSError, SFNTException) as e:
        parser.error(f"Something went wrong:\n{e}")
    finally:
        if args.outfile is not sys.stdout:
            args.outfile.close()


if __name__ == "__main__":
    main()
