"""Bounds-checked big-endian reads over a font buffer.

Everything in an sfnt file is addressed by offsets read from the file
itself, which means that a corrupt or malicious font can point us
anywhere.  Rather than relying on slicing (which silently truncates)
or on `struct.error` (which is raised too late and says nothing
useful), every read goes through a `ByteReader` which checks the
requested range against its region before touching the data.
"""

import struct
from typing import Tuple, Union

from sfntinfo.exceptions import OutOfBounds

UINT8 = struct.Struct(">B")
UINT16 = struct.Struct(">H")
INT16 = struct.Struct(">h")
UINT32 = struct.Struct(">L")


class ByteReader:
    """A read-only view on a region of an immutable byte buffer.

    Offsets given to the read methods are relative to the start of the
    region (i.e. table-local offsets when the region is a table).

    Args:
      data: The whole buffer, which is shared and never copied.
      start: Offset of the region in `data`.
      length: Length of the region, or `None` for the rest of `data`.

    Raises:
      OutOfBounds: if the region does not fit inside `data`.
    """

    __slots__ = ("data", "start", "end")

    def __init__(self, data: bytes, start: int = 0, length: Union[int, None] = None):
        if length is None:
            length = len(data) - start
        if start < 0 or length < 0 or start + length > len(data):
            raise OutOfBounds(
                f"Region of {length} bytes at offset {start} "
                f"exceeds buffer of {len(data)} bytes"
            )
        self.data = data
        self.start = start
        self.end = start + length

    def __len__(self) -> int:
        return self.end - self.start

    def __repr__(self) -> str:
        return f"<ByteReader: start={self.start} end={self.end}>"

    def _check(self, offset: int, width: int) -> int:
        """Verify that `width` bytes at `offset` are inside the region
        and return the corresponding absolute position."""
        if offset < 0 or width < 0 or offset + width > self.end - self.start:
            raise OutOfBounds(
                f"Read of {width} bytes at offset {offset} "
                f"exceeds region of {len(self)} bytes"
            )
        return self.start + offset

    def uint8(self, offset: int) -> int:
        return UINT8.unpack_from(self.data, self._check(offset, 1))[0]

    def uint16(self, offset: int) -> int:
        return UINT16.unpack_from(self.data, self._check(offset, 2))[0]

    def int16(self, offset: int) -> int:
        return INT16.unpack_from(self.data, self._check(offset, 2))[0]

    def uint32(self, offset: int) -> int:
        return UINT32.unpack_from(self.data, self._check(offset, 4))[0]

    def bytes(self, offset: int, length: int) -> bytes:
        pos = self._check(offset, length)
        return self.data[pos : pos + length]

    def unpack(self, fmt: str, offset: int) -> Tuple:
        """Unpack a big-endian `struct` format (without the leading `>`)
        at `offset`."""
        st = struct.Struct(">" + fmt)
        return st.unpack_from(self.data, self._check(offset, st.size))

    def uint16_array(self, offset: int, count: int) -> Tuple[int, ...]:
        return self.unpack("%dH" % count, offset)

    def int16_array(self, offset: int, count: int) -> Tuple[int, ...]:
        return self.unpack("%dh" % count, offset)

    def region(self, offset: int, length: Union[int, None] = None) -> "ByteReader":
        """Get a view on a sub-region (by default, everything from
        `offset` to the end of this one)."""
        if length is None:
            length = len(self) - offset
        return ByteReader(self.data, self._check(offset, length), length)
