"""
Hopefully not too hierarchical exception hierarchy.
"""


class SFNTException(Exception):
    pass


class InvalidContainer(SFNTException, ValueError):
    pass


class UnsupportedFont(InvalidContainer, NotImplementedError):
    pass


class OutOfBounds(SFNTException, IndexError):
    pass


class TableNotFound(SFNTException, KeyError):
    def __init__(self, tag: str) -> None:
        super().__init__(tag)
        self.tag = tag

    def __str__(self) -> str:
        # KeyError would otherwise give us the repr of the tag
        return f"Table {self.tag!r} not found in font"


class NoSuitableCmapSubtable(SFNTException, LookupError):
    pass


class UnsupportedCmapFormat(SFNTException, NotImplementedError):
    def __init__(self, format: int) -> None:
        super().__init__(f"Unsupported cmap subtable format {format}")
        self.format = format
