from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class NodeKind(Enum):
    """Enumeration of entry kinds produced while walking a directory.

    Attributes:
        FILE: Regular file (or anything that is neither a directory nor a symlink)
        DIRECTORY: Directory
        SYMLINK: Symbolic link; never followed, rendered as a leaf
    """

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"


class ContentKind(Enum):
    """How the ``content`` attached to a file node should be interpreted.

    Attributes:
        TEXT: The full, verbatim text of the file
        BINARY: A marker; the file is not valid text
        UNREADABLE: A marker; the file could not be read
    """

    TEXT = "text"
    BINARY = "binary"
    UNREADABLE = "unreadable"


class GlyphSet(str, Enum):
    """Glyph family used to draw tree connectors."""

    UNICODE = "unicode"
    ASCII = "ascii"
