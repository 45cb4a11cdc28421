"""
Parser-specific data models

Type-safe structures passed between the scanning, extraction and decoding
stages. All of them live only for the processing of a single file.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class SourceKind(Enum):
    """
    Kind of a candidate source file, derived from its extension

    SCRIPT files (.js, .ts) carry markup inside comments and are comment
    filtered before scanning. MARKUP_ONLY files (.dcecomp) are scanned as-is.
    """
    SCRIPT = "script"
    MARKUP_ONLY = "markup-only"


class CommentMode(Enum):
    """States of the comment filter"""
    CODE = 0
    BLOCK_COMMENT = 1
    LINE_COMMENT = 2


@dataclass
class SourceFile:
    """
    One candidate file for a compilation pass

    Attributes:
        path: File path as supplied by file discovery
        kind: SCRIPT or MARKUP_ONLY
        text: File contents
    """
    path: str
    kind: SourceKind
    text: str


@dataclass
class MarkerOccurrence:
    """
    Position of one marker in (filtered) source text

    Example:
        For text "// #DCECOMP {...}" in "a.js":
        MarkerOccurrence(path="a.js", startOffset=3)
    """
    path: str
    startOffset: int


@dataclass
class RawFragment:
    r"""
    Text believed to contain one JSON object

    Everything before the opening brace is blanked out (newlines kept), so
    offsets, lines and columns inside `text` equal those of the source file.

    Example:
        Source "/*\n#DCECOMP {}*/" gives text "  \n         {}"
    """
    text: str
    sourcePath: str


@dataclass
class LocatedValue:
    """
    A decoded JSON value together with the position of its token

    Objects hold Dict[str, LocatedValue], arrays hold List[LocatedValue],
    scalars hold the plain Python value. Lines and columns are 1-based;
    -1 marks a synthesized value with no source token.
    """
    value: Any
    line: int = -1
    column: int = -1

    def get(self, key: str) -> Optional['LocatedValue']:
        """Member lookup for object values; None if absent or not an object"""
        if isinstance(self.value, dict):
            return self.value.get(key)
        return None

    def isObject(self) -> bool:
        return isinstance(self.value, dict)

    def isArray(self) -> bool:
        return isinstance(self.value, list)

    def plain(self) -> Any:
        """Strip positions and return the plain JSON value"""
        if isinstance(self.value, dict):
            return {k: v.plain() for k, v in self.value.items()}
        if isinstance(self.value, list):
            return [v.plain() for v in self.value]
        return self.value


@dataclass
class DecodedMarkup:
    """
    A successfully decoded markup object and its provenance

    The source path is carried next to the author's object rather than
    inside it, so no author key can clash with it.

    Attributes:
        root: The decoded top-level object
        sourcePath: Path of the file the markup came from
        kind: Kind of that file
    """
    root: LocatedValue
    sourcePath: str
    kind: SourceKind = SourceKind.MARKUP_ONLY


@dataclass
class ParseResult:
    """
    Everything the parser produced for one file

    Attributes:
        markups: Decoded markup objects in source order
        problems: Problems for occurrences that could not be decoded
    """
    markups: List[DecodedMarkup] = field(default_factory=list)
    problems: List[Any] = field(default_factory=list)  # List[Problem]
