r"""
Parser for #DCECOMP markup

Finds the component markup embedded in one source file and decodes it into
JSON objects tagged with their provenance.

The parser operates in three phases:
1. Scanning: Locate every #DCECOMP marker in the (comment filtered) text
2. Extraction: Cut the balanced-brace JSON fragment following each marker
3. Decoding: Parse each fragment as JSON, keeping token positions

Key features:
- Comment filtering for script sources (.js, .ts) before scanning
- Brace depth tracking for nested objects
- Line/column fidelity: fragments keep the file's layout, so positions
  reported by the JSON decoder are positions in the source file
- One broken occurrence never hides the others

Example:
    >>> parser = MarkupParser('/* #DCECOMP {"class": "Door"} */', "door.js")
    >>> result = parser.parse()
    >>> result.markups[0].root.get("class").value
    'Door'
"""

import os
from pathlib import PurePath
from typing import List, Optional

from ..models.parser import (
    DecodedMarkup,
    LocatedValue,
    MarkerOccurrence,
    ParseResult,
    RawFragment,
    SourceKind,
)
from ..models.problems import MESSAGE_INVALID_JSON, Problem
from .lexer import comments_filter
from .located import json_decodeLocated
from .log import LOG


IMPORT_FILE_KEY = 'import-file'
NEWLINES = ('\n', '\r')


def markers_find(text: str, marker: str) -> List[int]:
    """
    Find every occurrence of `marker` in `text`

    Each search restarts one character past the previous hit, so
    overlapping occurrences are all reported.

    Args:
        text: Text to search
        marker: Literal marker token

    Returns:
        Offsets of the first character of each occurrence, ascending

    Example:
        >>> markers_find("#DCECOMP{} #DCECOMP{}", "#DCECOMP")
        [0, 11]
    """
    offsets: List[int] = []
    if not marker:
        return offsets

    position = text.find(marker)
    while position >= 0:
        offsets.append(position)
        position = text.find(marker, position + 1)

    return offsets


def fragment_extract(text: str, start: int) -> str:
    """
    Cut the brace-balanced JSON fragment that follows offset `start`

    Every character before the opening brace, from the start of the text,
    is replaced by a space (newline characters kept), so the fragment has
    the same line structure as the file. From the opening brace on, text is
    copied verbatim until the brace depth returns to zero.

    Braces inside JSON string literals are counted like any other brace.

    Args:
        text: Source text (already comment filtered for scripts)
        start: Offset to start seeking the opening brace from

    Returns:
        Fragment text; all blank if no opening brace follows, truncated at
        end of text if the braces never balance. Both fail to decode.

    Example:
        >>> fragment_extract('x = #DCECOMP {"a": {"b": 1}} tail', 12)
        '             {"a": {"b": 1}}'
    """
    result: List[str] = []
    position = 0
    start = max(0, min(start, len(text)))

    # Seek: blank everything up to the opening brace
    while position < len(text):
        char = text[position]
        if position >= start and char == '{':
            break
        result.append(char if char in NEWLINES else ' ')
        position += 1

    # Capture: copy until depth drops back to zero
    depth = 0
    while position < len(text):
        char = text[position]
        result.append(char)
        position += 1
        if char == '{':
            depth += 1
        elif char == '}':
            depth -= 1
            if depth == 0:
                break

    return ''.join(result)


def importPath_fromSourcePath(source_path: str, project_root: Optional[str] = None) -> str:
    """
    Derive the import path of a script relative to the project root

    Args:
        source_path: Path of the script file
        project_root: Project root directory (current directory if None)

    Returns:
        Relative path without extension, with forward slashes

    Example:
        >>> importPath_fromSourcePath("/proj/src/door.ts", "/proj")
        'src/door'
    """
    relative = os.path.relpath(source_path, project_root or os.curdir)
    without_extension = str(PurePath(relative).with_suffix(''))
    return without_extension.replace('\\', '/')


class MarkupParser:
    """
    Parser for the #DCECOMP markup of a single file

    Handles:
    - Comment filtering for script sources
    - Any number of markers per file
    - Default import path synthesis for scripts
    - Decode failures as Problems (path only, no position)
    """

    def __init__(
        self,
        source: str,
        path: str,
        kind: Optional[SourceKind] = None,
        marker: Optional[str] = None,
        project_root: Optional[str] = None,
    ) -> None:
        """
        Initialize parser with source text

        Args:
            source: Raw file contents
            path: Path of the file (used for provenance and import paths)
            kind: SourceKind of the file; resolved from the extension if None
            marker: Marker token; configured marker if None
            project_root: Root the default import path is made relative to

        Attributes:
            source: Source text being parsed
            text: Text that is scanned (filtered for scripts)
            path: Source file path
            kind: Source kind
            marker: Marker token
            project_root: Project root for import path synthesis
        """
        from ..config import appsettings

        self.source = source
        self.path = path
        self.kind = kind if kind is not None else appsettings.sourceKind_resolve(path)
        self.marker = marker if marker is not None else appsettings.marker
        self.project_root = project_root
        self.text = source

    def parse(self) -> ParseResult:
        """
        Scan, extract and decode every markup occurrence in the source

        Returns:
            ParseResult with decoded markups in source order and one
            Problem per occurrence that could not be decoded
        """
        result = ParseResult()

        if self.kind == SourceKind.SCRIPT:
            self.text = comments_filter(self.source)

        occurrences = self.occurrences_find()
        LOG(f"{self.path}: {len(occurrences)} marker(s)", level=3)

        for occurrence in occurrences:
            fragment = self.fragment_get(occurrence)
            markup = self.fragment_decode(fragment)
            if markup is None:
                result.problems.append(Problem(MESSAGE_INVALID_JSON, self.path))
            else:
                result.markups.append(markup)

        return result

    def occurrences_find(self) -> List[MarkerOccurrence]:
        """Locate all markers in the scanned text"""
        return [
            MarkerOccurrence(path=self.path, startOffset=offset)
            for offset in markers_find(self.text, self.marker)
        ]

    def fragment_get(self, occurrence: MarkerOccurrence) -> RawFragment:
        """Extract the fragment following one marker"""
        text = fragment_extract(self.text, occurrence.startOffset + len(self.marker))
        return RawFragment(text=text, sourcePath=self.path)

    def fragment_decode(self, fragment: RawFragment) -> Optional[DecodedMarkup]:
        """
        Decode one fragment as JSON and attach provenance

        For script sources without an explicit import-file, the import path
        is derived from the file path relative to the project root.

        Args:
            fragment: Extracted fragment

        Returns:
            DecodedMarkup, or None if the fragment is not a valid JSON object
        """
        try:
            root = json_decodeLocated(fragment.text)
        except ValueError as e:
            LOG(f"{fragment.sourcePath}: invalid JSON after marker: {e}", level=3)
            return None
        except RecursionError as e:
            LOG(f"{fragment.sourcePath}: JSON after marker nested too deeply: {e}", level=3)
            return None

        if not root.isObject():
            return None

        if self.kind == SourceKind.SCRIPT and IMPORT_FILE_KEY not in root.value:
            root.value[IMPORT_FILE_KEY] = LocatedValue(
                importPath_fromSourcePath(fragment.sourcePath, self.project_root)
            )

        return DecodedMarkup(root=root, sourcePath=fragment.sourcePath, kind=self.kind)
