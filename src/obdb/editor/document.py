"""Text documents addressed by editor positions.

Editors address text by zero-based ``(line, character)`` positions
while the parser and rules work with offsets.  ``TextDocument`` converts
between the two for one fixed buffer.  As in LSP, ``character`` counts
UTF-16 code units, so a character outside the Basic Multilingual Plane
occupies two.
"""
from __future__ import annotations

import bisect
from dataclasses import dataclass, field


def _utf16_length(text: str) -> int:
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


@dataclass(frozen=True, order=True)
class Position:
    """Zero-based line and UTF-16 character offset within the line."""

    line: int
    character: int


@dataclass(frozen=True)
class Range:
    """Half-open range ``[start, end)`` between two positions."""

    start: Position
    end: Position

    def intersects(self, other: "Range") -> bool:
        """Return True if the ranges overlap or touch."""
        return self.start <= other.end and other.start <= self.end


@dataclass(frozen=True)
class TextDocument:
    """An immutable snapshot of a document's text.

    Parameters
    ----------
    text:
        Full document text.
    uri:
        Identifier of the document, e.g. ``file:///.../default.json``.
    """

    text: str
    uri: str = ""
    _line_starts: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        starts = [0]
        starts.extend(i + 1 for i, ch in enumerate(self.text) if ch == "\n")
        object.__setattr__(self, "_line_starts", tuple(starts))

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def position_at(self, offset: int) -> Position:
        """Convert an offset to a position; offsets are clamped to the text."""
        offset = max(0, min(offset, len(self.text)))
        line = bisect.bisect_right(self._line_starts, offset) - 1
        start = self._line_starts[line]
        return Position(line=line, character=_utf16_length(self.text[start:offset]))

    def offset_at(self, position: Position) -> int:
        """Convert a position to an offset; positions are clamped to the text."""
        if position.line < 0:
            return 0
        if position.line >= len(self._line_starts):
            return len(self.text)
        start = self._line_starts[position.line]
        if position.line + 1 < len(self._line_starts):
            line_end = self._line_starts[position.line + 1] - 1
        else:
            line_end = len(self.text)
        offset = start
        units = 0
        while offset < line_end and units < position.character:
            units += 2 if ord(self.text[offset]) > 0xFFFF else 1
            offset += 1
        return offset

    def range_of(self, offset: int, length: int) -> Range:
        """Return the range covering ``length`` characters from ``offset``."""
        return Range(start=self.position_at(offset), end=self.position_at(offset + length))

    def line_text(self, line: int) -> str:
        start = self._line_starts[line]
        end = self._line_starts[line + 1] - 1 if line + 1 < len(self._line_starts) else len(self.text)
        return self.text[start:end]
