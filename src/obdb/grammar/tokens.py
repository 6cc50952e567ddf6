"""Token definitions for JSON-with-comments signalset documents.

Defines the token vocabulary used by the signalset lexer.  Every
punctuation mark, literal kind and keyword literal is represented as a
member of the ``TokenType`` enum, and every scanned token is represented
by a ``Token`` dataclass that carries its type, raw text, and source
position.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    """Exhaustive enumeration of all JSONC token types."""

    # -----------------------------------------------------------------
    # Punctuation
    # -----------------------------------------------------------------
    LBRACE = auto()
    RBRACE = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    COLON = auto()
    COMMA = auto()

    # -----------------------------------------------------------------
    # Literals
    # -----------------------------------------------------------------
    STRING = auto()
    NUMBER = auto()
    TRUE = auto()
    FALSE = auto()
    NULL = auto()

    # -----------------------------------------------------------------
    # Trivia
    # -----------------------------------------------------------------
    COMMENT = auto()
    EOF = auto()


# Mapping from literal keyword text to its TokenType.
KEYWORDS: dict[str, TokenType] = {
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "null": TokenType.NULL,
}

PUNCTUATION: dict[str, TokenType] = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ":": TokenType.COLON,
    ",": TokenType.COMMA,
}


@dataclass(frozen=True, slots=True)
class Token:
    """A single scanned token with source-location metadata.

    Parameters
    ----------
    type:
        The ``TokenType`` variant for this token.
    value:
        The decoded value: unescaped text for strings, raw text otherwise.
    raw:
        The exact source text of the token, quotes and escapes included.
    line:
        1-based line number in the source file.
    col:
        1-based column number of the first character of the token.
    offset:
        0-based offset from the start of the source string.
    """

    type: TokenType
    value: str
    raw: str
    line: int
    col: int
    offset: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.raw!r}, {self.line}:{self.col})"

    @property
    def end(self) -> int:
        """Offset one past the last character of the token."""
        return self.offset + len(self.raw)

    @property
    def is_literal(self) -> bool:
        """Return True if this token can start a JSON scalar value."""
        return self.type in (
            TokenType.STRING,
            TokenType.NUMBER,
            TokenType.TRUE,
            TokenType.FALSE,
            TokenType.NULL,
        )
