"""Signalset Lexer: converts raw JSONC text into a flat list of tokens.

The lexer is a single-pass character scanner that produces a
``list[Token]`` from a signalset source string.  It tracks offset, line
and column numbers for every token so the parser can build nodes whose
spans map straight back onto the original buffer.

Comment styles supported:
    - ``//`` single-line comments (run to end of line)
    - ``/* ... */`` block comments (may span multiple lines)

String literals are double-quoted and support the JSON escapes
``\\" \\\\ \\/ \\b \\f \\n \\r \\t`` and ``\\uXXXX`` (surrogate pairs are
combined).

Numbers follow the JSON grammar, including a leading ``-`` and an
optional fraction and exponent.
"""
from __future__ import annotations

import re
from typing import Final

from obdb.grammar.tokens import KEYWORDS, PUNCTUATION, Token, TokenType

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_NUMBER: Final[re.Pattern[str]] = re.compile(r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?")
_WORD: Final[re.Pattern[str]] = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_HEX4: Final[re.Pattern[str]] = re.compile(r"[0-9A-Fa-f]{4}")

_ESCAPE_MAP: Final[dict[str, str]] = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


class LexError(Exception):
    """Raised when the lexer encounters invalid input.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    line:
        1-based line number where the error occurred.
    col:
        1-based column number where the error occurred.
    offset:
        0-based offset in the source where the error occurred.
    """

    def __init__(self, message: str, line: int, col: int, offset: int) -> None:
        super().__init__(f"LexError at {line}:{col}: {message}")
        self.lex_message = message
        self.line = line
        self.col = col
        self.offset = offset


class Lexer:
    """Single-pass JSONC lexer.

    Parameters
    ----------
    source:
        The complete signalset text to tokenize.
    """

    __slots__ = ("_source", "_pos", "_line", "_col", "_tokens", "_token_line", "_token_col")

    def __init__(self, source: str) -> None:
        self._source: str = source
        self._pos: int = 0
        self._line: int = 1
        self._col: int = 1
        self._tokens: list[Token] = []
        self._token_line: int = 1
        self._token_col: int = 1

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def tokenize(self) -> list[Token]:
        """Scan the entire source and return the complete token list.

        The list always ends with an ``EOF`` token.

        Returns
        -------
        list[Token]
            Ordered list of tokens (COMMENT tokens are included).

        Raises
        ------
        LexError
            On any character that cannot begin a valid token.
        """
        while self._pos < len(self._source):
            self._scan_one()
        self._token_line = self._line
        self._token_col = self._col
        self._emit(TokenType.EOF, "", self._pos)
        return self._tokens

    # ------------------------------------------------------------------
    # Internal scanner
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position without advancing."""
        return self._source[self._pos] if self._pos < len(self._source) else ""

    def _peek(self, offset: int = 1) -> str:
        """Return the character at ``pos + offset`` without advancing."""
        idx = self._pos + offset
        return self._source[idx] if idx < len(self._source) else ""

    def _advance(self) -> str:
        """Consume and return the current character, updating line/col."""
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _advance_to(self, end: int) -> None:
        while self._pos < end:
            self._advance()

    def _emit(self, token_type: TokenType, value: str, start_offset: int) -> None:
        """Append a token spanning ``start_offset`` up to the current position."""
        self._tokens.append(
            Token(
                type=token_type,
                value=value,
                raw=self._source[start_offset : self._pos],
                line=self._token_line,
                col=self._token_col,
                offset=start_offset,
            )
        )

    def _error(self, message: str, start: int) -> LexError:
        return LexError(message, self._token_line, self._token_col, start)

    def _scan_one(self) -> None:
        """Scan exactly one token (or skip whitespace)."""
        self._token_line = self._line
        self._token_col = self._col
        start = self._pos
        ch = self._current()

        if ch in (" ", "\t", "\r", "\n", "\ufeff"):
            self._advance()
            return

        if ch == "/" and self._peek() == "/":
            self._scan_line_comment(start)
            return
        if ch == "/" and self._peek() == "*":
            self._scan_block_comment(start)
            return

        if ch == '"':
            self._scan_string(start)
            return

        if ch == "-" or ch.isdigit():
            self._scan_number(start)
            return

        if ch in PUNCTUATION:
            self._advance()
            self._emit(PUNCTUATION[ch], ch, start)
            return

        match = _WORD.match(self._source, self._pos)
        if match is not None:
            word = match.group()
            if word not in KEYWORDS:
                raise self._error(f"Unexpected identifier {word!r}", start)
            self._advance_to(match.end())
            self._emit(KEYWORDS[word], word, start)
            return

        raise self._error(f"Unexpected character {ch!r}", start)

    # ------------------------------------------------------------------
    # Token-specific scanners
    # ------------------------------------------------------------------

    def _scan_line_comment(self, start: int) -> None:
        """Consume a ``//`` comment through the end of the line."""
        while self._pos < len(self._source) and self._current() != "\n":
            self._advance()
        self._emit(TokenType.COMMENT, self._source[start : self._pos], start)

    def _scan_block_comment(self, start: int) -> None:
        """Consume a ``/* ... */`` block comment."""
        self._advance()  # /
        self._advance()  # *
        while self._pos < len(self._source):
            if self._current() == "*" and self._peek() == "/":
                self._advance()
                self._advance()
                self._emit(TokenType.COMMENT, self._source[start : self._pos], start)
                return
            self._advance()
        raise self._error("Unterminated block comment", start)

    def _scan_string(self, start: int) -> None:
        """Consume a double-quoted string literal and decode its escapes."""
        self._advance()  # opening "
        buf: list[str] = []
        while self._pos < len(self._source):
            ch = self._current()
            if ch == '"':
                self._advance()
                self._emit(TokenType.STRING, "".join(buf), start)
                return
            if ch == "\n":
                raise self._error("Unterminated string literal (newline in string)", start)
            if ch != "\\":
                buf.append(self._advance())
                continue
            self._advance()  # backslash
            esc = self._current()
            if esc in _ESCAPE_MAP:
                buf.append(_ESCAPE_MAP[esc])
                self._advance()
            elif esc == "u":
                buf.append(self._scan_unicode_escape(start))
            else:
                raise self._error(f"Invalid escape sequence '\\{esc}'", start)
        raise self._error("Unterminated string literal (EOF)", start)

    def _scan_unicode_escape(self, start: int) -> str:
        code = self._read_hex4(start)
        if 0xD800 <= code <= 0xDBFF and self._current() == "\\" and self._peek() == "u":
            self._advance()  # backslash
            low = self._read_hex4(start)
            if 0xDC00 <= low <= 0xDFFF:
                return chr(0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00))
            return chr(code) + chr(low)
        return chr(code)

    def _read_hex4(self, start: int) -> int:
        self._advance()  # u
        match = _HEX4.match(self._source, self._pos)
        if match is None:
            raise self._error("Invalid unicode escape", start)
        self._advance_to(match.end())
        return int(match.group(), 16)

    def _scan_number(self, start: int) -> None:
        """Consume a JSON number literal."""
        match = _NUMBER.match(self._source, self._pos)
        if match is None:
            raise self._error("Invalid number literal", start)
        self._advance_to(match.end())
        self._emit(TokenType.NUMBER, match.group(), start)


# ---------------------------------------------------------------------------
# Module-level convenience function
# ---------------------------------------------------------------------------


def tokenize(source: str) -> list[Token]:
    """Tokenize a signalset source string and return the complete token list.

    Parameters
    ----------
    source:
        JSONC source text.

    Returns
    -------
    list[Token]
        All tokens including COMMENT tokens, terminated by EOF.

    Raises
    ------
    LexError
        If the source contains invalid characters or unterminated literals.

    Example
    -------
    ::

        from obdb.lexer import tokenize
        tokens = tokenize('{ "commands": [] }  // empty')
    """
    return Lexer(source).tokenize()
