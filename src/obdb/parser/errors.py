"""Parse error types for the signalset parser.

All parse errors carry source-location information so that the CLI and
editor integrations can display precise, actionable error messages.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from obdb.grammar.tokens import Token, TokenType


class RecoveryStrategy(Enum):
    """How the parser continued after an error.

    SKIP_TOKEN
        The unexpected token was consumed and parsing resumed at the
        next position (e.g. a disallowed trailing comma).
    INSERT_MISSING
        A missing token was assumed present (e.g. a comma between two
        array elements) and parsing continued.
    ABORT
        Parsing stopped; the document cannot be turned into a tree.
    """

    SKIP_TOKEN = auto()
    INSERT_MISSING = auto()
    ABORT = auto()


@dataclass(frozen=True)
class ParseError(Exception):
    """A single parse error with location and recovery hint.

    Parameters
    ----------
    message:
        Human-readable description of the error.
    line:
        1-based line of the offending token.
    col:
        1-based column of the offending token.
    offset:
        0-based offset of the offending token.
    expected:
        What token types were expected at this position.
    found:
        The actual token that was encountered, if available.
    recovery:
        How the parser continued after recording the error.
    """

    message: str
    line: int
    col: int
    offset: int
    expected: tuple[TokenType, ...]
    found: Token | None
    recovery: RecoveryStrategy

    def __str__(self) -> str:
        loc = f"{self.line}:{self.col}"
        if self.found is not None:
            found = "end of file" if self.found.type is TokenType.EOF else repr(self.found.raw)
            return f"ParseError at {loc}: {self.message} (found {found})"
        return f"ParseError at {loc}: {self.message}"

    # dataclass(frozen=True) doesn't call Exception.__init__ automatically
    def __post_init__(self) -> None:
        object.__setattr__(self, "args", (str(self),))


@dataclass
class ParseErrorCollection(Exception):
    """Aggregates every ``ParseError`` from a single parse run.

    Recoverable errors are collected while parsing continues; the
    collection is raised once the run ends if it is not empty.

    Parameters
    ----------
    errors:
        Ordered list of errors encountered during parsing.
    """

    errors: list[ParseError] = field(default_factory=list)

    def add(self, error: ParseError) -> None:
        """Append a new error to the collection."""
        self.errors.append(error)

    @property
    def has_errors(self) -> bool:
        """Return True if any errors were recorded."""
        return bool(self.errors)

    def __str__(self) -> str:
        if not self.errors:
            return "ParseErrorCollection (no errors)"
        lines = [f"ParseErrorCollection ({len(self.errors)} error(s)):"]
        for err in self.errors:
            lines.append(f"  {err}")
        return "\n".join(lines)
