"""Result types for the signalset linter.

A ``LintResult`` is a finding attached to a node of the parsed tree,
optionally carrying a ``Suggestion``: a titled list of ``TextEdit``
splices over the *original* source buffer.  Severity is not stored on
the result; it belongs to the rule that produced it and is resolved
through the registry by ``rule_id``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from obdb.ast.nodes import Node


class LintSeverity(IntEnum):
    """Severity levels for rules, ordered from most to least severe."""

    ERROR = 0
    WARNING = 1
    INFORMATION = 2
    HINT = 3

    @classmethod
    def parse(cls, text: str) -> "LintSeverity":
        """Look up a severity by case-insensitive name (``"info"`` is accepted).

        Raises
        ------
        ValueError
            If ``text`` names no severity.
        """
        key = text.strip().upper()
        if key == "INFO":
            key = "INFORMATION"
        try:
            return cls[key]
        except KeyError:
            names = ", ".join(s.name.lower() for s in cls)
            raise ValueError(f"Unknown severity {text!r}; expected one of: {names}") from None


@dataclass(frozen=True)
class RuleConfig:
    """Rule metadata.

    Parameters
    ----------
    id:
        Stable identifier; the key for lookups, overrides and grouping.
    name:
        Display name.
    description:
        What the rule checks.
    severity:
        Default severity of the rule's findings.
    enabled:
        Whether the rule runs unless configured otherwise.
    """

    id: str
    name: str
    description: str
    severity: LintSeverity
    enabled: bool = True


@dataclass(frozen=True)
class TextEdit:
    """Replace ``length`` characters at ``offset`` with ``new_text``."""

    new_text: str
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length

    def to_dict(self) -> dict[str, Any]:
        return {"newText": self.new_text, "offset": self.offset, "length": self.length}


@dataclass(frozen=True)
class Suggestion:
    """A machine-applicable fix: a title and non-overlapping edits."""

    title: str
    edits: tuple[TextEdit, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "edits": [e.to_dict() for e in self.edits]}


@dataclass(frozen=True)
class LintResult:
    """A single lint finding.

    Parameters
    ----------
    rule_id:
        Id of the rule that produced the finding.
    message:
        Human-readable description of the problem.
    node:
        The node the finding applies to.
    suggestion:
        Optional fix.
    """

    rule_id: str
    message: str
    node: Node
    suggestion: Suggestion | None = field(default=None)

    def __str__(self) -> str:
        return f"[{self.rule_id}] at {self.node.line}:{self.node.col}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase shape used by JSON output."""
        data: dict[str, Any] = {
            "ruleId": self.rule_id,
            "message": self.message,
            "node": {
                "type": self.node.type.value,
                "offset": self.node.offset,
                "length": self.node.length,
                "line": self.node.line,
                "col": self.node.col,
            },
        }
        if self.suggestion is not None:
            data["suggestion"] = self.suggestion.to_dict()
        return data
