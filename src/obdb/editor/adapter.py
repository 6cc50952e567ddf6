"""Editor-specific conversion of lint results.

This module handles every editor-facing conversion:

- ``LintResult`` to ``EditorDiagnostic``;
- ``LintSeverity`` to ``EditorSeverity`` (Language Server Protocol
  numbering).

The engine and the rules know nothing about editors; severity is looked
up per result through a callback so the adapter never reads rule
metadata itself.
"""
from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import IntEnum

from obdb.editor.document import Range, TextDocument
from obdb.linter.results import LintResult, LintSeverity

DIAGNOSTIC_SOURCE = "obdb-linter"


class EditorSeverity(IntEnum):
    """Diagnostic severity as numbered by the Language Server Protocol."""

    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4


_SEVERITY_MAP: dict[LintSeverity, EditorSeverity] = {
    LintSeverity.ERROR: EditorSeverity.ERROR,
    LintSeverity.WARNING: EditorSeverity.WARNING,
    LintSeverity.INFORMATION: EditorSeverity.INFORMATION,
    LintSeverity.HINT: EditorSeverity.HINT,
}


@dataclass(frozen=True)
class EditorDiagnostic:
    """A diagnostic ready to hand to an editor."""

    range: Range
    message: str
    severity: EditorSeverity
    code: str
    source: str = DIAGNOSTIC_SOURCE


def map_to_editor_severity(severity: object) -> EditorSeverity:
    """Map a ``LintSeverity`` to an ``EditorSeverity``; anything unrecognized becomes WARNING."""
    try:
        return _SEVERITY_MAP.get(severity, EditorSeverity.WARNING)  # type: ignore[arg-type]
    except TypeError:  # unhashable input
        return EditorSeverity.WARNING


def convert_to_diagnostics(
    document: TextDocument,
    results: Iterable[LintResult],
    get_rule_severity: Callable[[str], LintSeverity],
) -> list[EditorDiagnostic]:
    """Convert lint results to editor diagnostics, one per result, in order."""
    diagnostics: list[EditorDiagnostic] = []
    for result in results:
        severity = map_to_editor_severity(get_rule_severity(result.rule_id))
        diagnostics.append(
            EditorDiagnostic(
                range=document.range_of(result.node.offset, result.node.length),
                message=result.message,
                severity=severity,
                code=result.rule_id,
            )
        )
    return diagnostics
