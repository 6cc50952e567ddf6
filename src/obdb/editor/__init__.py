"""Editor integration: positions, diagnostics and quick fixes."""
from __future__ import annotations

from obdb.editor.adapter import (
    DIAGNOSTIC_SOURCE,
    EditorDiagnostic,
    EditorSeverity,
    convert_to_diagnostics,
    map_to_editor_severity,
)
from obdb.editor.document import Position, Range, TextDocument
from obdb.editor.linter import CodeAction, EditorTextEdit, SignalLinter

__all__ = [
    "TextDocument",
    "Position",
    "Range",
    "EditorSeverity",
    "EditorDiagnostic",
    "DIAGNOSTIC_SOURCE",
    "map_to_editor_severity",
    "convert_to_diagnostics",
    "SignalLinter",
    "CodeAction",
    "EditorTextEdit",
]
