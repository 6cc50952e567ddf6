"""Unit tests for obdb.editor: positions, diagnostics and code actions."""
from __future__ import annotations

import pytest

from obdb.ast.nodes import Node, NodeType
from obdb.editor import (
    DIAGNOSTIC_SOURCE,
    EditorSeverity,
    Position,
    Range,
    SignalLinter,
    TextDocument,
    convert_to_diagnostics,
    map_to_editor_severity,
)
from obdb.linter import UnknownRuleError, apply_edits
from obdb.linter.registry import RuleRegistry
from obdb.linter.results import LintResult, LintSeverity

SOURCE = """\
{
  "commands": [
    {"hdr": "7E0", "cmd": {"22": "0001"}, "signals": [
      {"id": "engineRpm", "name": "Engine RPM"}
    ]}
  ]
}
"""


def _node(offset: int, length: int) -> Node:
    return Node(type=NodeType.STRING, offset=offset, length=length, line=1, col=offset + 1)


class TestTextDocument:
    def test_position_at(self) -> None:
        document = TextDocument("ab\ncd\n")
        assert document.position_at(0) == Position(0, 0)
        assert document.position_at(3) == Position(1, 0)
        assert document.position_at(4) == Position(1, 1)

    def test_position_at_is_clamped(self) -> None:
        document = TextDocument("ab")
        assert document.position_at(-3) == Position(0, 0)
        assert document.position_at(99) == Position(0, 2)

    def test_offset_at_round_trips_line_starts(self) -> None:
        document = TextDocument("ab\ncd\nef")
        for offset in (0, 3, 6):
            assert document.offset_at(document.position_at(offset)) == offset

    def test_offset_at_clamps_character_to_line(self) -> None:
        document = TextDocument("ab\ncd")
        assert document.offset_at(Position(0, 10)) == 2
        assert document.offset_at(Position(5, 0)) == 5

    def test_line_count_and_text(self) -> None:
        document = TextDocument("ab\ncd")
        assert document.line_count == 2
        assert document.line_text(1) == "cd"

    def test_character_counts_utf16_code_units(self) -> None:
        document = TextDocument('"\U0001F697" "x"')
        x_offset = document.text.index("x")
        assert document.position_at(x_offset) == Position(0, 6)
        assert document.offset_at(Position(0, 6)) == x_offset

    def test_bmp_characters_count_once(self) -> None:
        document = TextDocument("\u00e9x")
        assert document.position_at(1) == Position(0, 1)

    def test_range_intersection(self) -> None:
        a = Range(Position(0, 0), Position(0, 5))
        assert a.intersects(Range(Position(0, 5), Position(1, 0)))
        assert not a.intersects(Range(Position(1, 0), Position(1, 1)))


class TestSeverityMapping:
    @pytest.mark.parametrize(
        "severity, expected",
        [
            (LintSeverity.ERROR, EditorSeverity.ERROR),
            (LintSeverity.WARNING, EditorSeverity.WARNING),
            (LintSeverity.INFORMATION, EditorSeverity.INFORMATION),
            (LintSeverity.HINT, EditorSeverity.HINT),
        ],
    )
    def test_known_severities(self, severity: LintSeverity, expected: EditorSeverity) -> None:
        assert map_to_editor_severity(severity) is expected

    @pytest.mark.parametrize("value", [None, "error", 17, ["x"]])
    def test_unknown_values_fall_back_to_warning(self, value: object) -> None:
        assert map_to_editor_severity(value) is EditorSeverity.WARNING

    def test_lsp_numbering(self) -> None:
        assert [int(s) for s in EditorSeverity] == [1, 2, 3, 4]


class TestConvertToDiagnostics:
    def test_one_diagnostic_per_result_in_order(self) -> None:
        document = TextDocument("abc\ndef")
        results = [
            LintResult(rule_id="a", message="first", node=_node(0, 3)),
            LintResult(rule_id="b", message="second", node=_node(4, 2)),
        ]
        severities = {"a": LintSeverity.ERROR, "b": LintSeverity.HINT}
        diagnostics = convert_to_diagnostics(document, results, severities.__getitem__)
        assert [d.code for d in diagnostics] == ["a", "b"]
        assert [d.severity for d in diagnostics] == [EditorSeverity.ERROR, EditorSeverity.HINT]
        assert diagnostics[1].range == Range(Position(1, 0), Position(1, 2))
        assert all(d.source == DIAGNOSTIC_SOURCE == "obdb-linter" for d in diagnostics)


class TestSignalLinter:
    def test_lint_text_document_caches_results(self, registry: RuleRegistry) -> None:
        linter = SignalLinter(registry)
        results = linter.lint_text_document(TextDocument(SOURCE, uri="file:///default.json"))
        assert [r.rule_id for r in results] == ["signal-id-naming"]
        assert linter.last_results == results

    def test_to_diagnostics_uses_configured_severity(self, registry: RuleRegistry) -> None:
        registry.configure("signal-id-naming", severity=LintSeverity.ERROR)
        linter = SignalLinter(registry)
        document = TextDocument(SOURCE)
        linter.lint_text_document(document)
        (diagnostic,) = linter.to_diagnostics(document)
        assert diagnostic.severity is EditorSeverity.ERROR
        assert diagnostic.range.start == Position(3, 13)

    def test_to_diagnostics_stores_given_results(self, registry: RuleRegistry) -> None:
        linter = SignalLinter(registry)
        result = LintResult(rule_id="missing-commands", message="m", node=_node(0, 1))
        linter.to_diagnostics(TextDocument("{}"), [result])
        assert linter.last_results == [result]

    def test_unknown_rule_id_raises(self, registry: RuleRegistry) -> None:
        linter = SignalLinter(registry)
        with pytest.raises(UnknownRuleError):
            linter.to_diagnostics(TextDocument("{}"), [LintResult(rule_id="ghost", message="m", node=_node(0, 1))])

    def test_code_actions_for_intersecting_range(self, registry: RuleRegistry) -> None:
        linter = SignalLinter(registry)
        document = TextDocument(SOURCE)
        linter.lint_text_document(document)
        (action,) = linter.code_actions(document, Range(Position(3, 15), Position(3, 15)))
        assert action.title == "Rename to ENGINE_RPM"
        assert action.code == "signal-id-naming"
        assert action.kind == "quickfix"
        (edit,) = action.edits
        start = document.offset_at(edit.range.start)
        end = document.offset_at(edit.range.end)
        fixed = document.text[:start] + edit.new_text + document.text[end:]
        assert fixed == apply_edits(SOURCE, linter.last_results[0].suggestion.edits)

    def test_no_code_actions_outside_range(self, registry: RuleRegistry) -> None:
        linter = SignalLinter(registry)
        document = TextDocument(SOURCE)
        linter.lint_text_document(document)
        assert linter.code_actions(document, Range(Position(0, 0), Position(0, 1))) == []
