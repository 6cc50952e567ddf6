"""Consistency lint rules for signalsets.

These rules find properties that contradict or repeat one another:
ids reused across the document and format fields that restate their
defaults.

Rule ids:
    duplicate-signal-id     Signal id already used earlier in the document
    redundant-fmt-defaults  fmt carries identity scaling (mul 1, div 1, add 0)
"""
from __future__ import annotations

from typing import Any

from obdb.ast.model import Command, Target, signal_pairs
from obdb.ast.nodes import Node, NodeType, get_node_value
from obdb.linter.results import LintResult, LintSeverity, RuleConfig, Suggestion, TextEdit
from obdb.linter.rules.base import Granularity, Rule
from obdb.linter.rules.suggestions import to_compact_json

# Scaling fields and the value that makes them a no-op.
_FMT_IDENTITIES: dict[str, int] = {"mul": 1, "div": 1, "add": 0}


class DuplicateSignalIdRule(Rule):
    """Signal ids must be unique across all commands."""

    config = RuleConfig(
        id="duplicate-signal-id",
        name="Duplicate Signal ID",
        description="Signal ids must be unique across all commands",
        severity=LintSeverity.ERROR,
    )
    granularities = frozenset({Granularity.COMMANDS})

    def validate_commands(self, commands_node: Node) -> list[LintResult] | None:
        seen: dict[str, str] = {}
        results: list[LintResult] = []
        for command_node in commands_node.children:
            command_id = Command.from_node(command_node).command_id
            for signal, signal_node in signal_pairs(command_node):
                if not signal.id:
                    continue
                if signal.id not in seen:
                    seen[signal.id] = command_id
                    continue
                prop = signal_node.get_property("id")
                anchor = prop.value_node if prop is not None and prop.value_node is not None else signal_node
                results.append(self.result(
                    f"Duplicate signal id {signal.id!r}; first defined in command {seen[signal.id]}",
                    anchor,
                ))
        return results or None


def _is_identity(key: str, value: Any) -> bool:
    return not isinstance(value, bool) and isinstance(value, (int, float)) and value == _FMT_IDENTITIES[key]


class RedundantFmtDefaultsRule(Rule):
    """``fmt`` should not spell out scaling that changes nothing."""

    config = RuleConfig(
        id="redundant-fmt-defaults",
        name="Redundant Format Defaults",
        description='fmt "mul": 1, "div": 1 and "add": 0 are defaults and can be removed',
        severity=LintSeverity.HINT,
    )
    granularities = frozenset({Granularity.SIGNAL})

    def validate_signal(self, target: Target, node: Node) -> LintResult | None:
        prop = node.get_property("fmt")
        fmt_node = prop.value_node if prop is not None else None
        if fmt_node is None or fmt_node.type is not NodeType.OBJECT:
            return None

        fmt: dict[str, Any] = get_node_value(fmt_node)
        redundant = [k for k in _FMT_IDENTITIES if k in fmt and _is_identity(k, fmt[k])]
        if not redundant:
            return None

        listed = ", ".join(f'"{k}": {_FMT_IDENTITIES[k]}' for k in redundant)
        cleaned = {k: v for k, v in fmt.items() if k not in redundant}
        return self.result(
            f"fmt has redundant default(s): {listed}",
            fmt_node,
            Suggestion(
                title="Remove redundant fmt defaults",
                edits=(TextEdit(new_text=to_compact_json(cleaned), offset=fmt_node.offset, length=fmt_node.length),),
            ),
        )


CONSISTENCY_RULES: list[type[Rule]] = [
    DuplicateSignalIdRule,
    RedundantFmtDefaultsRule,
]
