"""Naming convention lint rules for signalsets.

Conventions enforced:
    - Signal and signal group ids: UPPER_SNAKE_CASE

Rule ids:
    signal-id-naming  Id is not UPPER_SNAKE_CASE
"""
from __future__ import annotations

import json
import re

from obdb.ast.model import Target
from obdb.ast.nodes import Node, NodeType
from obdb.linter.results import LintResult, LintSeverity, RuleConfig, Suggestion, TextEdit
from obdb.linter.rules.base import Granularity, Rule

_UPPER_SNAKE_CASE = re.compile(r"^[A-Z0-9][A-Z0-9_]*$")
_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")


def to_upper_snake_case(name: str) -> str:
    """Convert ``engineRpm`` / ``engine-rpm`` / ``Engine RPM`` to ``ENGINE_RPM``."""
    words = _CAMEL_BOUNDARY.sub(r"\1_\2", name)
    return _SEPARATORS.sub("_", words).strip("_").upper()


class SignalIdNamingRule(Rule):
    """Signal and signal group ids should be UPPER_SNAKE_CASE."""

    config = RuleConfig(
        id="signal-id-naming",
        name="Signal ID Naming",
        description="Signal and signal group ids should be UPPER_SNAKE_CASE",
        severity=LintSeverity.WARNING,
    )
    granularities = frozenset({Granularity.SIGNAL})

    def validate_signal(self, target: Target, node: Node) -> LintResult | None:
        if not target.id or _UPPER_SNAKE_CASE.match(target.id):
            return None

        prop = node.get_property("id")
        id_node = prop.value_node if prop is not None else None
        if id_node is None or id_node.type is not NodeType.STRING:
            return None

        message = f"Id {target.id!r} should be UPPER_SNAKE_CASE"
        renamed = to_upper_snake_case(target.id)
        if not renamed or renamed == target.id:
            return self.result(message, id_node)
        return self.result(
            f"{message} (e.g. {renamed!r})",
            id_node,
            Suggestion(
                title=f"Rename to {renamed}",
                edits=(TextEdit(new_text=json.dumps(renamed), offset=id_node.offset, length=id_node.length),),
            ),
        )


NAMING_RULES: list[type[Rule]] = [
    SignalIdNamingRule,
]
