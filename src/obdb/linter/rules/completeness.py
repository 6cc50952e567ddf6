"""Completeness lint rules for signalsets.

These rules flag documents, commands and signals that are missing the
fields every consumer of a signalset relies on.

Rule ids:
    missing-commands         Root is not an object or has no commands array
    command-missing-fields   Command lacks hdr or cmd
    command-without-signals  Command defines no signals
    signal-missing-fields    Signal lacks id or name (signal group lacks id)
"""
from __future__ import annotations

from obdb.ast.model import Command, Signal, SignalGroup, Target
from obdb.ast.nodes import Node, NodeType, find_node_at_location
from obdb.linter.results import LintResult, LintSeverity, RuleConfig
from obdb.linter.rules.base import Granularity, Rule


class MissingCommandsRule(Rule):
    """A signalset must be an object with a ``commands`` array."""

    config = RuleConfig(
        id="missing-commands",
        name="Missing Commands",
        description="The document must be an object with a commands array",
        severity=LintSeverity.ERROR,
    )
    granularities = frozenset({Granularity.DOCUMENT})

    def validate_document(self, root_node: Node) -> list[LintResult] | None:
        if root_node.type is not NodeType.OBJECT:
            return [self.result("Signalset must be a JSON object", root_node)]
        commands = find_node_at_location(root_node, ["commands"])
        if commands is None:
            return [self.result('Signalset has no "commands" array', root_node)]
        if commands.type is not NodeType.ARRAY:
            return [self.result('"commands" must be an array', commands)]
        return None


class CommandMissingFieldsRule(Rule):
    config = RuleConfig(
        id="command-missing-fields",
        name="Command Missing Fields",
        description="Commands must define hdr and cmd",
        severity=LintSeverity.ERROR,
    )
    granularities = frozenset({Granularity.COMMAND})

    def validate_command(
        self,
        command: Command,
        command_node: Node,
        signals_in_command: list[tuple[Signal, Node]],
    ) -> list[LintResult] | None:
        missing = [
            key for key in ("hdr", "cmd")
            if command_node.get_property(key) is None
        ]
        if not missing:
            return None
        return [
            self.result(f'Command {command.command_id} is missing "{key}"', command_node)
            for key in missing
        ]


class CommandWithoutSignalsRule(Rule):
    config = RuleConfig(
        id="command-without-signals",
        name="Command Without Signals",
        description="Commands should decode at least one signal",
        severity=LintSeverity.WARNING,
    )
    granularities = frozenset({Granularity.COMMAND})

    def validate_command(
        self,
        command: Command,
        command_node: Node,
        signals_in_command: list[tuple[Signal, Node]],
    ) -> LintResult | None:
        if signals_in_command:
            return None
        return self.result(f"Command {command.command_id} defines no signals", command_node)


class SignalMissingFieldsRule(Rule):
    """Signals need an ``id`` and a ``name``; signal groups need an ``id``.

    A key that is present with a non-string value is reported as a type
    problem on the value rather than as missing.
    """

    config = RuleConfig(
        id="signal-missing-fields",
        name="Signal Missing Fields",
        description="Signals must define id and name; signal groups must define id",
        severity=LintSeverity.ERROR,
    )
    granularities = frozenset({Granularity.SIGNAL})

    def validate_signal(self, target: Target, node: Node) -> list[LintResult] | None:
        if isinstance(target, SignalGroup):
            required = ("id",)
            kind = "Signal group"
        else:
            required = ("id", "name")
            kind = "Signal"
        label = f" {target.id}" if target.id else ""
        results = []
        for key in required:
            if getattr(target, key):
                continue
            prop = node.get_property(key)
            value = prop.value_node if prop is not None else None
            if value is not None and value.type is not NodeType.STRING:
                results.append(
                    self.result(f'{kind}{label} has a {value.type.value} "{key}"; expected a string', value)
                )
            else:
                results.append(self.result(f'{kind}{label} is missing "{key}"', node))
        return results or None


COMPLETENESS_RULES: list[type[Rule]] = [
    MissingCommandsRule,
    CommandMissingFieldsRule,
    CommandWithoutSignalsRule,
    SignalMissingFieldsRule,
]
