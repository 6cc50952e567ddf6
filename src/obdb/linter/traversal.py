"""The document walk shared by every front-end.

Result order depends only on call order, so both the CLI and the editor
adapter go through ``lint_tree`` instead of walking the tree themselves.
"""
from __future__ import annotations

from obdb.ast.model import Command, SignalGroup, signal_pairs
from obdb.ast.nodes import Node, NodeType, find_node_at_location
from obdb.linter.linter import BaseLinter
from obdb.linter.registry import RuleRegistry
from obdb.linter.results import LintResult
from obdb.parser.parser import parse_tree


def lint_tree(linter: BaseLinter, root: Node) -> list[LintResult]:
    """Run every granularity over ``root`` in the canonical order.

    Order: the document check, then the commands check, then for each
    command its command check followed by the signal check of each of
    its signals, and finally the signal check of each entry of a
    top-level ``signalGroups`` array.
    """
    results = linter.lint_document(root)

    commands_node = find_node_at_location(root, ["commands"])
    if commands_node is not None and commands_node.type is NodeType.ARRAY:
        results.extend(linter.lint_commands(commands_node))
        for command_node in commands_node.children:
            pairs = signal_pairs(command_node)
            results.extend(linter.lint_command(Command.from_node(command_node), command_node, pairs))
            for signal, signal_node in pairs:
                results.extend(linter.lint_signal(signal, signal_node))

    groups_node = find_node_at_location(root, ["signalGroups"])
    if groups_node is not None and groups_node.type is NodeType.ARRAY:
        for group_node in groups_node.children:
            results.extend(linter.lint_signal(SignalGroup.from_node(group_node), group_node))

    return results


def lint_source(source: str, registry: RuleRegistry) -> list[LintResult]:
    """Parse ``source`` and lint it with the enabled rules of ``registry``.

    Raises
    ------
    LexError
        If the source contains invalid characters or unterminated literals.
    ParseErrorCollection
        If the source contains syntactic errors.
    """
    return lint_tree(BaseLinter(registry), parse_tree(source))
