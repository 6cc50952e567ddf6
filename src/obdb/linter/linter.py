"""Signalset Linter: run registered rules at each level of a document.

``BaseLinter`` exposes one operation per granularity.  Each fetches the
registry's enabled rules, calls those that declare the granularity, and
concatenates their findings in rule order.  The engine never walks the
tree itself, never sorts, merges or de-duplicates, and never catches a
rule's exception: a faulty rule aborts the pass.

The caller drives the walk (see ``obdb.linter.traversal.lint_tree``) in
a fixed order so that result order is reproducible:

1. ``lint_document(root)``
2. ``lint_commands(commands_node)``
3. for each command: ``lint_command(...)`` then ``lint_signal(...)`` for
   each of its signals

Usage
-----
::

    from obdb.linter import BaseLinter, default_registry
    from obdb.parser import parse_tree

    linter = BaseLinter(default_registry())
    root = parse_tree(source)
    results = linter.lint_document(root)
"""
from __future__ import annotations

import logging
from collections.abc import Callable

from obdb.ast.model import Command, Signal, Target
from obdb.ast.nodes import Node
from obdb.linter.registry import RuleRegistry
from obdb.linter.results import LintResult
from obdb.linter.rules.base import Granularity, Rule, RuleOutput

logger = logging.getLogger(__name__)


class BaseLinter:
    """Framework-agnostic dispatch of rules over one parsed document.

    Parameters
    ----------
    registry:
        The registry whose enabled rules are run.  It is read on every
        call, so configuration changes between passes take effect.
    """

    def __init__(self, registry: RuleRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> RuleRegistry:
        return self._registry

    def _dispatch(self, granularity: Granularity, call: Callable[[Rule], RuleOutput]) -> list[LintResult]:
        results: list[LintResult] = []
        for rule in self._registry.get_enabled_rules():
            if not rule.handles(granularity):
                continue
            output = call(rule)
            if output is None:
                continue
            if isinstance(output, LintResult):
                results.append(output)
            elif isinstance(output, list) and all(isinstance(item, LintResult) for item in output):
                results.extend(output)
            else:
                raise TypeError(
                    f"Rule {rule.id!r} returned {type(output).__name__} from its "
                    f"{granularity.value} check; expected LintResult, list of LintResult or None"
                )
        logger.debug("%s pass produced %d result(s)", granularity.value, len(results))
        return results

    def lint_signal(self, target: Target, node: Node) -> list[LintResult]:
        """Lint one signal or signal group against all enabled rules."""
        return self._dispatch(Granularity.SIGNAL, lambda rule: rule.validate_signal(target, node))

    def lint_command(
        self,
        command: Command,
        command_node: Node,
        signals_in_command: list[tuple[Signal, Node]],
    ) -> list[LintResult]:
        """Lint one command, given the ``(Signal, Node)`` pairs it contains."""
        return self._dispatch(
            Granularity.COMMAND,
            lambda rule: rule.validate_command(command, command_node, signals_in_command),
        )

    def lint_commands(self, commands_node: Node) -> list[LintResult]:
        """Lint the ``commands`` array as a whole."""
        return self._dispatch(Granularity.COMMANDS, lambda rule: rule.validate_commands(commands_node))

    def lint_document(self, root_node: Node) -> list[LintResult]:
        """Lint the entire document."""
        return self._dispatch(Granularity.DOCUMENT, lambda rule: rule.validate_document(root_node))
