"""The rule contract shared by every signalset lint rule.

A rule is a stateless object that declares its metadata (``config``)
and the granularities it validates (``granularities``).  For each
declared granularity it overrides the matching entry point:

============================  ===================================
Granularity                   Entry point
============================  ===================================
``Granularity.SIGNAL``        ``validate_signal(target, node)``
``Granularity.COMMAND``       ``validate_command(command, node, signals)``
``Granularity.COMMANDS``      ``validate_commands(commands_node)``
``Granularity.DOCUMENT``      ``validate_document(root_node)``
============================  ===================================

The engine only calls entry points whose granularity is declared, so
an undeclared entry point is simply never invoked.  Entry points must be
pure functions of their arguments: no hidden state and no I/O.  They
return ``None`` for "no finding", a single ``LintResult``, or a list of
results (signal and command entry points) when one call finds several
independent problems.

Example
-------
::

    class NoEmptyNames(Rule):
        config = RuleConfig(
            id="no-empty-names",
            name="No Empty Names",
            description="Signal names must not be blank",
            severity=LintSeverity.WARNING,
        )
        granularities = frozenset({Granularity.SIGNAL})

        def validate_signal(self, target, node):
            if target.name is not None and not target.name.strip():
                return self.result("Signal name is blank", node)
            return None
"""
from __future__ import annotations

from abc import ABC
from enum import Enum
from typing import ClassVar, Union

from obdb.ast.model import Command, Signal, Target
from obdb.ast.nodes import Node
from obdb.linter.results import LintResult, RuleConfig, Suggestion

RuleOutput = Union[LintResult, list[LintResult], None]


class Granularity(Enum):
    """The tree levels the engine can run rules at."""

    DOCUMENT = "document"
    COMMANDS = "commands"
    COMMAND = "command"
    SIGNAL = "signal"


ENTRY_POINTS: dict[Granularity, str] = {
    Granularity.DOCUMENT: "validate_document",
    Granularity.COMMANDS: "validate_commands",
    Granularity.COMMAND: "validate_command",
    Granularity.SIGNAL: "validate_signal",
}


class Rule(ABC):
    """Base class for lint rules.

    Concrete subclasses must define ``config`` and override the entry
    point of every granularity listed in ``granularities``; both are
    checked when the subclass is created.  A subclass that defines
    neither attribute itself is treated as an intermediate base class
    and is not checked.
    """

    config: ClassVar[RuleConfig]
    granularities: ClassVar[frozenset[Granularity]] = frozenset()

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        if "config" not in cls.__dict__ and "granularities" not in cls.__dict__:
            return
        if not isinstance(getattr(cls, "config", None), RuleConfig):
            raise TypeError(f"Rule {cls.__qualname__} must define a RuleConfig 'config'")
        for granularity in cls.granularities:
            entry_point = ENTRY_POINTS[granularity]
            if getattr(cls, entry_point) is getattr(Rule, entry_point):
                raise TypeError(
                    f"Rule {cls.__qualname__} declares {granularity.value!r} "
                    f"but does not override {entry_point}()"
                )

    def get_config(self) -> RuleConfig:
        """Return the rule's default metadata; ``id`` never changes."""
        return self.config

    @property
    def id(self) -> str:
        return self.config.id

    def handles(self, granularity: Granularity) -> bool:
        """Return True if the rule validates at ``granularity``."""
        return granularity in self.granularities

    def result(self, message: str, node: Node, suggestion: Suggestion | None = None) -> LintResult:
        """Build a ``LintResult`` stamped with this rule's id."""
        return LintResult(rule_id=self.config.id, message=message, node=node, suggestion=suggestion)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def validate_signal(self, target: Target, node: Node) -> RuleOutput:
        return None

    def validate_command(
        self,
        command: Command,
        command_node: Node,
        signals_in_command: list[tuple[Signal, Node]],
    ) -> RuleOutput:
        return None

    def validate_commands(self, commands_node: Node) -> list[LintResult] | None:
        return None

    def validate_document(self, root_node: Node) -> list[LintResult] | None:
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.config.id!r})"
