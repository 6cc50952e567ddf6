"""Unit tests for obdb.linter: BaseLinter dispatch and the document walk."""
from __future__ import annotations

import logging

import pytest

from obdb.ast.model import Command, Signal, SignalGroup, Target
from obdb.ast.nodes import Node
from obdb.linter import BaseLinter, RuleRegistry, default_registry, lint_source, lint_tree
from obdb.linter.results import LintResult, LintSeverity, RuleConfig
from obdb.linter.rules.base import Granularity, Rule
from obdb.parser import parse_tree


# ---------------------------------------------------------------------------
# Recording rules
# ---------------------------------------------------------------------------


def _config(rule_id: str) -> RuleConfig:
    return RuleConfig(id=rule_id, name=rule_id, description=rule_id, severity=LintSeverity.INFORMATION)


class EveryLevelRule(Rule):
    """Reports one result per call, labelled by granularity."""

    config = _config("every-level")
    granularities = frozenset(Granularity)

    def validate_document(self, root_node: Node) -> list[LintResult] | None:
        return [self.result("document", root_node)]

    def validate_commands(self, commands_node: Node) -> list[LintResult] | None:
        return [self.result("commands", commands_node)]

    def validate_command(
        self,
        command: Command,
        command_node: Node,
        signals_in_command: list[tuple[Signal, Node]],
    ) -> LintResult | None:
        return self.result(f"command {command.command_id} ({len(signals_in_command)})", command_node)

    def validate_signal(self, target: Target, node: Node) -> LintResult | None:
        kind = "group" if isinstance(target, SignalGroup) else "signal"
        return self.result(f"{kind} {target.id}", node)


class SignalOnlyRule(Rule):
    config = _config("signal-only")
    granularities = frozenset({Granularity.SIGNAL})

    def validate_signal(self, target: Target, node: Node) -> list[LintResult] | None:
        return [self.result("first", node), self.result("second", node)]


class ExplodingRule(Rule):
    config = _config("exploding")
    granularities = frozenset({Granularity.SIGNAL})

    def validate_signal(self, target: Target, node: Node) -> LintResult | None:
        raise RuntimeError("rule bug")


class GarbageRule(Rule):
    """Returns whatever it was constructed with from the document check."""

    config = _config("garbage")
    granularities = frozenset({Granularity.DOCUMENT})

    def __init__(self, output: object) -> None:
        self.output = output

    def validate_document(self, root_node: Node) -> LintResult | None:
        return self.output  # type: ignore[return-value]


SOURCE = """\
{
  "commands": [
    {"hdr": "7E0", "cmd": {"01": "0C"}, "signals": [{"id": "A", "name": "a"}, {"id": "B", "name": "b"}]},
    {"hdr": "7E0", "cmd": {"01": "0D"}, "signals": [{"id": "C", "name": "c"}]}
  ],
  "signalGroups": [{"id": "G", "matchingRegex": "A|B"}]
}
"""


@pytest.fixture()
def root() -> Node:
    return parse_tree(SOURCE)


# ===========================================================================
# Rule contract
# ===========================================================================


class TestRuleContract:
    def test_missing_config_raises(self) -> None:
        with pytest.raises(TypeError, match="RuleConfig"):

            class NoConfig(Rule):
                granularities = frozenset({Granularity.SIGNAL})

                def validate_signal(self, target: Target, node: Node) -> LintResult | None:
                    return None

    def test_intermediate_base_class_is_not_checked(self, root: Node) -> None:
        class PrefixRule(Rule):
            prefix = "shared"

            def validate_document(self, root_node: Node) -> LintResult | None:
                return self.result(f"{self.prefix} document", root_node)

        class ConcretePrefixRule(PrefixRule):
            config = _config("concrete-prefix")
            granularities = frozenset({Granularity.DOCUMENT})

        results = BaseLinter(RuleRegistry([ConcretePrefixRule()])).lint_document(root)
        assert [r.message for r in results] == ["shared document"]

    def test_intermediate_base_class_cannot_be_registered(self) -> None:
        class PrefixRule(Rule):
            pass

        with pytest.raises(TypeError, match="RuleConfig"):
            RuleRegistry().register(PrefixRule())

    def test_declared_granularity_needs_override(self) -> None:
        with pytest.raises(TypeError, match="validate_command"):

            class Lazy(Rule):
                config = _config("lazy")
                granularities = frozenset({Granularity.COMMAND})

    def test_handles_reports_declared_granularities(self) -> None:
        rule = SignalOnlyRule()
        assert rule.handles(Granularity.SIGNAL)
        assert not rule.handles(Granularity.DOCUMENT)

    def test_result_is_stamped_with_rule_id(self, root: Node) -> None:
        assert SignalOnlyRule().result("x", root).rule_id == "signal-only"

    def test_undeclared_entry_points_return_none(self, root: Node) -> None:
        rule = SignalOnlyRule()
        assert rule.validate_document(root) is None
        assert rule.validate_commands(root) is None


# ===========================================================================
# Dispatch
# ===========================================================================


class TestDispatch:
    def test_only_declared_granularity_runs(self, root: Node) -> None:
        linter = BaseLinter(RuleRegistry([SignalOnlyRule()]))
        assert linter.lint_document(root) == []
        assert linter.lint_commands(root) == []

    def test_list_output_is_flattened_in_order(self, root: Node) -> None:
        linter = BaseLinter(RuleRegistry([SignalOnlyRule()]))
        results = linter.lint_signal(Signal(id="A"), root)
        assert [r.message for r in results] == ["first", "second"]

    def test_rule_order_is_registration_order(self, root: Node) -> None:
        linter = BaseLinter(RuleRegistry([SignalOnlyRule(), EveryLevelRule()]))
        results = linter.lint_signal(Signal(id="A"), root)
        assert [r.rule_id for r in results] == ["signal-only", "signal-only", "every-level"]

    def test_disabled_rule_does_not_run(self, root: Node) -> None:
        registry = RuleRegistry([ExplodingRule(), SignalOnlyRule()])
        registry.configure("exploding", enabled=False)
        results = BaseLinter(registry).lint_signal(Signal(id="A"), root)
        assert {r.rule_id for r in results} == {"signal-only"}

    def test_rule_exception_propagates(self, root: Node) -> None:
        linter = BaseLinter(RuleRegistry([SignalOnlyRule(), ExplodingRule()]))
        with pytest.raises(RuntimeError, match="rule bug"):
            linter.lint_signal(Signal(id="A"), root)

    @pytest.mark.parametrize("output", ["oops", {"key": "value"}, ("a",), [None]])
    def test_malformed_rule_output_raises(self, root: Node, output: object) -> None:
        linter = BaseLinter(RuleRegistry([GarbageRule(output)]))
        with pytest.raises(TypeError, match="garbage"):
            lint_tree(linter, root)

    def test_result_list_is_accepted(self, root: Node) -> None:
        result = LintResult(rule_id="garbage", message="m", node=root)
        linter = BaseLinter(RuleRegistry([GarbageRule([result])]))
        assert linter.lint_document(root) == [result]

    def test_configuration_read_on_every_call(self, root: Node) -> None:
        registry = RuleRegistry([SignalOnlyRule()])
        linter = BaseLinter(registry)
        assert len(linter.lint_signal(Signal(id="A"), root)) == 2
        registry.configure("signal-only", enabled=False)
        assert linter.lint_signal(Signal(id="A"), root) == []

    def test_pass_count_is_logged(self, root: Node, caplog: pytest.LogCaptureFixture) -> None:
        linter = BaseLinter(RuleRegistry([SignalOnlyRule()]))
        with caplog.at_level(logging.DEBUG, logger="obdb.linter.linter"):
            linter.lint_signal(Signal(id="A"), root)
        assert "signal pass produced 2 result(s)" in caplog.text


# ===========================================================================
# Document walk
# ===========================================================================


class TestLintTree:
    def test_canonical_order(self, root: Node) -> None:
        results = lint_tree(BaseLinter(RuleRegistry([EveryLevelRule()])), root)
        assert [r.message for r in results] == [
            "document",
            "commands",
            "command 7E0.010C (2)",
            "signal A",
            "signal B",
            "command 7E0.010D (1)",
            "signal C",
            "group G",
        ]

    def test_zero_commands(self) -> None:
        results = lint_tree(BaseLinter(RuleRegistry([EveryLevelRule()])), parse_tree('{"commands": []}'))
        assert [r.message for r in results] == ["document", "commands"]

    def test_missing_commands_only_runs_document_level(self) -> None:
        results = lint_tree(BaseLinter(RuleRegistry([EveryLevelRule()])), parse_tree("{}"))
        assert [r.message for r in results] == ["document"]

    def test_determinism(self, root: Node) -> None:
        linter = BaseLinter(default_registry())
        assert lint_tree(linter, root) == lint_tree(linter, root)

    def test_rule_isolation(self) -> None:
        source = '{"commands": [{"hdr": "7E0", "signals": [{"id": "bad-id"}]}]}'
        registry = default_registry()
        before = lint_source(source, registry)
        registry.configure("signal-id-naming", enabled=False)
        after = lint_source(source, registry)
        assert [r for r in before if r.rule_id != "signal-id-naming"] == after
        assert any(r.rule_id == "signal-id-naming" for r in before)

    def test_lint_source_parses_first(self) -> None:
        results = lint_source("[]", default_registry())
        assert [r.rule_id for r in results] == ["missing-commands"]
