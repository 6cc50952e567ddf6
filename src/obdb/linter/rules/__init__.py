"""Signalset linter rules sub-package.

Re-exports the rule contract and all built-in rule collections.
"""
from __future__ import annotations

from obdb.linter.rules.base import ENTRY_POINTS, Granularity, Rule, RuleOutput
from obdb.linter.rules.completeness import COMPLETENESS_RULES
from obdb.linter.rules.consistency import CONSISTENCY_RULES
from obdb.linter.rules.metric_patterns import METRIC_PATTERNS, MetricPattern
from obdb.linter.rules.naming import NAMING_RULES
from obdb.linter.rules.suggestions import SuggestedMetricSuggestionRule

SUGGESTION_RULES: list[type[Rule]] = [SuggestedMetricSuggestionRule]

ALL_LINT_RULES: list[type[Rule]] = [
    *COMPLETENESS_RULES,
    *NAMING_RULES,
    *CONSISTENCY_RULES,
    *SUGGESTION_RULES,
]


def builtin_rules() -> list[Rule]:
    """Return a fresh instance of every built-in rule, in registration order."""
    return [rule_type() for rule_type in ALL_LINT_RULES]


__all__ = [
    "Rule",
    "RuleOutput",
    "Granularity",
    "ENTRY_POINTS",
    "MetricPattern",
    "METRIC_PATTERNS",
    "NAMING_RULES",
    "COMPLETENESS_RULES",
    "CONSISTENCY_RULES",
    "SUGGESTION_RULES",
    "ALL_LINT_RULES",
    "builtin_rules",
]
