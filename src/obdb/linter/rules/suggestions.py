"""Pattern-based ``suggestedMetric`` suggestion rule.

Rule ids:
    suggested-metric-suggestion  Signal looks like a well-known metric but
                                 has no ``suggestedMetric``

The fix replaces the whole signal object with a compact re-serialization
in a fixed key order: ``id``, ``path``, ``fmt``, ``name`` (each only when
present), then the new ``suggestedMetric``, then every other original key
in the order it was written.  Tools diffing suggested changes rely on
that order.
"""
from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from obdb.ast.model import Signal, Target
from obdb.ast.nodes import Node, get_node_value
from obdb.linter.results import LintResult, LintSeverity, RuleConfig, Suggestion, TextEdit
from obdb.linter.rules.base import Granularity, Rule
from obdb.linter.rules.metric_patterns import METRIC_PATTERNS, MetricPattern

_LEADING_KEYS = ("id", "path", "fmt", "name")


def _normalize_numbers(value: Any) -> Any:
    """Render integral floats as integers, like JavaScript does."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, dict):
        return {k: _normalize_numbers(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_normalize_numbers(v) for v in value]
    return value


def to_compact_json(value: Any) -> str:
    """Serialize ``value`` the way ``JSON.stringify`` does: no whitespace, raw unicode."""
    return json.dumps(_normalize_numbers(value), separators=(",", ":"), ensure_ascii=False)


def with_suggested_metric(signal_value: dict[str, Any], suggested_metric: str) -> dict[str, Any]:
    """Return a copy of ``signal_value`` with ``suggestedMetric`` in canonical position."""
    ordered: dict[str, Any] = {}
    for key in _LEADING_KEYS:
        if key in signal_value:
            ordered[key] = signal_value[key]
    ordered["suggestedMetric"] = suggested_metric
    for key, value in signal_value.items():
        if key not in ordered:
            ordered[key] = value
    return ordered


class SuggestedMetricSuggestionRule(Rule):
    """Suggest ``suggestedMetric`` from the signal id and name.

    Parameters
    ----------
    patterns:
        Ordered pattern table; the first match wins.  Defaults to
        ``METRIC_PATTERNS``.
    """

    config = RuleConfig(
        id="suggested-metric-suggestion",
        name="Suggested Metric Suggestion",
        description="Suggests adding suggestedMetric properties based on signal ID and name patterns",
        severity=LintSeverity.INFORMATION,
        enabled=False,
    )
    granularities = frozenset({Granularity.SIGNAL})

    def __init__(self, patterns: Sequence[MetricPattern] = METRIC_PATTERNS) -> None:
        self._patterns: tuple[MetricPattern, ...] = tuple(patterns)

    @property
    def patterns(self) -> tuple[MetricPattern, ...]:
        return self._patterns

    def match(self, signal_id: str, signal_name: str) -> MetricPattern | None:
        """Return the first pattern matching the id or name, or ``None``."""
        for pattern in self._patterns:
            if pattern.matches(signal_id, signal_name):
                return pattern
        return None

    def validate_signal(self, target: Target, node: Node) -> LintResult | None:
        # Signal groups use suggestedMetricGroup, not suggestedMetric.
        if not isinstance(target, Signal):
            return None
        if target.suggested_metric:
            return None
        if not target.id or not target.name:
            return None

        pattern = self.match(target.id, target.name)
        if pattern is None:
            return None

        metric = pattern.suggested_metric
        new_text = to_compact_json(with_suggested_metric(get_node_value(node), metric))
        return self.result(
            f'Consider adding suggestedMetric: "{metric}" ({pattern.description})',
            node,
            Suggestion(
                title=f'Add suggestedMetric: "{metric}"',
                edits=(TextEdit(new_text=new_text, offset=node.offset, length=node.length),),
            ),
        )
