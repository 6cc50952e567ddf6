"""Signalset Linter module.

Exports the ``BaseLinter`` engine, the ``RuleRegistry``, the result
types, and the ``lint_tree`` / ``lint_source`` walks.
"""
from __future__ import annotations

from obdb.linter.edits import OverlappingEditsError, apply_edits, collect_fixes
from obdb.linter.linter import BaseLinter
from obdb.linter.registry import (
    ENTRY_POINT_GROUP,
    RuleAlreadyRegisteredError,
    RuleRegistry,
    UnknownRuleError,
    default_registry,
)
from obdb.linter.results import LintResult, LintSeverity, RuleConfig, Suggestion, TextEdit
from obdb.linter.rules import ALL_LINT_RULES, Granularity, Rule, builtin_rules
from obdb.linter.traversal import lint_source, lint_tree

__all__ = [
    # Engine
    "BaseLinter",
    "lint_tree",
    "lint_source",
    # Registry
    "RuleRegistry",
    "default_registry",
    "ENTRY_POINT_GROUP",
    "UnknownRuleError",
    "RuleAlreadyRegisteredError",
    # Rules
    "Rule",
    "Granularity",
    "ALL_LINT_RULES",
    "builtin_rules",
    # Results
    "LintResult",
    "LintSeverity",
    "RuleConfig",
    "Suggestion",
    "TextEdit",
    # Edits
    "apply_edits",
    "collect_fixes",
    "OverlappingEditsError",
]
