"""Rule registry for the signalset linter.

A ``RuleRegistry`` holds rule instances keyed by id, in registration
order, together with the enable/severity overrides configured by
whoever owns it.  It is an ordinary object: the hosting process builds
one (usually with ``default_registry()``), configures it between runs,
and hands it to every linter.  Nothing about it is global.

Third-party rules can be installed as packages that declare
entry-points in the ``obdb.rules`` group, e.g. in their
``pyproject.toml``:

.. code-block:: toml

    [project.entry-points."obdb.rules"]
    my-rule = "my_package.rules:MyRule"

and are picked up with::

    registry = default_registry()
    registry.load_entrypoints()
"""
from __future__ import annotations

import importlib.metadata
import logging
from collections.abc import Iterator
from dataclasses import replace

from obdb.linter.results import LintSeverity, RuleConfig
from obdb.linter.rules.base import Rule

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "obdb.rules"


class UnknownRuleError(KeyError):
    """Raised when a rule id is not in the registry."""

    def __init__(self, rule_id: str) -> None:
        self.rule_id = rule_id
        super().__init__(
            f"Rule {rule_id!r} is not registered. "
            "Every lint result must come from a registered rule."
        )


class RuleAlreadyRegisteredError(ValueError):
    """Raised when attempting to register an id that already exists."""

    def __init__(self, rule_id: str) -> None:
        self.rule_id = rule_id
        super().__init__(
            f"Rule {rule_id!r} is already registered. "
            "Use a unique id or deregister the existing rule first."
        )


class RuleRegistry:
    """Ordered catalog of rule instances plus their configuration overrides.

    Parameters
    ----------
    rules:
        Rules to register immediately, in order.
    """

    def __init__(self, rules: list[Rule] | None = None) -> None:
        self._rules: dict[str, Rule] = {}
        self._overrides: dict[str, RuleConfig] = {}
        for rule in rules or []:
            self.register(rule)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, rule: Rule) -> Rule:
        """Add ``rule`` to the end of the catalog and return it.

        Raises
        ------
        RuleAlreadyRegisteredError
            If a rule with the same id is already registered.
        TypeError
            If ``rule`` is not a ``Rule`` instance or has no ``RuleConfig``.
        """
        if not isinstance(rule, Rule):
            raise TypeError(f"Cannot register {rule!r}: it must be an instance of Rule.")
        if not isinstance(getattr(rule, "config", None), RuleConfig):
            raise TypeError(f"Cannot register {type(rule).__qualname__}: it defines no RuleConfig 'config'.")
        rule_id = rule.get_config().id
        if rule_id in self._rules:
            raise RuleAlreadyRegisteredError(rule_id)
        self._rules[rule_id] = rule
        logger.debug("Registered rule %r -> %s", rule_id, type(rule).__qualname__)
        return rule

    def deregister(self, rule_id: str) -> None:
        """Remove a rule and any override configured for it.

        Raises
        ------
        UnknownRuleError
            If ``rule_id`` is not registered.
        """
        if rule_id not in self._rules:
            raise UnknownRuleError(rule_id)
        del self._rules[rule_id]
        self._overrides.pop(rule_id, None)
        logger.debug("Deregistered rule %r", rule_id)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def configure(
        self,
        rule_id: str,
        *,
        enabled: bool | None = None,
        severity: LintSeverity | None = None,
    ) -> RuleConfig:
        """Override the enabled flag and/or severity of a rule.

        Arguments left as ``None`` keep their current value.  Returns the
        resulting effective configuration.

        Raises
        ------
        UnknownRuleError
            If ``rule_id`` is not registered.
        """
        current = self.get_config(rule_id)
        changes: dict[str, object] = {}
        if enabled is not None:
            changes["enabled"] = enabled
        if severity is not None:
            changes["severity"] = severity
        effective = replace(current, **changes)
        self._overrides[rule_id] = effective
        logger.debug(
            "Configured rule %r: enabled=%s severity=%s",
            rule_id,
            effective.enabled,
            effective.severity.name,
        )
        return effective

    def reset(self, rule_id: str | None = None) -> None:
        """Drop overrides for one rule, or for all rules when ``rule_id`` is None."""
        if rule_id is None:
            self._overrides.clear()
        else:
            self._overrides.pop(rule_id, None)

    def get_config(self, rule_id: str) -> RuleConfig:
        """Return the effective configuration of a rule (defaults + overrides).

        Raises
        ------
        UnknownRuleError
            If ``rule_id`` is not registered.
        """
        if rule_id in self._overrides:
            return self._overrides[rule_id]
        rule = self._rules.get(rule_id)
        if rule is None:
            raise UnknownRuleError(rule_id)
        return rule.get_config()

    def get_severity(self, rule_id: str) -> LintSeverity:
        """Return the effective severity for results of ``rule_id``.

        Raises
        ------
        UnknownRuleError
            If ``rule_id`` is not registered; a result carrying such an
            id is a programming error, not a soft failure.
        """
        return self.get_config(rule_id).severity

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_rule_by_id(self, rule_id: str) -> Rule | None:
        """Return the rule registered under ``rule_id``, or ``None``."""
        return self._rules.get(rule_id)

    def get_enabled_rules(self) -> list[Rule]:
        """Return the enabled rules in registration order."""
        return [rule for rule_id, rule in self._rules.items() if self.get_config(rule_id).enabled]

    def list_rules(self) -> list[RuleConfig]:
        """Return the effective configuration of every rule, in registration order."""
        return [self.get_config(rule_id) for rule_id in self._rules]

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(list(self._rules.values()))

    def __repr__(self) -> str:
        return f"RuleRegistry(rules={list(self._rules)})"

    # ------------------------------------------------------------------
    # Entry-point loading
    # ------------------------------------------------------------------

    def load_entrypoints(self, group: str = ENTRY_POINT_GROUP) -> None:
        """Discover and register rules declared as package entry-points.

        Each entry-point may name a ``Rule`` subclass (instantiated with
        no arguments) or a ``Rule`` instance.  Entries that fail to load,
        collide with a registered id, or are not rules are skipped with a
        log record, so repeated calls are idempotent.

        Parameters
        ----------
        group:
            The entry-point group name.
        """
        for ep in importlib.metadata.entry_points(group=group):
            if ep.name in self._rules:
                logger.debug("Entry-point %r already registered; skipping.", ep.name)
                continue
            try:
                loaded = ep.load()
                rule = loaded() if isinstance(loaded, type) and issubclass(loaded, Rule) else loaded
            except Exception:
                logger.exception("Failed to load entry-point %r from group %r; skipping.", ep.name, group)
                continue
            try:
                self.register(rule)
            except (RuleAlreadyRegisteredError, TypeError):
                logger.warning("Entry-point %r loaded but could not be registered; skipping.", ep.name)


def default_registry() -> RuleRegistry:
    """Build a new registry holding every built-in rule."""
    from obdb.linter.rules import builtin_rules

    return RuleRegistry(builtin_rules())
