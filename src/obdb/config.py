"""Rule configuration files.

Per-rule overrides are written in YAML::

    rules:
      suggested-metric-suggestion:
        enabled: true
        severity: warning
      redundant-fmt-defaults:
        enabled: false

The CLI looks for ``.obdblint.yaml`` in the workspace directory unless
``--config`` names a file explicitly.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from obdb.linter.registry import RuleRegistry
from obdb.linter.results import LintSeverity

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".obdblint.yaml"


class ConfigError(ValueError):
    """Raised when a configuration file cannot be read or is malformed."""


@dataclass(frozen=True)
class RuleOverride:
    """Configured values for one rule; ``None`` keeps the rule default."""

    enabled: bool | None = None
    severity: LintSeverity | None = None


@dataclass(frozen=True)
class LinterConfig:
    """Parsed configuration: rule overrides keyed by rule id."""

    rules: Mapping[str, RuleOverride] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: object) -> "LinterConfig":
        """Validate the structure loaded from YAML.

        Raises
        ------
        ConfigError
            If the structure or a value is invalid.
        """
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError("Configuration must be a mapping")
        rules = data.get("rules") or {}
        if not isinstance(rules, Mapping):
            raise ConfigError("'rules' must be a mapping of rule id to settings")

        overrides: dict[str, RuleOverride] = {}
        for rule_id, settings in rules.items():
            if settings is None:
                settings = {}
            if isinstance(settings, bool):
                settings = {"enabled": settings}
            if not isinstance(settings, Mapping):
                raise ConfigError(f"Settings for rule {rule_id!r} must be a mapping or a boolean")
            unknown = set(settings) - {"enabled", "severity"}
            if unknown:
                raise ConfigError(f"Unknown setting(s) for rule {rule_id!r}: {', '.join(sorted(map(str, unknown)))}")

            enabled = settings.get("enabled")
            if enabled is not None and not isinstance(enabled, bool):
                raise ConfigError(f"'enabled' for rule {rule_id!r} must be true or false")
            severity = settings.get("severity")
            if severity is not None:
                try:
                    severity = LintSeverity.parse(str(severity))
                except ValueError as exc:
                    raise ConfigError(f"Rule {rule_id!r}: {exc}") from exc
            overrides[str(rule_id)] = RuleOverride(enabled=enabled, severity=severity)
        return cls(rules=overrides)

    @classmethod
    def from_yaml(cls, text: str) -> "LinterConfig":
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML: {exc}") from exc
        return cls.from_mapping(data)

    def apply(self, registry: RuleRegistry) -> None:
        """Push the overrides into ``registry``.

        Ids the registry does not know are skipped with a warning, since
        they may belong to a rule plugin that is not installed.
        """
        for rule_id, override in self.rules.items():
            if rule_id not in registry:
                logger.warning("Configuration names unknown rule %r; ignoring it", rule_id)
                continue
            registry.configure(rule_id, enabled=override.enabled, severity=override.severity)


def load_config(path: str | Path) -> LinterConfig:
    """Read and parse a YAML configuration file.

    Raises
    ------
    ConfigError
        If the file cannot be read or is invalid.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read configuration {path}: {exc}") from exc
    logger.debug("Loaded configuration from %s", path)
    return LinterConfig.from_yaml(text)
