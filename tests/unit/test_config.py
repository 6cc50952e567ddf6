"""Unit tests for obdb.config: YAML rule configuration."""
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from obdb.config import ConfigError, LinterConfig, RuleOverride, load_config
from obdb.linter.registry import RuleRegistry
from obdb.linter.results import LintSeverity


class TestFromYaml:
    def test_empty_document_gives_empty_config(self) -> None:
        assert LinterConfig.from_yaml("").rules == {}

    def test_full_settings(self) -> None:
        config = LinterConfig.from_yaml(
            "rules:\n"
            "  suggested-metric-suggestion:\n"
            "    enabled: true\n"
            "    severity: warning\n"
        )
        assert config.rules["suggested-metric-suggestion"] == RuleOverride(
            enabled=True, severity=LintSeverity.WARNING
        )

    def test_boolean_shorthand(self) -> None:
        config = LinterConfig.from_yaml("rules:\n  signal-id-naming: false\n")
        assert config.rules["signal-id-naming"] == RuleOverride(enabled=False)

    @pytest.mark.parametrize("text, severity", [("info", LintSeverity.INFORMATION), ("HINT", LintSeverity.HINT)])
    def test_severity_names(self, text: str, severity: LintSeverity) -> None:
        config = LinterConfig.from_yaml(f"rules:\n  r:\n    severity: {text}\n")
        assert config.rules["r"].severity is severity

    def test_invalid_yaml_raises(self) -> None:
        with pytest.raises(ConfigError, match="Invalid YAML"):
            LinterConfig.from_yaml("rules: [unclosed")

    def test_non_mapping_root_raises(self) -> None:
        with pytest.raises(ConfigError, match="must be a mapping"):
            LinterConfig.from_yaml("- a\n- b\n")

    def test_non_mapping_rules_raises(self) -> None:
        with pytest.raises(ConfigError, match="'rules'"):
            LinterConfig.from_yaml("rules: 3\n")

    def test_unknown_severity_raises(self) -> None:
        with pytest.raises(ConfigError, match="Unknown severity"):
            LinterConfig.from_yaml("rules:\n  r:\n    severity: fatal\n")

    def test_non_boolean_enabled_raises(self) -> None:
        with pytest.raises(ConfigError, match="'enabled'"):
            LinterConfig.from_yaml("rules:\n  r:\n    enabled: sometimes\n")

    def test_unknown_setting_raises(self) -> None:
        with pytest.raises(ConfigError, match="Unknown setting"):
            LinterConfig.from_yaml("rules:\n  r:\n    colour: red\n")


class TestApply:
    def test_apply_configures_registry(self, registry: RuleRegistry) -> None:
        LinterConfig.from_yaml(
            "rules:\n"
            "  suggested-metric-suggestion: true\n"
            "  redundant-fmt-defaults:\n"
            "    severity: error\n"
        ).apply(registry)
        assert registry.get_config("suggested-metric-suggestion").enabled is True
        assert registry.get_severity("redundant-fmt-defaults") is LintSeverity.ERROR

    def test_unknown_rule_is_warned_and_skipped(
        self, registry: RuleRegistry, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="obdb.config"):
            LinterConfig.from_yaml("rules:\n  not-installed: true\n").apply(registry)
        assert "unknown rule 'not-installed'" in caplog.text


class TestLoadConfig:
    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / ".obdblint.yaml"
        path.write_text("rules:\n  signal-id-naming:\n    enabled: false\n", encoding="utf-8")
        assert load_config(path).rules["signal-id-naming"].enabled is False

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read"):
            load_config(tmp_path / "absent.yaml")
