"""Shared test fixtures for obdb-lint.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

from pathlib import Path

import pytest

from obdb.linter.registry import RuleRegistry, default_registry

SAMPLE_SIGNALSET = """\
{
  // Engine and body data
  "commands": [
    {
      "hdr": "7E0",
      "cmd": {"22": "F40C"},
      "freq": 1,
      "signals": [
        {"id": "ENGINE_RPM", "name": "Engine RPM", "fmt": {"len": 16, "div": 4, "unit": "rpm"}},
      ]
    },
    {
      "hdr": "7E0",
      "cmd": {"22": "F40D"},
      "freq": 1,
      "signals": [
        {"id": "VEH_VSS", "name": "Vehicle speed", "fmt": {"len": 8, "unit": "kilometersPerHour"}}
      ]
    }
  ]
}
"""


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "obdb"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def sample_source() -> str:
    """A small, valid signalset with comments and a trailing comma."""
    return SAMPLE_SIGNALSET


@pytest.fixture()
def registry() -> RuleRegistry:
    """A fresh registry holding every built-in rule with default settings."""
    return default_registry()


@pytest.fixture()
def workspace(tmp_path: Path, sample_source: str) -> Path:
    """A directory laid out like a vehicle repository."""
    signalset = tmp_path / "signalsets" / "v3" / "default.json"
    signalset.parent.mkdir(parents=True)
    signalset.write_text(sample_source, encoding="utf-8")
    return tmp_path
