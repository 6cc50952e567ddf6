"""Test that the 3-line quickstart API works for obdb-lint."""
from __future__ import annotations


def test_quickstart_imports(package_name: str, expected_version: str) -> None:
    import obdb

    assert obdb.__name__ == package_name
    assert obdb.__version__ == expected_version
    assert callable(obdb.parse)
    assert callable(obdb.lint)
    assert callable(obdb.fix)


def test_quickstart_parse() -> None:
    import obdb

    root = obdb.parse('{"commands": []}  // nothing yet')
    assert root.get_property("commands") is not None


def test_quickstart_lint(sample_source: str) -> None:
    import obdb

    assert obdb.lint(sample_source) == []


def test_quickstart_lint_with_registry(sample_source: str) -> None:
    import obdb
    from obdb.linter import default_registry

    registry = default_registry()
    registry.configure("suggested-metric-suggestion", enabled=True)
    findings = obdb.lint(sample_source, registry)
    assert [f.rule_id for f in findings] == ["suggested-metric-suggestion"]


def test_quickstart_fix() -> None:
    import obdb

    source = '{"commands": [{"hdr": "7E0", "cmd": {"01": "0C"}, "signals": [{"id": "rpm", "name": "RPM"}]}]}'
    assert '"id": "RPM"' in obdb.fix(source)
