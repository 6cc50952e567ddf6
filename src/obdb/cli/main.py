"""CLI entry point for obdb-lint.

Invoked as::

    obdb [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m obdb.cli.main

Commands
--------
lint        Lint a signalset (a workspace directory or a JSON file)
rules       List registered rules and their effective configuration
version     Show version information
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from obdb.ast.nodes import Node
    from obdb.linter.registry import RuleRegistry
    from obdb.linter.results import LintResult

console = Console()
err_console = Console(stderr=True)

SIGNALSET_RELATIVE_PATH = Path("signalsets") / "v3" / "default.json"
INFO_DISPLAY_LIMIT = 10


def _resolve_signalset(path: str) -> Path:
    """Map the PATH argument to the signalset file, exiting if it is missing."""
    target = Path(path)
    if target.is_dir():
        target = target / SIGNALSET_RELATIVE_PATH
    if not target.is_file():
        err_console.print(f"[red]Error:[/red] Signalset file not found at {escape(str(target))}")
        sys.exit(1)
    return target


def _read_source(path: Path) -> str:
    """Read a signalset file, exiting on error.

    Line endings are left untranslated so offsets match the file on disk.
    """
    try:
        with path.open(encoding="utf-8", newline="") as fh:
            return fh.read()
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {escape(str(path))}: {escape(str(exc))}")
        sys.exit(1)


def _write_source(path: Path, source: str) -> None:
    """Write fixed source back without translating line endings."""
    try:
        with path.open("w", encoding="utf-8", newline="") as fh:
            fh.write(source)
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot write {escape(str(path))}: {escape(str(exc))}")
        sys.exit(1)


def _parse_or_exit(source: str, path: Path) -> "Node":
    """Parse signalset source, printing errors and exiting on failure."""
    from obdb.lexer import LexError
    from obdb.parser import ParseErrorCollection, parse_tree

    try:
        return parse_tree(source)
    except LexError as exc:
        err_console.print(f"[red]Lex error[/red] in {escape(str(path))}: {escape(str(exc))}")
        sys.exit(1)
    except ParseErrorCollection as exc:
        err_console.print(f"[red]Parse errors[/red] in {escape(str(path))}:")
        for error in exc.errors:
            err_console.print(f"  {escape(str(error))}")
        sys.exit(1)


def _build_registry(
    workspace: Path,
    config_path: str | None,
    enable: tuple[str, ...],
    disable: tuple[str, ...],
) -> "RuleRegistry":
    """Create the default registry and apply file and command-line overrides."""
    from obdb.config import CONFIG_FILENAME, ConfigError, LinterConfig, load_config
    from obdb.linter.registry import UnknownRuleError, default_registry

    registry = default_registry()
    registry.load_entrypoints()

    candidate = Path(config_path) if config_path else workspace / CONFIG_FILENAME
    try:
        if config_path or candidate.is_file():
            config = load_config(candidate)
        else:
            config = LinterConfig()
        config.apply(registry)
    except ConfigError as exc:
        err_console.print(f"[red]Configuration error:[/red] {escape(str(exc))}")
        sys.exit(1)

    try:
        for rule_id in enable:
            registry.configure(rule_id, enabled=True)
        for rule_id in disable:
            registry.configure(rule_id, enabled=False)
    except UnknownRuleError as exc:
        err_console.print(f"[red]Error:[/red] Unknown rule {exc.rule_id!r}")
        sys.exit(1)
    return registry


def _severity_color(severity_name: str) -> str:
    """Map a LintSeverity name to a Rich color string."""
    colors = {
        "ERROR": "red",
        "WARNING": "yellow",
        "INFORMATION": "cyan",
        "HINT": "dim",
    }
    return colors.get(severity_name, "white")


def _print_bucket(title: str, color: str, marker: str, results: list["LintResult"], limit: int | None = None) -> None:
    if not results:
        return
    console.print(f"[bold {color}]{title} ({len(results)})[/bold {color}]")
    shown = results if limit is None else results[:limit]
    for result in shown:
        loc = f"{result.node.line}:{result.node.col}"
        console.print(
            f"  [{color}]{marker}[/{color}] {escape(result.rule_id)}: {escape(result.message)} [dim]({loc})[/dim]"
        )
    if limit is not None and len(results) > limit:
        console.print(f"  ... and {len(results) - limit} more")
    console.print()


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="obdb-lint")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output to stderr")
def cli(verbose: bool) -> None:
    """Linter for OBDb signalset JSON files."""
    package_logger = logging.getLogger("obdb")
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(handler, RichHandler) for handler in package_logger.handlers):
        package_logger.addHandler(RichHandler(console=err_console, show_path=False))


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from obdb import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]obdb-lint[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# rules command
# ---------------------------------------------------------------------------


@cli.command(name="rules")
@click.option("--config", "config_path", type=click.Path(exists=False), default=None, help="YAML rule configuration")
def rules_command(config_path: str | None) -> None:
    """List registered rules with their effective configuration."""
    registry = _build_registry(Path.cwd(), config_path, (), ())

    table = Table(title="Signalset lint rules")
    table.add_column("Id", style="bold")
    table.add_column("Severity", min_width=10)
    table.add_column("Enabled")
    table.add_column("Description")
    for config in registry.list_rules():
        color = _severity_color(config.severity.name)
        table.add_row(
            config.id,
            f"[{color}]{config.severity.name}[/{color}]",
            "yes" if config.enabled else "[dim]no[/dim]",
            escape(config.description),
        )
    console.print(table)


# ---------------------------------------------------------------------------
# lint command
# ---------------------------------------------------------------------------


@cli.command(name="lint")
@click.argument("path", type=click.Path(exists=False), default=".")
@click.option("--json", "json_output", is_flag=True, default=False, help="Print results as JSON")
@click.option("--config", "config_path", type=click.Path(exists=False), default=None, help="YAML rule configuration")
@click.option("--enable", multiple=True, metavar="RULE", help="Enable a rule (repeatable)")
@click.option("--disable", multiple=True, metavar="RULE", help="Disable a rule (repeatable)")
@click.option("--fix", is_flag=True, default=False, help="Apply suggested fixes and write the file back")
def lint_command(
    path: str,
    json_output: bool,
    config_path: str | None,
    enable: tuple[str, ...],
    disable: tuple[str, ...],
    fix: bool,
) -> None:
    """Lint a signalset.

    PATH is a workspace directory (its signalsets/v3/default.json is
    linted) or a signalset file.  Exits with status 1 if any finding has
    ERROR severity.
    """
    from obdb.linter.edits import apply_edits, collect_fixes
    from obdb.linter.linter import BaseLinter
    from obdb.linter.results import LintSeverity
    from obdb.linter.traversal import lint_tree

    signalset = _resolve_signalset(path)
    workspace = Path(path) if Path(path).is_dir() else signalset.parent
    registry = _build_registry(workspace, config_path, enable, disable)
    linter = BaseLinter(registry)

    source = _read_source(signalset)
    results = lint_tree(linter, _parse_or_exit(source, signalset))

    if fix:
        edits = collect_fixes(results)
        if edits:
            source = apply_edits(source, edits)
            _write_source(signalset, source)
            if not json_output:
                console.print(f"[green]Applied {len(edits)} edit(s)[/green] to {escape(str(signalset))}")
            results = lint_tree(linter, _parse_or_exit(source, signalset))

    severities = {result.rule_id: registry.get_severity(result.rule_id) for result in results}
    has_errors = any(severity is LintSeverity.ERROR for severity in severities.values())

    if json_output:
        payload = []
        for result in results:
            data = result.to_dict()
            data["severity"] = severities[result.rule_id].name.lower()
            payload.append(data)
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        sys.exit(1 if has_errors else 0)

    if not results:
        console.print("[bold green]No issues found![/bold green]")
        sys.exit(0)

    console.print(f"[bold]Linting Results:[/bold] {escape(str(signalset))}")
    console.print(f"[dim]Found {len(results)} issue(s)[/dim]")
    console.print()

    errors = [r for r in results if severities[r.rule_id] is LintSeverity.ERROR]
    warnings = [r for r in results if severities[r.rule_id] is LintSeverity.WARNING]
    info = [r for r in results if severities[r.rule_id] > LintSeverity.WARNING]

    _print_bucket("Errors", "red", "x", errors)
    _print_bucket("Warnings", "yellow", "!", warnings)
    _print_bucket("Info", "cyan", "i", info, limit=INFO_DISPLAY_LIMIT)

    console.print(f"[dim]Total: {len(results)} issue(s)[/dim]")
    if has_errors:
        sys.exit(1)


if __name__ == "__main__":
    cli()
