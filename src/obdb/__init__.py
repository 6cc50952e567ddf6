"""obdb-lint: a linter for OBDb vehicle signalset JSON files.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import obdb

    # Signalset text is JSON with comments and trailing commas
    source = '''
        {
          "commands": [
            {"hdr": "7E0", "cmd": {"22": "F40D"}, "freq": 1,
             "signals": [{"id": "ENGINE_RPM", "name": "Engine RPM",
                          "fmt": {"len": 16, "unit": "rpm"}}]}
          ]
        }
    '''
    root = obdb.parse(source)

    # Lint with the built-in rules and their default configuration
    findings = obdb.lint(source)

    # Apply every non-overlapping suggested fix
    fixed = obdb.fix(source)

    obdb.__version__
    '0.1.0'
"""
from __future__ import annotations

from typing import TYPE_CHECKING

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from obdb.ast.nodes import Node
    from obdb.linter.registry import RuleRegistry
    from obdb.linter.results import LintResult


def parse(source: str) -> "Node":
    """Parse signalset text into a ``Node`` tree.

    Parameters
    ----------
    source:
        Complete signalset text; comments and trailing commas are allowed.

    Returns
    -------
    Node
        The root node of the document.

    Raises
    ------
    obdb.lexer.LexError
        If the source contains invalid characters.
    obdb.parser.ParseErrorCollection
        If the source contains syntactic errors.
    """
    from obdb.parser.parser import parse_tree

    return parse_tree(source)


def lint(source: str, registry: "RuleRegistry | None" = None) -> list["LintResult"]:
    """Lint signalset text.

    Parameters
    ----------
    source:
        Complete signalset text.
    registry:
        Rules to run; defaults to a fresh ``default_registry()``.

    Returns
    -------
    list[LintResult]
        All findings, in traversal order.
    """
    from obdb.linter.registry import default_registry
    from obdb.linter.traversal import lint_source

    return lint_source(source, registry if registry is not None else default_registry())


def fix(source: str, registry: "RuleRegistry | None" = None) -> str:
    """Return ``source`` with every applicable suggested fix applied.

    Suggestions that overlap an earlier one are skipped.
    """
    from obdb.linter.edits import apply_edits, collect_fixes

    return apply_edits(source, collect_fixes(lint(source, registry)))


__all__ = [
    "__version__",
    "parse",
    "lint",
    "fix",
]
