"""Editor-facing linter.

``SignalLinter`` adds to ``BaseLinter`` what an editor integration
needs: it lints a whole ``TextDocument``, remembers the results of the
last run, converts them to diagnostics, and offers their suggestions as
code actions for a requested range.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from obdb.editor.adapter import EditorDiagnostic, convert_to_diagnostics
from obdb.editor.document import Range, TextDocument
from obdb.linter.linter import BaseLinter
from obdb.linter.registry import RuleRegistry
from obdb.linter.results import LintResult
from obdb.linter.traversal import lint_tree
from obdb.parser.parser import parse_tree

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditorTextEdit:
    """A text replacement addressed by editor range."""

    range: Range
    new_text: str


@dataclass(frozen=True)
class CodeAction:
    """A quick fix offered for one diagnostic."""

    title: str
    edits: tuple[EditorTextEdit, ...]
    code: str
    kind: str = "quickfix"


class SignalLinter(BaseLinter):
    """Lint documents and keep the results of the most recent run."""

    def __init__(self, registry: RuleRegistry) -> None:
        super().__init__(registry)
        self._last_results: list[LintResult] = []

    @property
    def last_results(self) -> list[LintResult]:
        return list(self._last_results)

    def set_last_results(self, results: list[LintResult]) -> None:
        self._last_results = list(results)

    def lint_text_document(self, document: TextDocument) -> list[LintResult]:
        """Parse and lint ``document``; the results become ``last_results``.

        Raises
        ------
        LexError
            If the text contains invalid characters or unterminated literals.
        ParseErrorCollection
            If the text contains syntactic errors.
        """
        results = lint_tree(self, parse_tree(document.text))
        self.set_last_results(results)
        logger.debug("Linted %s: %d result(s)", document.uri or "<document>", len(results))
        return results

    def to_diagnostics(
        self,
        document: TextDocument,
        results: list[LintResult] | None = None,
    ) -> list[EditorDiagnostic]:
        """Convert ``results`` to diagnostics and remember them for ``code_actions``.

        With ``results`` omitted, ``last_results`` is converted.  Severity
        is the rule's effective severity in the registry.

        Raises
        ------
        UnknownRuleError
            If a result names a rule the registry does not hold.
        """
        if results is not None:
            self.set_last_results(results)
        return convert_to_diagnostics(document, self._last_results, self.registry.get_severity)

    def code_actions(self, document: TextDocument, range: Range) -> list[CodeAction]:
        """Return quick fixes for results of the last run that intersect ``range``."""
        actions: list[CodeAction] = []
        for result in self._last_results:
            if result.suggestion is None:
                continue
            node_range = document.range_of(result.node.offset, result.node.length)
            if not node_range.intersects(range):
                continue
            edits = tuple(
                EditorTextEdit(range=document.range_of(edit.offset, edit.length), new_text=edit.new_text)
                for edit in result.suggestion.edits
            )
            actions.append(CodeAction(title=result.suggestion.title, edits=edits, code=result.rule_id))
        return actions
