"""Applying suggested edits to a source buffer.

Edits are ``(offset, length, new_text)`` splices over the buffer the
tree was parsed from.  The engine never reconciles edits coming from
different results; that is done here, by whoever applies them.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable

from obdb.linter.results import LintResult, TextEdit

logger = logging.getLogger(__name__)


class OverlappingEditsError(ValueError):
    """Raised when two edits to be applied together touch the same range."""

    def __init__(self, first: TextEdit, second: TextEdit) -> None:
        self.first = first
        self.second = second
        super().__init__(
            f"Edit at {second.offset}+{second.length} overlaps edit at {first.offset}+{first.length}"
        )


def _overlaps(a: TextEdit, b: TextEdit) -> bool:
    # Two edits starting at the same offset have no defined order.
    if a.offset == b.offset:
        return True
    return a.offset < b.end and b.offset < a.end


def apply_edits(text: str, edits: Iterable[TextEdit]) -> str:
    """Return ``text`` with every edit applied.

    Edits are applied from the end of the buffer backwards so that the
    offsets of earlier edits stay valid.

    Raises
    ------
    OverlappingEditsError
        If two edits overlap.
    ValueError
        If an edit falls outside ``text``.
    """
    ordered = sorted(edits, key=lambda e: (e.offset, e.length))
    for edit in ordered:
        if edit.offset < 0 or edit.length < 0 or edit.end > len(text):
            raise ValueError(f"Edit at {edit.offset}+{edit.length} is outside the text (length {len(text)})")
    for previous, current in zip(ordered, ordered[1:]):
        if _overlaps(previous, current):
            raise OverlappingEditsError(previous, current)
    for edit in reversed(ordered):
        text = text[: edit.offset] + edit.new_text + text[edit.end :]
    return text


def collect_fixes(results: Iterable[LintResult]) -> list[TextEdit]:
    """Gather the edits of every suggestion that can be applied together.

    Results are taken in order; a suggestion whose edits overlap an edit
    already accepted is skipped as a whole, so the returned edits never
    overlap.
    """
    accepted: list[TextEdit] = []
    for result in results:
        if result.suggestion is None:
            continue
        edits = result.suggestion.edits
        clash = next(
            (other for edit in edits for other in accepted if _overlaps(edit, other)),
            None,
        )
        if clash is not None:
            logger.warning(
                "Skipping fix %r from %s: it overlaps another fix at offset %d",
                result.suggestion.title,
                result.rule_id,
                clash.offset,
            )
            continue
        accepted.extend(edits)
    return accepted
