"""Signalset Parser module.

Exports the ``Parser`` class, the ``parse_tree`` convenience function,
and parse error types.
"""
from __future__ import annotations

from obdb.parser.errors import ParseError, ParseErrorCollection, RecoveryStrategy
from obdb.parser.parser import Parser, parse_tree

__all__ = [
    "Parser",
    "parse_tree",
    "ParseError",
    "ParseErrorCollection",
    "RecoveryStrategy",
]
