"""Signalset grammar module.

Exports the JSONC token definitions.
"""
from __future__ import annotations

from obdb.grammar.tokens import KEYWORDS, PUNCTUATION, Token, TokenType

__all__ = [
    "TokenType",
    "Token",
    "KEYWORDS",
    "PUNCTUATION",
]
