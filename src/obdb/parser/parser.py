"""Signalset Recursive-Descent Parser.

Converts a flat list of ``Token`` objects into a concrete syntax tree of
``Node`` objects.

The parser skips COMMENT tokens transparently, so the grammar rules are
stated in terms of meaningful tokens only::

    document ::= value EOF
    value    ::= object | array | STRING | NUMBER | 'true' | 'false' | 'null'
    object   ::= '{' [ property { ',' property } [ ',' ] ] '}'
    property ::= STRING ':' value
    array    ::= '[' [ value { ',' value } [ ',' ] ] ']'

Error recovery
--------------
Two mistakes are recoverable: a missing comma between members (the
comma is assumed present) and, when ``allow_trailing_comma`` is off, a
trailing comma (it is skipped).  Both are recorded and parsing goes on,
so one run can surface several of them.  Anything else aborts the run.
Whenever errors were recorded the parser raises ``ParseErrorCollection``
instead of returning a tree, because edits computed against a tree that
does not match its buffer would be unsafe.
"""
from __future__ import annotations

from collections.abc import Callable
from typing import NoReturn

from obdb.ast.nodes import Node, NodeType
from obdb.grammar.tokens import Token, TokenType
from obdb.lexer.lexer import tokenize
from obdb.parser.errors import ParseError, ParseErrorCollection, RecoveryStrategy

_VALUE_START = (
    TokenType.LBRACE,
    TokenType.LBRACKET,
    TokenType.STRING,
    TokenType.NUMBER,
    TokenType.TRUE,
    TokenType.FALSE,
    TokenType.NULL,
)

_LEAF_TYPES: dict[TokenType, NodeType] = {
    TokenType.STRING: NodeType.STRING,
    TokenType.NUMBER: NodeType.NUMBER,
    TokenType.TRUE: NodeType.BOOLEAN,
    TokenType.FALSE: NodeType.BOOLEAN,
    TokenType.NULL: NodeType.NULL,
}


class Parser:
    """Recursive descent parser that produces a ``Node`` tree from tokens.

    Parameters
    ----------
    tokens:
        The flat token list produced by the lexer.  Must include the
        terminal ``EOF`` token.
    allow_trailing_comma:
        Accept a comma before a closing ``}`` or ``]`` without recording
        an error.
    """

    def __init__(self, tokens: list[Token], allow_trailing_comma: bool = True) -> None:
        # Filter out COMMENT tokens; the grammar ignores them.
        self._tokens: list[Token] = [t for t in tokens if t.type is not TokenType.COMMENT]
        self._pos: int = 0
        self._allow_trailing_comma = allow_trailing_comma
        self._errors: ParseErrorCollection = ParseErrorCollection()

    # ------------------------------------------------------------------
    # Navigation helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        """Return the current token without consuming it."""
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return self._tokens[-1]  # EOF

    def _advance(self) -> Token:
        """Consume and return the current token."""
        tok = self._current()
        if tok.type is not TokenType.EOF:
            self._pos += 1
        return tok

    def _check(self, *types: TokenType) -> bool:
        """Return True if the current token matches any of the given types."""
        return self._current().type in types

    def _match(self, *types: TokenType) -> Token | None:
        """Consume and return the current token if it matches; else None."""
        if self._check(*types):
            return self._advance()
        return None

    def _expect(self, token_type: TokenType, message: str) -> Token:
        """Consume the current token if it matches, else abort the parse."""
        if self._check(token_type):
            return self._advance()
        self._abort(message, (token_type,))

    def _record_error(
        self,
        message: str,
        expected: tuple[TokenType, ...],
        recovery: RecoveryStrategy,
    ) -> ParseError:
        tok = self._current()
        error = ParseError(
            message=message,
            line=tok.line,
            col=tok.col,
            offset=tok.offset,
            expected=expected,
            found=tok,
            recovery=recovery,
        )
        self._errors.add(error)
        return error

    def _abort(self, message: str, expected: tuple[TokenType, ...]) -> NoReturn:
        self._record_error(message, expected, RecoveryStrategy.ABORT)
        raise self._errors

    # ------------------------------------------------------------------
    # Top-level parse
    # ------------------------------------------------------------------

    def parse(self) -> Node:
        """Parse the token stream and return the root ``Node``.

        Raises
        ------
        ParseErrorCollection
            If any errors were recorded during parsing.
        """
        root = self._parse_value()
        if not self._check(TokenType.EOF):
            self._abort("Unexpected content after the end of the document", (TokenType.EOF,))
        if self._errors.has_errors:
            raise self._errors
        return root

    def _parse_value(self) -> Node:
        tok = self._current()
        if tok.type is TokenType.LBRACE:
            return self._parse_object()
        if tok.type is TokenType.LBRACKET:
            return self._parse_array()
        if tok.type in _LEAF_TYPES:
            return self._parse_leaf()
        self._abort("Expected a value", _VALUE_START)

    def _parse_leaf(self) -> Node:
        tok = self._advance()
        value: object
        if tok.type is TokenType.STRING:
            value = tok.value
        elif tok.type is TokenType.NUMBER:
            value = float(tok.raw) if any(c in tok.raw for c in ".eE") else int(tok.raw)
        elif tok.type is TokenType.NULL:
            value = None
        else:
            value = tok.type is TokenType.TRUE
        return Node(
            type=_LEAF_TYPES[tok.type],
            offset=tok.offset,
            length=len(tok.raw),
            line=tok.line,
            col=tok.col,
            value=value,
        )

    # ------------------------------------------------------------------
    # Containers
    # ------------------------------------------------------------------

    def _parse_object(self) -> Node:
        """Parse ``'{' [ property { ',' property } ] '}'``."""
        start_tok = self._advance()  # consume '{'
        members = self._parse_members(TokenType.RBRACE, (TokenType.STRING,), self._parse_property)
        end_tok = self._expect(TokenType.RBRACE, "Expected ',' or '}' in object")
        return self._container(NodeType.OBJECT, start_tok, end_tok, members)

    def _parse_array(self) -> Node:
        """Parse ``'[' [ value { ',' value } ] ']'``."""
        start_tok = self._advance()  # consume '['
        members = self._parse_members(TokenType.RBRACKET, _VALUE_START, self._parse_value)
        end_tok = self._expect(TokenType.RBRACKET, "Expected ',' or ']' in array")
        return self._container(NodeType.ARRAY, start_tok, end_tok, members)

    def _parse_members(
        self,
        closer: TokenType,
        member_start: tuple[TokenType, ...],
        parse_member: Callable[[], Node],
    ) -> list[Node]:
        members: list[Node] = []
        if self._check(closer):
            return members
        members.append(parse_member())
        while True:
            if self._match(TokenType.COMMA):
                if self._check(closer):
                    if not self._allow_trailing_comma:
                        self._record_error("Trailing comma", (closer,), RecoveryStrategy.SKIP_TOKEN)
                    return members
                members.append(parse_member())
            elif self._check(*member_start):
                self._record_error("Expected ','", (TokenType.COMMA,), RecoveryStrategy.INSERT_MISSING)
                members.append(parse_member())
            else:
                return members

    def _parse_property(self) -> Node:
        """Parse ``STRING ':' value``."""
        key_tok = self._expect(TokenType.STRING, "Expected a property name")
        key = Node(
            type=NodeType.STRING,
            offset=key_tok.offset,
            length=len(key_tok.raw),
            line=key_tok.line,
            col=key_tok.col,
            value=key_tok.value,
        )
        self._expect(TokenType.COLON, f"Expected ':' after property name {key_tok.value!r}")
        value = self._parse_value()
        return Node(
            type=NodeType.PROPERTY,
            offset=key.offset,
            length=value.end - key.offset,
            line=key.line,
            col=key.col,
            children=(key, value),
        )

    @staticmethod
    def _container(node_type: NodeType, start_tok: Token, end_tok: Token, members: list[Node]) -> Node:
        return Node(
            type=node_type,
            offset=start_tok.offset,
            length=end_tok.end - start_tok.offset,
            line=start_tok.line,
            col=start_tok.col,
            children=tuple(members),
        )


# ---------------------------------------------------------------------------
# Module-level convenience function
# ---------------------------------------------------------------------------


def parse_tree(source: str, allow_trailing_comma: bool = True) -> Node:
    """Parse a signalset source string and return the root ``Node``.

    Parameters
    ----------
    source:
        Complete JSONC source text.
    allow_trailing_comma:
        Accept trailing commas in objects and arrays.

    Returns
    -------
    Node
        The root of the concrete syntax tree.

    Raises
    ------
    LexError
        If the source contains invalid characters or unterminated literals.
    ParseErrorCollection
        If the source contains syntactic errors.

    Example
    -------
    ::

        from obdb.parser import parse_tree
        root = parse_tree('''
            {
              // engine data
              "commands": [
                { "hdr": "7E0", "cmd": {"22": "F40C"}, "signals": [
                  { "id": "ENGINE_RPM", "name": "Engine RPM" }
                ]}
              ]
            }
        ''')
    """
    tokens = tokenize(source)
    return Parser(tokens, allow_trailing_comma=allow_trailing_comma).parse()
