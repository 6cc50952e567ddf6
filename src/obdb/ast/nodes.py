"""Concrete syntax tree nodes for signalset documents.

Every node produced by the signalset parser is a frozen dataclass so
that trees are immutable and hashable.  A node records the exact
``[offset, offset + length)`` range it was parsed from, which is what
lets rules report a precise range and splice replacement text into the
original buffer without touching anything around it.

Node shapes:

- ``object`` / ``array``: containers, ``children`` holds the members;
- ``property``: exactly two children, the key ``string`` node and the
  value node;
- ``string`` / ``number`` / ``boolean`` / ``null``: leaves carrying a
  decoded ``value``.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

PathSegment = Union[str, int]


class NodeType(Enum):
    """The kind of syntax a ``Node`` was parsed from."""

    OBJECT = "object"
    ARRAY = "array"
    PROPERTY = "property"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


@dataclass(frozen=True, slots=True)
class Node:
    """A node of the concrete syntax tree.

    Parameters
    ----------
    type:
        The syntactic kind of the node.
    offset:
        0-based offset of the first character of the node.
    length:
        Number of characters the node spans in the source.
    line:
        1-based line number of the first character.
    col:
        1-based column number of the first character.
    value:
        Decoded value for leaf nodes; ``None`` for containers.
    children:
        Child nodes for ``object``, ``array`` and ``property`` nodes.
    """

    type: NodeType
    offset: int
    length: int
    line: int
    col: int
    value: Any = None
    children: tuple["Node", ...] = field(default=())

    def __repr__(self) -> str:
        return f"Node({self.type.value}, {self.offset}+{self.length}, {self.line}:{self.col})"

    @property
    def end(self) -> int:
        """Offset one past the last character of the node."""
        return self.offset + self.length

    @property
    def key(self) -> str | None:
        """The property name, for ``property`` nodes."""
        if self.type is NodeType.PROPERTY and self.children:
            return self.children[0].value
        return None

    @property
    def value_node(self) -> "Node | None":
        """The value child, for ``property`` nodes."""
        if self.type is NodeType.PROPERTY and len(self.children) > 1:
            return self.children[1]
        return None

    def get_property(self, name: str) -> "Node | None":
        """Return the ``property`` node named ``name`` of an object node.

        When a key is repeated the last occurrence wins, matching how the
        value projection resolves duplicates.
        """
        if self.type is not NodeType.OBJECT:
            return None
        found: Node | None = None
        for child in self.children:
            if child.key == name:
                found = child
        return found

    def contains(self, offset: int) -> bool:
        """Return True if ``offset`` falls inside this node's range."""
        return self.offset <= offset < self.end

    def text(self, source: str) -> str:
        """Return the slice of ``source`` this node was parsed from."""
        return source[self.offset : self.end]


def find_node_at_location(root: Node | None, path: Sequence[PathSegment]) -> Node | None:
    """Resolve ``path`` from ``root`` and return the value node it names.

    String segments select object properties, integer segments select
    array elements.  Returns ``None`` as soon as a segment cannot be
    resolved.

    Example
    -------
    ::

        signals = find_node_at_location(root, ["commands", 0, "signals"])
    """
    node = root
    for segment in path:
        if node is None:
            return None
        if isinstance(segment, str):
            prop = node.get_property(segment)
            node = prop.value_node if prop is not None else None
        else:
            if node.type is not NodeType.ARRAY or not 0 <= segment < len(node.children):
                return None
            node = node.children[segment]
    return node


def get_node_value(node: Node) -> Any:
    """Project a node to plain Python values.

    Objects become ``dict`` (key order preserved, last duplicate wins),
    arrays become ``list`` and leaves return their decoded value.
    """
    if node.type is NodeType.OBJECT:
        result: dict[str, Any] = {}
        for prop in node.children:
            value_node = prop.value_node
            if prop.key is not None and value_node is not None:
                result[prop.key] = get_node_value(value_node)
        return result
    if node.type is NodeType.ARRAY:
        return [get_node_value(child) for child in node.children]
    if node.type is NodeType.PROPERTY:
        value_node = node.value_node
        return get_node_value(value_node) if value_node is not None else None
    return node.value
