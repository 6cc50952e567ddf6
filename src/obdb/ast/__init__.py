"""Signalset syntax tree module.

Exports the ``Node`` tree, its lookup helpers, and the domain values
projected from it.
"""
from __future__ import annotations

from obdb.ast.model import Command, Signal, SignalGroup, Target, signal_pairs
from obdb.ast.nodes import Node, NodeType, PathSegment, find_node_at_location, get_node_value

__all__ = [
    # Tree
    "Node",
    "NodeType",
    "PathSegment",
    "find_node_at_location",
    "get_node_value",
    # Domain values
    "Signal",
    "SignalGroup",
    "Command",
    "Target",
    "signal_pairs",
]
