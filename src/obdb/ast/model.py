"""Domain values projected from signalset nodes.

Rules receive these plain values paired with the ``Node`` they were
derived from: the value is convenient to inspect, the node is what a
result points at and what a suggested edit replaces.

JSON keys are camelCase in signalset files; the dataclasses use
snake_case attributes and keep every key they do not model in
``extra`` (encounter order preserved).
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Union

from obdb.ast.nodes import Node, NodeType, get_node_value

_SIGNAL_KEYS = frozenset({"id", "name", "path", "fmt", "suggestedMetric"})
_GROUP_KEYS = frozenset({"id", "name", "path", "suggestedMetricGroup", "matchingRegex"})


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _extra(data: Mapping[str, Any], known: frozenset[str]) -> Mapping[str, Any]:
    return MappingProxyType({k: v for k, v in data.items() if k not in known})


@dataclass(frozen=True)
class Signal:
    """A leaf measurement definition.

    Parameters
    ----------
    id:
        Identifier, unique within a document.
    name:
        Human-readable display name.
    path:
        Optional grouping path used by front-ends.
    fmt:
        Optional format descriptor (bit length, scaling, unit...).
    suggested_metric:
        Optional ``suggestedMetric`` value.
    extra:
        All remaining keys of the signal object.
    """

    id: str | None = None
    name: str | None = None
    path: str | None = None
    fmt: Mapping[str, Any] | None = None
    suggested_metric: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_value(cls, data: Any) -> "Signal":
        """Build a ``Signal`` from the projected value of a signal node."""
        if not isinstance(data, Mapping):
            return cls()
        fmt = data.get("fmt")
        return cls(
            id=_str_or_none(data.get("id")),
            name=_str_or_none(data.get("name")),
            path=_str_or_none(data.get("path")),
            fmt=MappingProxyType(dict(fmt)) if isinstance(fmt, Mapping) else None,
            suggested_metric=_str_or_none(data.get("suggestedMetric")),
            extra=_extra(data, _SIGNAL_KEYS),
        )

    @classmethod
    def from_node(cls, node: Node) -> "Signal":
        return cls.from_value(get_node_value(node))


@dataclass(frozen=True)
class SignalGroup:
    """A named cluster of signals selected by ``matchingRegex``."""

    id: str | None = None
    name: str | None = None
    path: str | None = None
    suggested_metric_group: str | None = None
    matching_regex: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_value(cls, data: Any) -> "SignalGroup":
        if not isinstance(data, Mapping):
            return cls()
        return cls(
            id=_str_or_none(data.get("id")),
            name=_str_or_none(data.get("name")),
            path=_str_or_none(data.get("path")),
            suggested_metric_group=_str_or_none(data.get("suggestedMetricGroup")),
            matching_regex=_str_or_none(data.get("matchingRegex")),
            extra=_extra(data, _GROUP_KEYS),
        )

    @classmethod
    def from_node(cls, node: Node) -> "SignalGroup":
        return cls.from_value(get_node_value(node))


Target = Union[Signal, SignalGroup]


@dataclass(frozen=True)
class Command:
    """A diagnostic request descriptor and the signals it yields.

    Parameters
    ----------
    hdr:
        Request header (ECU address), e.g. ``"7E0"``.
    cmd:
        The request itself, usually a ``{service: pid}`` mapping.
    rax:
        Optional response address.
    filter:
        Optional model-year filter.
    signals:
        Signals decoded from the response, in document order.
    """

    hdr: str | None = None
    cmd: Any = None
    rax: str | None = None
    filter: Mapping[str, Any] | None = None
    signals: tuple[Signal, ...] = ()

    @classmethod
    def from_value(cls, data: Any) -> "Command":
        if not isinstance(data, Mapping):
            return cls()
        signals = data.get("signals")
        filter_ = data.get("filter")
        return cls(
            hdr=_str_or_none(data.get("hdr")),
            cmd=data.get("cmd"),
            rax=_str_or_none(data.get("rax")),
            filter=MappingProxyType(dict(filter_)) if isinstance(filter_, Mapping) else None,
            signals=tuple(Signal.from_value(s) for s in signals) if isinstance(signals, list) else (),
        )

    @classmethod
    def from_node(cls, node: Node) -> "Command":
        return cls.from_value(get_node_value(node))

    @property
    def command_id(self) -> str:
        """Render ``hdr[.rax].cmd`` for use in messages."""
        if isinstance(self.cmd, Mapping):
            cmd = "".join(f"{service}{pid}" for service, pid in self.cmd.items())
        else:
            cmd = "" if self.cmd is None else str(self.cmd)
        parts = [self.hdr or "?"]
        if self.rax:
            parts.append(self.rax)
        parts.append(cmd or "?")
        return ".".join(parts)


def signal_pairs(command_node: Node) -> list[tuple[Signal, Node]]:
    """Return ``(Signal, Node)`` pairs for the ``signals`` array of a command node."""
    prop = command_node.get_property("signals")
    signals_node = prop.value_node if prop is not None else None
    if signals_node is None or signals_node.type is not NodeType.ARRAY:
        return []
    return [(Signal.from_node(child), child) for child in signals_node.children]
