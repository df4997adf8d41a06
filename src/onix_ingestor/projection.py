"""Declarative projection of ONIX composites into JSON-compatible documents."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from .codelists import CodelistResolver, default_resolver
from .identifiers import IdentifierDemultiplexer, collect_entries
from .record import FieldValue, OnixNode

LOGGER = logging.getLogger("onix.ingestor.projection")

ScalarKind = str  # "text" | "integer" | "number" | "flag"
Emit = str  # "description" | "code" | "symbol"


@dataclass(frozen=True)
class Scalar:
    """Plain child element emitted with its (converted) raw value."""

    tag: str
    key: Optional[str] = None
    kind: ScalarKind = "text"


@dataclass(frozen=True)
class Coded:
    """Child element holding a codelist code."""

    tag: str
    scheme: Optional[str] = None
    key: Optional[str] = None
    emit: Emit = "description"


@dataclass(frozen=True)
class Attr:
    """XML attribute of the current element, optionally codelist-backed."""

    attribute: str
    key: str
    scheme: Optional[str] = None
    emit: Emit = "description"


@dataclass(frozen=True)
class TextList:
    """Repeated bare text elements collapsed to a list of strings."""

    tag: str
    key: Optional[str] = None
    scheme: Optional[str] = None


@dataclass(frozen=True)
class Nested:
    tag: str
    spec: "CompositeSpec"
    key: Optional[str] = None


@dataclass(frozen=True)
class Inline:
    """Singular composite whose members are merged into the parent object."""

    tag: str
    spec: "CompositeSpec"
    required: bool = False


@dataclass(frozen=True)
class Repeated:
    tag: str
    spec: "CompositeSpec"
    key: Optional[str] = None
    suppressed_by: Optional[str] = None


@dataclass(frozen=True)
class IdentifierSlots:
    """Typed identifier composites spread into named slots on the parent."""

    tag: str
    table: str


Member = Union[Scalar, Coded, Attr, TextList, Nested, Inline, Repeated, IdentifierSlots]


@dataclass(frozen=True)
class CompositeSpec:
    name: str
    members: Tuple[Member, ...] = ()
    value_key: Optional[str] = None


def convert_scalar(kind: ScalarKind, value: Optional[str]) -> Any:
    """Convert raw element text into the Python type used in the document."""
    if value is None:
        return None

    if kind == "integer":
        try:
            return int(value)
        except (TypeError, ValueError):
            LOGGER.debug("Failed to parse integer value %r", value)
            return None

    if kind == "number":
        try:
            number = float(value)
        except (TypeError, ValueError):
            LOGGER.debug("Failed to parse numeric value %r", value)
            return None
        return int(number) if number.is_integer() else number

    return value


class Projector:
    """Applies composite specs to ONIX nodes.

    Presence rules are the same for every section: absent singular
    composites and absent scalars contribute no key, repeated composites
    always yield a list, and codes are only described when the codelist
    knows them.
    """

    def __init__(
        self,
        resolver: Optional[CodelistResolver] = None,
        demultiplexer: Optional[IdentifierDemultiplexer] = None,
    ) -> None:
        self.resolver = resolver or default_resolver()
        self.demultiplexer = demultiplexer or IdentifierDemultiplexer()

    def project(self, node: OnixNode, spec: CompositeSpec) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if spec.value_key:
            out[spec.value_key] = node.text
        for member in spec.members:
            self._apply(member, node, out)
        return out

    def _coded(self, scheme: Optional[str], emit: Emit, value: FieldValue) -> Tuple[bool, Any]:
        code = value.raw if value.has_value else None
        if emit == "code" or scheme is None:
            return True, code
        if emit == "symbol":
            resolved = self.resolver.symbol(scheme, code)
        else:
            resolved = self.resolver.resolve(scheme, code)
        return resolved is not None, resolved

    def _apply(self, member: Member, node: OnixNode, out: Dict[str, Any]) -> None:
        if isinstance(member, Scalar):
            key = member.key or member.tag
            value = node.field(member.tag)
            if member.kind == "flag":
                out[key] = value.exists
            elif value.exists:
                out[key] = convert_scalar(member.kind, value.raw)
            return

        if isinstance(member, Coded):
            value = node.field(member.tag)
            if not value.exists:
                return
            emit, resolved = self._coded(member.scheme, member.emit, value)
            if emit:
                out[member.key or member.tag] = resolved
            return

        if isinstance(member, Attr):
            value = node.attribute(member.attribute)
            if not value.exists:
                return
            emit, resolved = self._coded(member.scheme, member.emit, value)
            if emit:
                out[member.key] = resolved
            return

        if isinstance(member, TextList):
            values = []
            for child in node.children(member.tag):
                text = child.text
                if not text:
                    # Empty repetitions keep their position.
                    values.append(None)
                    continue
                if member.scheme is not None:
                    text = self.resolver.resolve(member.scheme, text)
                if text is not None:
                    values.append(text)
            out[member.key or member.tag] = values
            return

        if isinstance(member, Nested):
            child = node.child(member.tag)
            if child is not None:
                out[member.key or member.tag] = self.project(child, member.spec)
            return

        if isinstance(member, Inline):
            child = node.child(member.tag)
            if child is None:
                if not member.required:
                    return
                child = OnixNode.empty(member.tag, node.release)
            out.update(self.project(child, member.spec))
            return

        if isinstance(member, Repeated):
            if member.suppressed_by and node.has(member.suppressed_by):
                return
            out[member.key or member.tag] = [
                self.project(child, member.spec) for child in node.children(member.tag)
            ]
            return

        if isinstance(member, IdentifierSlots):
            table = self.demultiplexer.table(member.table)
            entries = collect_entries(node.children(member.tag), table.type_tag)
            out.update(self.demultiplexer.demultiplex(entries, table))
            return

        raise TypeError(f"Unsupported projection member: {member!r}")
