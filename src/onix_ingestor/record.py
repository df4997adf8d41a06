"""Read-only view over parsed ONIX product elements."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from importlib import resources
from typing import Mapping, Optional, Union

import yaml
from lxml import etree

SUPPORTED_RELEASE_PREFIX = "3."
DEFAULT_SHORT_TAG_RESOURCE = "short_tags.yaml"

TagNames = Mapping[str, str]


class Presence(Enum):
    ABSENT = "absent"
    EMPTY = "empty"
    VALUE = "value"


@dataclass(frozen=True, slots=True)
class FieldValue:
    """Tri-state value of an optional element or attribute."""

    presence: Presence
    raw: Optional[str] = None

    @classmethod
    def absent(cls) -> "FieldValue":
        return cls(Presence.ABSENT)

    @classmethod
    def of(cls, raw: Optional[str]) -> "FieldValue":
        if raw is None or raw == "":
            return cls(Presence.EMPTY, raw)
        return cls(Presence.VALUE, raw)

    @property
    def exists(self) -> bool:
        return self.presence is not Presence.ABSENT

    @property
    def has_value(self) -> bool:
        return self.presence is Presence.VALUE


def local_name(tag: object) -> Optional[str]:
    """Return the namespace-free name of an element tag, or None for comments/PIs."""
    if not isinstance(tag, str):
        return None
    return etree.QName(tag).localname


@lru_cache(maxsize=1)
def default_short_tags() -> TagNames:
    """Short tag to reference name table used for short-tag ONIX 3 messages."""
    with (
        resources.files("onix_ingestor")
        .joinpath(DEFAULT_SHORT_TAG_RESOURCE)
        .open("r", encoding="utf-8") as fh
    ):
        payload = yaml.safe_load(fh) or {}
    return {str(short): str(reference) for short, reference in payload.get("tags", {}).items()}


def is_supported_release(release: Optional[str]) -> bool:
    return bool(release) and release.strip().startswith(SUPPORTED_RELEASE_PREFIX)


def _markup(child: etree._Element, namespace: Optional[str]) -> str:
    if namespace is None:
        return etree.tostring(child, encoding="unicode", with_tail=True)
    # Embedded XHTML inherits the message namespace; drop it from the copy.
    clone = copy.deepcopy(child)
    for element in clone.iter():
        if isinstance(element.tag, str) and etree.QName(element).namespace == namespace:
            element.tag = etree.QName(element).localname
    etree.cleanup_namespaces(clone)
    return etree.tostring(clone, encoding="unicode", with_tail=True)


def _inner_text(element: etree._Element) -> Optional[str]:
    if len(element) == 0:
        text = element.text
    else:
        # Mixed content (e.g. XHTML text blocks) keeps its markup.
        namespace = etree.QName(element).namespace
        parts = [element.text or ""]
        for child in element:
            parts.append(_markup(child, namespace))
        text = "".join(parts)
    if text is None:
        return None
    return text.strip()


class OnixNode:
    """Wraps one ONIX element and exposes its children by reference tag name.

    The wrapper never mutates the underlying element. ``release`` carries the
    ``release`` marker of the message the element was read from. ``names``
    translates short tags to reference names for short-tag messages.
    """

    __slots__ = ("_element", "_release", "_names")

    def __init__(
        self,
        element: etree._Element,
        release: Optional[str] = None,
        names: Optional[TagNames] = None,
    ) -> None:
        self._element = element
        self._release = release
        self._names = names

    @classmethod
    def from_xml(
        cls,
        payload: Union[bytes, str],
        release: Optional[str] = "3.0",
        names: Optional[TagNames] = None,
    ) -> "OnixNode":
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        parser = etree.XMLParser(
            resolve_entities=False, no_network=True, load_dtd=False, remove_comments=True
        )
        return cls(etree.fromstring(payload, parser=parser), release, names)

    @classmethod
    def empty(cls, tag: str, release: Optional[str] = None) -> "OnixNode":
        return cls(etree.Element(tag), release)

    def _name(self, element: etree._Element) -> Optional[str]:
        name = local_name(element.tag)
        if self._names and name is not None:
            return self._names.get(name, name)
        return name

    def _wrap(self, element: etree._Element) -> "OnixNode":
        return OnixNode(element, self._release, self._names)

    @property
    def tag(self) -> str:
        return self._name(self._element) or ""

    @property
    def release(self) -> Optional[str]:
        return self._release

    @property
    def text(self) -> Optional[str]:
        return _inner_text(self._element)

    def _iter_elements(self, tag: str):
        for child in self._element:
            if self._name(child) == tag:
                yield child

    def children(self, tag: str) -> list["OnixNode"]:
        return [self._wrap(child) for child in self._iter_elements(tag)]

    def child(self, tag: str) -> Optional["OnixNode"]:
        for child in self._iter_elements(tag):
            return self._wrap(child)
        return None

    def has(self, tag: str) -> bool:
        return next(self._iter_elements(tag), None) is not None

    def field(self, tag: str) -> FieldValue:
        node = self.child(tag)
        if node is None:
            return FieldValue.absent()
        return FieldValue.of(node.text)

    def attribute(self, name: str) -> FieldValue:
        value = self._element.get(name)
        if value is None:
            return FieldValue.absent()
        return FieldValue.of(value.strip())

    def __repr__(self) -> str:
        return f"OnixNode(<{self.tag}>, release={self._release!r})"
