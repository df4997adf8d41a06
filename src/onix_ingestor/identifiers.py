"""Spreads typed identifier composites into one named output slot per type."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from importlib import resources
from typing import Any, Dict, Iterable, Mapping, Optional, Union

import yaml

from .record import OnixNode

LOGGER = logging.getLogger("onix.ingestor.identifiers")
DEFAULT_SLOT_RESOURCE = "identifier_slots.yaml"


class DuplicatePolicy(str, Enum):
    """What to do when one identifier type occurs more than once."""

    FIRST = "first"
    LAST = "last"
    ALL = "all"


@dataclass(frozen=True)
class IdentifierEntry:
    type_code: str
    value: Optional[str]
    type_name: Optional[str] = None


@dataclass(frozen=True)
class SlotTable:
    """Maps identifier type codes to output keys, in output order."""

    name: str
    type_tag: str
    slots: Mapping[str, str]

    def slot_for(self, type_code: str) -> Optional[str]:
        return self.slots.get(type_code.strip())

    @property
    def slot_names(self) -> tuple[str, ...]:
        return tuple(self.slots.values())


def load_slot_tables(resource: str = DEFAULT_SLOT_RESOURCE) -> Dict[str, SlotTable]:
    with (
        resources.files("onix_ingestor")
        .joinpath(resource)
        .open("r", encoding="utf-8") as fh
    ):
        payload = yaml.safe_load(fh)

    tables: Dict[str, SlotTable] = {}
    for name, raw in (payload.get("tables") or {}).items():
        slots = {str(code): str(slot) for code, slot in (raw.get("slots") or {}).items()}
        tables[name] = SlotTable(name=name, type_tag=raw["type_tag"], slots=slots)
    return tables


@lru_cache(maxsize=1)
def default_slot_tables() -> Dict[str, SlotTable]:
    return load_slot_tables()


def collect_entries(nodes: Iterable[OnixNode], type_tag: str) -> list[IdentifierEntry]:
    """Build entries from identifier composites, skipping those without a type."""
    entries: list[IdentifierEntry] = []
    for node in nodes:
        type_code = node.field(type_tag)
        if not type_code.has_value:
            continue
        value = node.field("IDValue")
        type_name = node.field("IDTypeName")
        entries.append(
            IdentifierEntry(
                type_code=type_code.raw,
                value=value.raw if value.has_value else None,
                type_name=type_name.raw if type_name.has_value else None,
            )
        )
    return entries


class IdentifierDemultiplexer:
    def __init__(
        self,
        tables: Optional[Mapping[str, SlotTable]] = None,
        policy: DuplicatePolicy = DuplicatePolicy.FIRST,
        emit_missing: bool = False,
    ) -> None:
        self._tables = dict(tables) if tables is not None else default_slot_tables()
        self.policy = DuplicatePolicy(policy)
        self.emit_missing = emit_missing

    def table(self, name: str) -> SlotTable:
        try:
            return self._tables[name]
        except KeyError:
            raise KeyError(f"Unknown identifier slot table: {name}") from None

    def demultiplex(
        self, entries: Iterable[IdentifierEntry], table: Union[str, SlotTable]
    ) -> Dict[str, Any]:
        slot_table = self.table(table) if isinstance(table, str) else table
        found: Dict[str, Any] = {}

        for entry in entries:
            slot = slot_table.slot_for(entry.type_code)
            if slot is None:
                LOGGER.debug(
                    "Ignoring unrecognised %s %r", slot_table.type_tag, entry.type_code
                )
                continue
            if self.policy is DuplicatePolicy.ALL:
                found.setdefault(slot, []).append(entry.value)
                continue
            if slot in found:
                if self.policy is DuplicatePolicy.FIRST:
                    LOGGER.debug("Dropping duplicate %s value %r", slot, entry.value)
                    continue
                LOGGER.debug("Replacing %s value %r with %r", slot, found[slot], entry.value)
            found[slot] = entry.value

        result: Dict[str, Any] = {}
        for slot in slot_table.slot_names:
            if slot in found:
                result[slot] = found[slot]
            elif self.emit_missing:
                result[slot] = None
        return result
