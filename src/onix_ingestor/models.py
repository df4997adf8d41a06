from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

DEFAULT_FILE_PATTERN = "*.xml"
DEFAULT_FULL_FILE = "full.jsonl"
DEFAULT_UPDATE_FILE = "update.jsonl"
DEFAULT_DELETE_FILE = "delete.jsonl"

OutputDocument = Dict[str, Any]


class Bucket(str, Enum):
    FULL = "full"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class OutputFiles:
    full: str = DEFAULT_FULL_FILE
    update: str = DEFAULT_UPDATE_FILE
    delete: str = DEFAULT_DELETE_FILE

    def name_for(self, bucket: Bucket) -> str:
        return getattr(self, bucket.value)


@dataclass
class Ledgers:
    """Documents collected during one batch, in input order per bucket."""

    full: List[OutputDocument] = field(default_factory=list)
    update: List[OutputDocument] = field(default_factory=list)
    delete: List[OutputDocument] = field(default_factory=list)
    dropped: int = 0

    def ledger(self, bucket: Bucket) -> List[OutputDocument]:
        return getattr(self, bucket.value)

    def append(self, bucket: Bucket, document: OutputDocument) -> None:
        self.ledger(bucket).append(document)

    def counts(self) -> Dict[Bucket, int]:
        return {bucket: len(self.ledger(bucket)) for bucket in Bucket}


@dataclass(frozen=True)
class IngestionSummary:
    sources: int
    records: int
    full: int
    update: int
    delete: int
    dropped: int
    outputs: Dict[Bucket, str] = field(default_factory=dict)
