"""Classifies mapped products by notification type and fills the ledgers."""

from __future__ import annotations

import logging
from typing import FrozenSet, Iterable, Mapping, Optional

from .errors import UnsupportedRecordError
from .mapper import RecordMapper
from .models import Bucket, Ledgers
from .record import OnixNode, is_supported_release

LOGGER = logging.getLogger("onix.ingestor.router")

# ONIX list 1 notification types.
DEFAULT_NOTIFICATION_CODES: Mapping[Bucket, FrozenSet[str]] = {
    Bucket.FULL: frozenset({"01", "02", "03"}),
    Bucket.UPDATE: frozenset({"04"}),
    Bucket.DELETE: frozenset({"05"}),
}


class NotificationClassifier:
    def __init__(self, codes: Optional[Mapping[Bucket, Iterable[str]]] = None) -> None:
        table = codes if codes is not None else DEFAULT_NOTIFICATION_CODES
        self._buckets = {
            code: bucket for bucket, bucket_codes in table.items() for code in bucket_codes
        }

    def classify(self, code: Optional[str]) -> Optional[Bucket]:
        if code is None:
            return None
        return self._buckets.get(code.strip())


class RecordRouter:
    """Maps records in order and appends each document to exactly one ledger.

    Any record that is not an ONIX 3 ``<Product>`` aborts the whole batch:
    the exception propagates and no ledgers are returned.
    """

    def __init__(
        self,
        mapper: RecordMapper,
        data_source: str,
        classifier: Optional[NotificationClassifier] = None,
    ) -> None:
        self.mapper = mapper
        self.data_source = data_source
        self.classifier = classifier or NotificationClassifier()

    def route(self, records: Iterable[OnixNode]) -> Ledgers:
        ledgers = Ledgers()
        for record in records:
            if record.tag != "Product" or not is_supported_release(record.release):
                raise UnsupportedRecordError(record.tag, record.release)

            document = self.mapper.map_product(record, self.data_source)
            code = record.field("NotificationType")
            bucket = self.classifier.classify(code.raw if code.has_value else None)
            if bucket is None:
                ledgers.dropped += 1
                LOGGER.info(
                    "Dropping record %s with notification type %r",
                    document.get("RecordRef"),
                    code.raw,
                )
                continue
            ledgers.append(bucket, document)
        return ledgers
