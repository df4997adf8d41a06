from __future__ import annotations

import logging

import pytest

from conftest import product_xml
from onix_ingestor.errors import UnsupportedRecordError
from onix_ingestor.mapper import RecordMapper
from onix_ingestor.models import Bucket
from onix_ingestor.record import OnixNode
from onix_ingestor.router import NotificationClassifier, RecordRouter


def _record(reference: str, notification: str, release: str = "3.0") -> OnixNode:
    return OnixNode.from_xml(product_xml("", reference=reference, notification=notification), release)


@pytest.fixture
def router() -> RecordRouter:
    return RecordRouter(RecordMapper(), "src")


@pytest.mark.parametrize(
    ("code", "bucket"),
    [
        ("01", Bucket.FULL),
        ("02", Bucket.FULL),
        ("03", Bucket.FULL),
        ("04", Bucket.UPDATE),
        ("05", Bucket.DELETE),
        (" 05 ", Bucket.DELETE),
        ("88", None),
        (None, None),
    ],
)
def test_default_classification(code, bucket) -> None:
    assert NotificationClassifier().classify(code) is bucket


def test_records_land_in_one_ledger_in_input_order(router: RecordRouter) -> None:
    records = [
        _record("a", "03"),
        _record("b", "05"),
        _record("c", "01"),
        _record("d", "04"),
        _record("e", "02"),
    ]

    ledgers = router.route(records)

    assert [doc["COKI_ID"] for doc in ledgers.full] == ["src_a", "src_c", "src_e"]
    assert [doc["COKI_ID"] for doc in ledgers.update] == ["src_d"]
    assert [doc["COKI_ID"] for doc in ledgers.delete] == ["src_b"]
    assert ledgers.dropped == 0


def test_unknown_notification_types_are_dropped_and_counted(router: RecordRouter, caplog) -> None:
    missing = OnixNode.from_xml("<Product><RecordReference>m</RecordReference></Product>")

    with caplog.at_level(logging.INFO, logger="onix.ingestor.router"):
        ledgers = router.route([_record("x", "88"), missing, _record("y", "03")])

    assert ledgers.dropped == 2
    assert ledgers.counts() == {Bucket.FULL: 1, Bucket.UPDATE: 0, Bucket.DELETE: 0}
    assert "Dropping record x with notification type '88'" in caplog.text


def test_non_product_record_aborts_the_batch(router: RecordRouter) -> None:
    header = OnixNode.from_xml("<Header><SenderName>S</SenderName></Header>")

    with pytest.raises(UnsupportedRecordError) as excinfo:
        router.route([_record("a", "03"), header])

    assert excinfo.value.tag == "Header"


def test_onix2_record_aborts_the_batch(router: RecordRouter) -> None:
    with pytest.raises(UnsupportedRecordError) as excinfo:
        router.route([_record("a", "03", release="2.1")])

    assert excinfo.value.release == "2.1"


def test_custom_classification_table() -> None:
    classifier = NotificationClassifier({Bucket.FULL: ["03"], Bucket.DELETE: ["05", "88"]})
    router = RecordRouter(RecordMapper(), "src", classifier=classifier)

    ledgers = router.route([_record("a", "01"), _record("b", "88")])

    assert ledgers.full == []
    assert [doc["RecordRef"] for doc in ledgers.delete] == ["b"]
    assert ledgers.dropped == 1
