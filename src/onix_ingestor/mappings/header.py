"""Record source metadata, record reference and product identifiers."""

from __future__ import annotations

from ..projection import (Attr, Coded, CompositeSpec, IdentifierSlots, Inline,
                          Scalar)

RECORD_SOURCE = CompositeSpec(
    "RecordSource",
    (
        Scalar("RecordSourceName"),
        Coded("RecordSourceType", "record_source_type"),
    ),
)

RECORD_REFERENCE = CompositeSpec(
    "RecordReference",
    (
        Inline(
            "RecordReference",
            CompositeSpec(
                "RecordReference",
                (
                    Attr("sourcename", "RecordRef_src"),
                    Attr("datestamp", "RecordRef_ts"),
                    Attr("sourcetype", "RecordRef_src_type", scheme="record_source_type"),
                ),
                value_key="RecordRef",
            ),
        ),
    ),
)

PRODUCT_IDENTIFIERS = CompositeSpec(
    "ProductIdentifiers",
    (IdentifierSlots("ProductIdentifier", table="product"),),
)
