"""PublishingDetail: places, imprints, publishers and dates."""

from __future__ import annotations

from ..projection import (Attr, Coded, CompositeSpec, Inline, Repeated, Scalar,
                          TextList)
from .common import WEBSITES, dated, typed_identifier

IMPRINT = CompositeSpec(
    "Imprint",
    (
        Inline(
            "ImprintName",
            CompositeSpec(
                "ImprintName",
                (Attr("language", "ImprintName_lang", scheme="language"),),
                value_key="ImprintName",
            ),
        ),
        Repeated(
            "ImprintIdentifier",
            typed_identifier(
                "ImprintIdentifier", "ImprintIDType", "name_identifier_type", emit="symbol"
            ),
            key="ImprintIdentifiers",
        ),
    ),
)

PUBLISHER = CompositeSpec(
    "Publisher",
    (
        Scalar("PublisherName"),
        Coded("PublishingRole", "publishing_role"),
        WEBSITES,
    ),
)

PUBLISHING_DATE = CompositeSpec(
    "PublishingDate",
    (
        *dated("DateFormat"),
        Coded("PublishingDateRole", "publishing_date_role"),
    ),
)

PUBLISHING_DETAIL = CompositeSpec(
    "PublishingDetail",
    (
        Inline(
            "PublishingDetail",
            CompositeSpec(
                "PublishingDetail",
                (
                    TextList("CityOfPublication", key="CityOfPublications"),
                    Repeated("Imprint", IMPRINT, key="Imprints"),
                    Repeated("Publisher", PUBLISHER, key="Publishers"),
                    Repeated("PublishingDate", PUBLISHING_DATE, key="PublishingDates"),
                ),
            ),
        ),
    ),
)
