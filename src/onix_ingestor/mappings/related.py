"""RelatedMaterial: related works and their identifiers."""

from __future__ import annotations

from ..projection import Coded, CompositeSpec, Inline, Repeated
from .common import typed_identifier

RELATED_WORK = CompositeSpec(
    "RelatedWork",
    (
        Coded("WorkRelationCode", "work_relation"),
        Repeated(
            "WorkIdentifier",
            typed_identifier("WorkIdentifier", "WorkIDType", "work_identifier_type"),
            key="WorkIdentifiers",
        ),
    ),
)

RELATED_MATERIAL = CompositeSpec(
    "RelatedMaterial",
    (
        Inline(
            "RelatedMaterial",
            CompositeSpec(
                "RelatedMaterial",
                (Repeated("RelatedWork", RELATED_WORK, key="RelatedWorks"),),
            ),
            required=True,
        ),
    ),
)
