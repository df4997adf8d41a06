"""CollateralDetail: descriptive text blocks."""

from __future__ import annotations

from ..projection import Coded, CompositeSpec, Inline, Repeated, TextList

TEXT_CONTENT = CompositeSpec(
    "TextContent",
    (
        TextList("Text"),
        Coded("TextType", "text_type"),
    ),
)

COLLATERAL_DETAIL = CompositeSpec(
    "CollateralDetail",
    (
        Inline(
            "CollateralDetail",
            CompositeSpec(
                "CollateralDetail",
                (Repeated("TextContent", TEXT_CONTENT, key="TextContent"),),
            ),
        ),
    ),
)
