"""Ordered registry of the product sections that make up one document."""

from __future__ import annotations

from typing import Tuple

from ..projection import CompositeSpec
from .collateral import COLLATERAL_DETAIL
from .descriptive import DESCRIPTIVE_DETAIL
from .header import PRODUCT_IDENTIFIERS, RECORD_REFERENCE, RECORD_SOURCE
from .publishing import PUBLISHING_DETAIL
from .related import RELATED_MATERIAL

PRODUCT_SECTIONS: Tuple[CompositeSpec, ...] = (
    RECORD_SOURCE,
    RECORD_REFERENCE,
    PRODUCT_IDENTIFIERS,
    DESCRIPTIVE_DETAIL,
    COLLATERAL_DETAIL,
    PUBLISHING_DETAIL,
    RELATED_MATERIAL,
)
