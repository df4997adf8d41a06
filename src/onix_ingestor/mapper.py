"""Orchestrates mapping ONIX products into output documents."""

from __future__ import annotations

import logging
from typing import Optional

from .errors import UnsupportedMessageVersionError
from .mappings.registry import PRODUCT_SECTIONS
from .models import OutputDocument
from .projection import Projector
from .record import OnixNode, is_supported_release

LOGGER = logging.getLogger("onix.ingestor.mapper")


class RecordMapper:
    def __init__(self, projector: Optional[Projector] = None) -> None:
        self.projector = projector or Projector()

    def map_product(self, product: OnixNode, data_source: str) -> OutputDocument:
        """Build one document from a ``<Product>`` and tag it with ``COKI_ID``."""
        if not is_supported_release(product.release):
            raise UnsupportedMessageVersionError(product.release)

        document: OutputDocument = {}
        for section in PRODUCT_SECTIONS:
            document.update(self.projector.project(product, section))

        record_ref = product.field("RecordReference")
        if record_ref.has_value:
            document["COKI_ID"] = f"{data_source}_{record_ref.raw}"
        else:
            LOGGER.warning("Product without RecordReference; COKI_ID omitted")
        return document
