"""Declarative ONIX product section mappings."""

from . import (collateral, common, descriptive, header, publishing, registry,
               related)

__all__ = [
    "collateral",
    "common",
    "descriptive",
    "header",
    "publishing",
    "registry",
    "related",
]
