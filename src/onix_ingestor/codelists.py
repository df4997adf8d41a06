"""ONIX codelist lookups backed by the bundled reference tables."""

from __future__ import annotations

import logging
from functools import lru_cache
from importlib import resources
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, field_validator

LOGGER = logging.getLogger("onix.ingestor.codelists")
DEFAULT_CODELIST_RESOURCE = "codelists.yaml"


class CodelistEntry(BaseModel):
    description: str
    symbol: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class Codelist(BaseModel):
    onix_list: Optional[int] = None
    codes: Dict[str, CodelistEntry]

    model_config = ConfigDict(frozen=True)

    @field_validator("codes", mode="before")
    @classmethod
    def _normalise_codes(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        # YAML turns unquoted codes such as 10 or NO into ints/bools.
        normalised: Dict[str, Any] = {}
        for code, entry in value.items():
            if isinstance(entry, str):
                entry = {"description": entry}
            normalised[str(code)] = entry
        return normalised


class CodelistBundle(BaseModel):
    issue: Optional[int] = None
    schemes: Dict[str, Codelist]


class CodelistResolver:
    """Resolves ONIX codes to their descriptions (and symbolic names)."""

    def __init__(self, schemes: Dict[str, Codelist], issue: Optional[int] = None) -> None:
        self._schemes = dict(schemes)
        self.issue = issue

    @classmethod
    def from_mapping(cls, payload: Dict[str, Any]) -> "CodelistResolver":
        bundle = CodelistBundle.model_validate(payload)
        return cls(bundle.schemes, bundle.issue)

    @classmethod
    def from_resource(cls, name: str = DEFAULT_CODELIST_RESOURCE) -> "CodelistResolver":
        with (
            resources.files("onix_ingestor")
            .joinpath(name)
            .open("r", encoding="utf-8") as fh
        ):
            payload = yaml.safe_load(fh)
        resolver = cls.from_mapping(payload)
        LOGGER.debug(
            "Loaded %s codelists (issue %s) from %s",
            len(resolver._schemes),
            resolver.issue,
            name,
        )
        return resolver

    @property
    def schemes(self) -> tuple[str, ...]:
        return tuple(self._schemes)

    def _entry(self, scheme: str, code: Optional[str]) -> Optional[CodelistEntry]:
        if code is None:
            return None
        codelist = self._schemes.get(scheme)
        if codelist is None:
            return None
        return codelist.codes.get(code.strip())

    def resolve(self, scheme: str, code: Optional[str]) -> Optional[str]:
        entry = self._entry(scheme, code)
        return entry.description if entry else None

    def symbol(self, scheme: str, code: Optional[str]) -> Optional[str]:
        entry = self._entry(scheme, code)
        return entry.symbol if entry else None


@lru_cache(maxsize=1)
def default_resolver() -> CodelistResolver:
    return CodelistResolver.from_resource()
