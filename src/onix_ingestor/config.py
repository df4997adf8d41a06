"""Configuration loading for the ONIX ingestor."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Iterable, Optional

from dotenv import load_dotenv

from .errors import ConfigurationError
from .identifiers import DuplicatePolicy
from .models import DEFAULT_FILE_PATTERN, OutputFiles

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _bool(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    return default


def _choice(value: Optional[str], choices: Iterable[str], default: str) -> str:
    if value is None:
        return default
    lowered = value.strip().lower()
    return lowered if lowered in set(choices) else default


def _path(value: Optional[str]) -> Optional[Path]:
    return Path(value).expanduser() if value else None


@dataclass(frozen=True)
class Settings:
    input_dir: Optional[Path]
    output_dir: Optional[Path]
    data_source: Optional[str]
    file_pattern: str = DEFAULT_FILE_PATTERN
    recursive: bool = False
    fail_on_invalid_file: bool = False
    output_files: OutputFiles = field(default_factory=OutputFiles)
    duplicate_identifiers: DuplicatePolicy = DuplicatePolicy.FIRST
    emit_missing_identifiers: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv()

        defaults = OutputFiles()
        return cls(
            input_dir=_path(os.getenv("ONIX_INPUT_DIR")),
            output_dir=_path(os.getenv("ONIX_OUTPUT_DIR")),
            data_source=os.getenv("ONIX_DATA_SOURCE") or None,
            file_pattern=os.getenv("ONIX_FILE_PATTERN") or DEFAULT_FILE_PATTERN,
            recursive=_bool(os.getenv("ONIX_RECURSIVE"), False),
            fail_on_invalid_file=_bool(os.getenv("ONIX_FAIL_ON_INVALID_FILE"), False),
            output_files=OutputFiles(
                full=os.getenv("ONIX_FULL_FILE") or defaults.full,
                update=os.getenv("ONIX_UPDATE_FILE") or defaults.update,
                delete=os.getenv("ONIX_DELETE_FILE") or defaults.delete,
            ),
            duplicate_identifiers=DuplicatePolicy(
                _choice(
                    os.getenv("ONIX_DUPLICATE_IDENTIFIERS"),
                    (policy.value for policy in DuplicatePolicy),
                    DuplicatePolicy.FIRST.value,
                )
            ),
            emit_missing_identifiers=_bool(os.getenv("ONIX_EMIT_MISSING_IDENTIFIERS"), False),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def with_overrides(self, **overrides: Any) -> "Settings":
        """Return a copy with every non-None override applied."""
        values = {key: value for key, value in overrides.items() if value is not None}
        for key in ("input_dir", "output_dir"):
            if key in values:
                values[key] = Path(values[key]).expanduser()
        if "duplicate_identifiers" in values:
            values["duplicate_identifiers"] = DuplicatePolicy(values["duplicate_identifiers"])
        return replace(self, **values)

    def validate(self) -> "Settings":
        missing = [
            name
            for name, value in (
                ("input directory (ONIX_INPUT_DIR)", self.input_dir),
                ("output directory (ONIX_OUTPUT_DIR)", self.output_dir),
                ("data source name (ONIX_DATA_SOURCE)", self.data_source),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError("Missing required settings: " + ", ".join(missing))
        if not self.input_dir.is_dir():
            raise ConfigurationError(f"Input directory does not exist: {self.input_dir}")
        return self
