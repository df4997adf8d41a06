"""Exception hierarchy for the ONIX ingestor."""

from __future__ import annotations

from typing import Optional


class OnixIngestError(Exception):
    """Base exception for ingestor errors."""


class ConfigurationError(OnixIngestError):
    """Raised when required settings are missing or invalid."""


class OnixReadError(OnixIngestError):
    """Raised when a source file cannot be read as an ONIX message."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{message} (source={source})")
        self.source = source


class BatchAbortedError(OnixIngestError):
    """A failure that invalidates the whole batch; no ledgers are written."""


class UnsupportedMessageVersionError(BatchAbortedError):
    """Raised when a message is not ONIX 3."""

    def __init__(self, release: Optional[str], source: Optional[str] = None) -> None:
        where = f" in {source}" if source else ""
        super().__init__(
            f"Unsupported ONIX release {release or 'unknown'!r}{where}; only ONIX 3 is processed"
        )
        self.release = release
        self.source = source


class UnsupportedRecordError(BatchAbortedError):
    """Raised when a record is not an ONIX 3 product."""

    def __init__(self, tag: str, release: Optional[str]) -> None:
        super().__init__(
            f"Unsupported record <{tag}> (release {release or 'unknown'}); expected an ONIX 3 <Product>"
        )
        self.tag = tag
        self.release = release
