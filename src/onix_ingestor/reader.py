"""Streams ONIX products out of the message files in an input directory."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from lxml import etree

from .config import Settings
from .errors import ConfigurationError, OnixReadError, UnsupportedMessageVersionError
from .logging_utils import get_logger
from .models import DEFAULT_FILE_PATTERN
from .record import (OnixNode, TagNames, default_short_tags,
                     is_supported_release, local_name)

logger = get_logger("onix.ingestor.reader")

MESSAGE_TAG = "ONIXMessage"
SHORT_MESSAGE_TAG = "ONIXmessage"
PRODUCT_TAG = "Product"


def discover_sources(
    input_dir: Path, pattern: str = DEFAULT_FILE_PATTERN, recursive: bool = False
) -> List[Path]:
    directory = Path(input_dir)
    if not directory.is_dir():
        raise ConfigurationError(f"Input directory does not exist: {directory}")
    candidates = directory.rglob(pattern) if recursive else directory.glob(pattern)
    return sorted(path for path in candidates if path.is_file())


def _check_root(root: etree._Element, source: Path) -> Tuple[Optional[str], Optional[TagNames]]:
    """Return the release and, for short-tag messages, the tag name table."""
    name = local_name(root.tag)
    if name not in (MESSAGE_TAG, SHORT_MESSAGE_TAG):
        raise OnixReadError(str(source), f"Root element <{name}> is not an ONIX message")

    release = root.get("release")
    if not is_supported_release(release):
        raise UnsupportedMessageVersionError(release, source=str(source))
    if name == SHORT_MESSAGE_TAG:
        return release, default_short_tags()
    return release, None


def iter_products(path: Path) -> Iterator[OnixNode]:
    """Yield each ``<Product>`` of one message as it is parsed.

    Elements are cleared once the consumer moves on, so a yielded node is
    only valid until the next one is requested.
    """
    context = etree.iterparse(
        str(path),
        events=("start", "end"),
        resolve_entities=False,
        no_network=True,
        load_dtd=False,
        remove_comments=True,
    )
    root: Optional[etree._Element] = None
    release: Optional[str] = None
    names: Optional[TagNames] = None
    try:
        for event, element in context:
            if root is None:
                root = element
                release, names = _check_root(root, path)
                logger.info("Processing ONIX %s file: %s", release, path.name)
                continue
            if event != "end" or element.getparent() is not root:
                continue

            node = OnixNode(element, release, names)
            if node.tag == PRODUCT_TAG:
                yield node
            element.clear(keep_tail=True)
            while element.getprevious() is not None:
                del root[0]
    except etree.XMLSyntaxError as exc:
        raise OnixReadError(str(path), f"Malformed XML: {exc}") from exc


class MessageReader:
    """Iterates the products of every source file selected by the settings."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self.sources_processed = 0
        self.sources_skipped = 0

    def sources(self) -> List[Path]:
        return discover_sources(
            self._settings.input_dir,
            self._settings.file_pattern,
            self._settings.recursive,
        )

    def iter_records(self) -> Iterator[OnixNode]:
        sources = self.sources()
        if not sources:
            logger.warning(
                "No files matching %s in %s",
                self._settings.file_pattern,
                self._settings.input_dir,
            )

        for path in sources:
            count = 0
            try:
                for product in iter_products(path):
                    count += 1
                    yield product
            except OnixReadError as exc:
                if self._settings.fail_on_invalid_file:
                    raise
                self.sources_skipped += 1
                logger.error("Skipping invalid ONIX file %s: %s", path.name, exc)
                continue
            self.sources_processed += 1
            logger.info("Processed records: %s", count)
