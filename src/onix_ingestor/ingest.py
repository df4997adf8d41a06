from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional

from rich.console import Console
from rich.status import Status

from .codelists import default_resolver
from .config import Settings
from .identifiers import IdentifierDemultiplexer
from .ledger_writer import write_ledgers
from .mapper import RecordMapper
from .models import Bucket, IngestionSummary
from .projection import Projector
from .reader import MessageReader
from .record import OnixNode
from .router import RecordRouter

LOGGER = logging.getLogger("onix.ingestor")
PROGRESS_EVERY = 250


def build_router(settings: Settings) -> RecordRouter:
    demultiplexer = IdentifierDemultiplexer(
        policy=settings.duplicate_identifiers,
        emit_missing=settings.emit_missing_identifiers,
    )
    mapper = RecordMapper(Projector(default_resolver(), demultiplexer))
    return RecordRouter(mapper, settings.data_source)


def _with_progress(records: Iterable[OnixNode], status: Status) -> Iterator[OnixNode]:
    count = 0
    for record in records:
        yield record
        count += 1
        if count % PROGRESS_EVERY == 0:
            status.update(f"Mapped {count} records...")


def run_ingestion(settings: Settings, console: Optional[Console] = None) -> IngestionSummary:
    """Read, map and route every product, then write the three ledgers.

    A batch-level failure propagates before anything is written.
    """
    settings.validate()
    active_console = console or Console()
    reader = MessageReader(settings)
    router = build_router(settings)

    with active_console.status("Reading ONIX messages...") as status:
        ledgers = router.route(_with_progress(reader.iter_records(), status))

    outputs = write_ledgers(ledgers, settings.output_dir, settings.output_files)
    counts = ledgers.counts()
    summary = IngestionSummary(
        sources=reader.sources_processed,
        records=sum(counts.values()) + ledgers.dropped,
        full=counts[Bucket.FULL],
        update=counts[Bucket.UPDATE],
        delete=counts[Bucket.DELETE],
        dropped=ledgers.dropped,
        outputs={bucket: str(path) for bucket, path in outputs.items()},
    )

    LOGGER.info(
        "Ingestion completed: %s records from %s files (%s full, %s update, %s delete, %s dropped)",
        summary.records,
        summary.sources,
        summary.full,
        summary.update,
        summary.delete,
        summary.dropped,
    )
    if reader.sources_skipped:
        LOGGER.warning("%s invalid files were skipped", reader.sources_skipped)
    return summary
