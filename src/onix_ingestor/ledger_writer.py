"""Serialises ledgers to JSON Lines files."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Iterable, Optional

from .logging_utils import get_logger
from .models import Bucket, Ledgers, OutputDocument, OutputFiles

logger = get_logger("onix.ingestor.writer")


def dump_line(document: OutputDocument) -> str:
    return json.dumps(document, ensure_ascii=False, separators=(",", ":"))


def _write_temp(output_dir: Path, target: str, documents: Iterable[OutputDocument]) -> Path:
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target}.", suffix=".tmp", dir=output_dir)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
            for document in documents:
                fh.write(dump_line(document))
                fh.write("\n")
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    return tmp_path


def write_ledgers(
    ledgers: Ledgers, output_dir: Path, files: Optional[OutputFiles] = None
) -> Dict[Bucket, Path]:
    """Write all three ledgers, replacing the targets only once every stream is complete."""
    files = files or OutputFiles()
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    staged: Dict[Bucket, Path] = {}
    try:
        for bucket in Bucket:
            staged[bucket] = _write_temp(output_dir, files.name_for(bucket), ledgers.ledger(bucket))
    except BaseException:
        for tmp in staged.values():
            tmp.unlink(missing_ok=True)
        raise

    written: Dict[Bucket, Path] = {}
    for bucket, tmp in staged.items():
        target = output_dir / files.name_for(bucket)
        os.replace(tmp, target)
        written[bucket] = target
        logger.info("Wrote %s %s records to %s", len(ledgers.ledger(bucket)), bucket.value, target)
    return written
