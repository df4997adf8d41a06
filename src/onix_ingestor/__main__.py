from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv
from rich.console import Console

from .config import Settings
from .errors import BatchAbortedError, ConfigurationError, OnixReadError
from .identifiers import DuplicatePolicy
from .ingest import run_ingestion
from .logging_utils import setup_logging

console = Console()
LOGGER = logging.getLogger("onix.ingestor")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="onix-ingestor",
        description="Map ONIX 3.0 product records into full/update/delete JSON Lines ledgers.",
    )
    parser.add_argument("input_dir", nargs="?", help="Directory containing ONIX XML files")
    parser.add_argument("output_dir", nargs="?", help="Directory the ledgers are written to")
    parser.add_argument("data_source", nargs="?", help="Data source name used to build COKI_ID")
    parser.add_argument("--pattern", dest="file_pattern", help="Glob selecting source files (default *.xml)")
    parser.add_argument(
        "--recursive",
        action="store_true",
        default=None,
        help="Also search sub-directories of the input directory",
    )
    parser.add_argument(
        "--fail-on-invalid-file",
        action="store_true",
        default=None,
        help="Abort instead of skipping files that are not well-formed ONIX",
    )
    parser.add_argument(
        "--duplicate-identifiers",
        choices=[policy.value for policy in DuplicatePolicy],
        help="Which value to keep when an identifier type repeats (default first)",
    )
    parser.add_argument(
        "--emit-missing-identifiers",
        action="store_true",
        default=None,
        help="Emit null for identifier slots with no matching identifier",
    )
    parser.add_argument("--log-level", help="Logging level (default INFO)")
    return parser


def load_config(argv: Optional[Sequence[str]] = None) -> Settings:
    """Load settings from the environment (populated from .env by ``main``) and apply command line overrides."""
    args = build_parser().parse_args(argv)
    settings = Settings.from_env(dotenv=False).with_overrides(
        input_dir=args.input_dir,
        output_dir=args.output_dir,
        data_source=args.data_source,
        file_pattern=args.file_pattern,
        recursive=args.recursive,
        fail_on_invalid_file=args.fail_on_invalid_file,
        duplicate_identifiers=args.duplicate_identifiers,
        emit_missing_identifiers=args.emit_missing_identifiers,
        log_level=args.log_level.upper() if args.log_level else None,
    )
    return settings.validate()


def main(argv: Optional[Sequence[str]] = None) -> None:
    load_dotenv()
    setup_logging(os.getenv("LOG_LEVEL", "INFO").upper(), console=console)
    try:
        settings = load_config(argv)
    except ConfigurationError as exc:
        LOGGER.error("Configuration error: %s", exc)
        print(f"Configuration error: {exc}", file=sys.stderr)
        sys.exit(1)

    logging.getLogger().setLevel(getattr(logging, settings.log_level, logging.INFO))

    try:
        run_ingestion(settings, console=console)
    except ConfigurationError as exc:
        LOGGER.error("Configuration error: %s", exc)
        print(f"Configuration error: {exc}", file=sys.stderr)
        sys.exit(1)
    except (BatchAbortedError, OnixReadError) as exc:
        LOGGER.exception("Batch aborted; no ledgers were written")
        print(f"Batch aborted: {exc}", file=sys.stderr)
        sys.exit(2)
    except Exception as exc:  # pragma: no cover - guard for CLI usage
        LOGGER.exception("Ingestion failed")
        print(f"Ingestion failed: {exc}", file=sys.stderr)
        sys.exit(3)


if __name__ == "__main__":
    main()
