"""Exportar faturas UBL para tabelas de faturas, entidades e linhas.

Utilização::

    ublcsv export --input Primljeni/ --input Poslani/ \\
        --ura Obrazac_URA-2.csv --output output --counterparty 37617049457
"""

from __future__ import annotations

import argparse
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Sequence

from ..config import (
    COUNTERPARTY_ENV_VARIABLE,
    DEFAULT_LEDGER_FILE,
    DEFAULT_OUTPUT_DIR,
    ExportConfig,
    resolve_counterparty,
)
from ..errors import UblCsvError
from ..pipeline import run_export
from ..writer import DEFAULT_ENCODING, WriteMode

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO", log_file: Path | None = None) -> logging.Logger:
    """Ligar ao logger ``ublcsv`` a consola (e opcionalmente um ficheiro rotativo)."""

    logger = logging.getLogger("ublcsv")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT)
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=1_000_000,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.setLevel(level.upper())
    logger.propagate = False
    logging.captureWarnings(True)
    return logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ublcsv export",
        description=(
            "Convert UBL invoice XML files into semicolon separated tables "
            "for invoices, parties and invoice lines."
        ),
    )
    parser.add_argument(
        "--input",
        dest="inputs",
        action="append",
        type=Path,
        required=True,
        help="Folder scanned recursively for *.xml invoices (repeatable).",
    )
    parser.add_argument(
        "--ura",
        "--ledger",
        dest="ledger",
        type=Path,
        default=DEFAULT_LEDGER_FILE,
        help="Ledger file with issued reference numbers (default: %(default)s).",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT_DIR,
        help="Folder for the output tables (default: %(default)s).",
    )
    parser.add_argument(
        "--counterparty",
        default=None,
        help=(
            "Customer identifier whose invoices require a ledger number "
            f"(default: ${COUNTERPARTY_ENV_VARIABLE})."
        ),
    )
    parser.add_argument(
        "--append",
        action="store_true",
        help="Append to existing tables instead of replacing them.",
    )
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Skip unreadable documents instead of aborting the run.",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of threads used to parse documents (default: %(default)s).",
    )
    parser.add_argument(
        "--encoding",
        default=DEFAULT_ENCODING,
        help="Code page of the output tables (default: %(default)s).",
    )
    parser.add_argument(
        "--ledger-encoding",
        default="utf-8",
        help="Text encoding of the ledger file (default: %(default)s).",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Optional Excel workbook listing skipped invoices and warnings.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging verbosity (default: %(default)s).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write the log to this rotating file.",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> ExportConfig:
    return ExportConfig(
        inputs=tuple(args.inputs),
        ledger_path=args.ledger,
        output_dir=args.output,
        counterparty_id=resolve_counterparty(args.counterparty),
        write_mode=WriteMode.APPEND if args.append else WriteMode.REPLACE,
        fail_fast=not args.keep_going,
        workers=args.workers,
        output_encoding=args.encoding,
        ledger_encoding=args.ledger_encoding,
        report_path=args.report,
    )


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.log_file)

    try:
        result = run_export(config_from_args(args))
    except UblCsvError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2

    for path in result.outputs:
        print(f"[OK] {path}")
    if result.report_path is not None:
        print(f"[OK] {result.report_path}")
    return 0


if __name__ == "__main__":  # pragma: no cover - direct execution
    raise SystemExit(main())
