"""Listar as entradas lidas de um livro de registo.

Útil para confirmar o delimitador e o mapeamento de colunas antes de exportar.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from ..errors import LedgerError
from ..ledger import load_ledger
from .export import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ublcsv ledger",
        description="List the invoice-supplier keys and ledger numbers of a ledger file.",
    )
    parser.add_argument("ledger", type=Path, help="Path to the ledger file")
    parser.add_argument(
        "--encoding",
        default="utf-8",
        help="Text encoding of the ledger file (default: %(default)s).",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging("WARNING")

    try:
        ledger = load_ledger(args.ledger, encoding=args.encoding)
    except LedgerError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2

    for key, number in ledger.items():
        print(f"{number:<7} {key}")
    print(f"{len(ledger)} entries")
    return 0


if __name__ == "__main__":  # pragma: no cover - direct execution
    raise SystemExit(main())
