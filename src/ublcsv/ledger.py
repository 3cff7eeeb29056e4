"""Leitura do livro de registo externo com os números atribuídos.

O livro é uma exportação delimitada (vírgula ou ponto e vírgula) com uma
linha de cabeçalho e pelo menos oito colunas. Apenas três são usadas:

- coluna 2: número no livro,
- coluna 3: identificador da fatura,
- coluna 8: identificador do fornecedor.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Callable, Iterator, Mapping
from pathlib import Path

import pandas as pd

from .errors import LedgerError
from .invoices import composite_key

LOGGER = logging.getLogger("ublcsv.ledger")

SAMPLE_SIZE = 1024
MIN_COLUMNS = 8

_NUMBER_COLUMN = 1
_INVOICE_COLUMN = 2
_SUPPLIER_COLUMN = 7


def detect_delimiter(sample: str) -> str:
    """Devolver ``";"`` se superar as vírgulas nas primeiras linhas de ``sample``."""

    commas = semicolons = 0
    for line in sample.split("\n", 2):
        if not line:
            continue
        commas += line.count(",")
        semicolons += line.count(";")
    if semicolons > commas:
        return ";"
    return ","


class Ledger(Mapping[str, str]):
    """Consulta só de leitura ``fatura-fornecedor`` → número no livro."""

    def __init__(self, entries: Mapping[str, str] | None = None) -> None:
        self._entries = dict(entries or {})

    def __getitem__(self, key: str) -> str:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, invoice_id: str, supplier_id: str) -> str | None:
        return self._entries.get(composite_key(invoice_id, supplier_id))

    def __repr__(self) -> str:
        return f"Ledger({len(self._entries)} entries)"


def _read_sample(path: Path, encoding: str) -> str:
    with path.open("rb") as handle:
        data = handle.read(SAMPLE_SIZE)
    return data.decode(encoding, errors="replace")


def _header_width(path: Path, delimiter: str, encoding: str) -> int:
    with path.open("r", encoding=encoding, errors="replace", newline="") as handle:
        for fields in csv.reader(handle, delimiter=delimiter):
            if any(value.strip() for value in fields):
                return len(fields)
    return 0


def _trim_trailing(width: int) -> Callable[[list[str]], list[str]]:
    """Cortar campos vazios além de ``width``; qualquer outro excesso é fatal."""

    def handler(fields: list[str]) -> list[str]:
        extra = fields[width:]
        if any(value.strip() for value in extra):
            raise LedgerError(
                f"Ledger row has {len(fields)} fields, header has {width}: {fields!r}"
            )
        return fields[:width]

    return handler


def load_ledger(path: Path, *, encoding: str = "utf-8") -> Ledger:
    """Interpretar o livro de registo em ``path``.

    Bytes inválidos em ``encoding`` são substituídos; as três colunas usadas
    nas consultas são ASCII na prática. Um delimitador final nas linhas de
    dados é tolerado; qualquer outra diferença entre o número de campos de
    uma linha e o cabeçalho é fatal.

    Lança :class:`~ublcsv.errors.LedgerError` quando o ficheiro não abre, não
    é texto delimitado válido ou tem menos de oito colunas.
    """

    path = Path(path)
    try:
        delimiter = detect_delimiter(_read_sample(path, encoding))
        width = _header_width(path, delimiter, encoding)
    except (OSError, LookupError) as exc:
        raise LedgerError(f"Cannot open ledger file {path}: {exc}") from exc
    LOGGER.info("Ledger %s uses delimiter %r", path, delimiter)

    try:
        frame = pd.read_csv(
            path,
            sep=delimiter,
            header=None,
            dtype=str,
            keep_default_na=False,
            encoding=encoding,
            encoding_errors="replace",
            skip_blank_lines=True,
            engine="python",
            on_bad_lines=_trim_trailing(width),
        )
    except (OSError, pd.errors.ParserError) as exc:
        raise LedgerError(f"Cannot parse ledger file {path}: {exc}") from exc
    except pd.errors.EmptyDataError as exc:
        raise LedgerError(f"Ledger file {path} is empty") from exc

    if frame.shape[1] < MIN_COLUMNS:
        raise LedgerError(
            f"Ledger file {path} has {frame.shape[1]} columns, expected at least {MIN_COLUMNS}"
        )

    # só os campos em falta nas linhas curtas ficam NaN
    short = frame.isna().any(axis=1)
    if short.any():
        row = int(short.to_numpy().nonzero()[0][0]) + 1
        raise LedgerError(f"Ledger file {path}: row {row} has fewer fields than the header")

    entries: dict[str, str] = {}
    for row in frame.iloc[1:].itertuples(index=False, name=None):
        number = str(row[_NUMBER_COLUMN])
        invoice_id = str(row[_INVOICE_COLUMN])
        supplier_id = str(row[_SUPPLIER_COLUMN])
        entries[composite_key(invoice_id, supplier_id)] = number
        LOGGER.debug("ledger: %-7s %-25s %s", number, invoice_id, supplier_id)

    LOGGER.info("Loaded %d ledger entries from %s", len(entries), path)
    return Ledger(entries)


__all__ = ["Ledger", "detect_delimiter", "load_ledger"]
