"""Exportação completa: livro, documentos, deduplicação, projeção e saída."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator

from .config import ExportConfig
from .discovery import iter_xml_files
from .engine import InvoiceCollector
from .errors import DocumentError, OutputError
from .invoices import Invoice
from .issues import DOCUMENT_ERROR, ProcessingIssue
from .ledger import load_ledger
from .logging import ExcelLogger, ExcelLoggerConfig
from .parser import parse_invoice_file
from .projector import Table, project_tables
from .writer import TableWriter

LOGGER = logging.getLogger("ublcsv.pipeline")

ParseResult = tuple[Path, Invoice | DocumentError]


@dataclass
class ExportResult:
    """Resumo de uma exportação concluída."""

    documents: int = 0
    invoices: list[Invoice] = field(default_factory=list)
    tables: list[Table] = field(default_factory=list)
    outputs: list[Path] = field(default_factory=list)
    issues: list[ProcessingIssue] = field(default_factory=list)
    counts: dict[str, int] = field(default_factory=dict)
    report_path: Path | None = None


def _parse_one(path: Path) -> ParseResult:
    try:
        return path, parse_invoice_file(path)
    except DocumentError as exc:
        return path, exc


def parse_documents(paths: Iterable[Path], *, workers: int = 1) -> Iterator[ParseResult]:
    """Interpretar ``paths`` e produzir os resultados pela ordem de entrada.

    Com mais de um *worker* os documentos são lidos num *pool* de threads;
    os resultados continuam a sair pela ordem de entrada.
    """

    if workers <= 1:
        for path in paths:
            yield _parse_one(path)
        return

    with ThreadPoolExecutor(max_workers=workers) as executor:
        yield from executor.map(_parse_one, list(paths))


def collect_invoices(
    results: Iterable[ParseResult],
    collector: InvoiceCollector,
    *,
    fail_fast: bool = True,
) -> int:
    """Entregar os documentos ao ``collector`` e devolver quantos foram vistos."""

    documents = 0
    for path, parsed in results:
        documents += 1
        if isinstance(parsed, DocumentError):
            if fail_fast:
                raise parsed
            LOGGER.error("%-20s %s", path, parsed)
            collector.record_issue(
                ProcessingIssue(
                    str(parsed), code=DOCUMENT_ERROR, details={"source": str(path)}
                )
            )
            continue
        collector.accept(parsed, source=str(path))
    return documents


def run_export(config: ExportConfig) -> ExportResult:
    """Executar uma exportação completa descrita por ``config``.

    Falhas do livro, dos documentos e da saída propagam-se como subclasses de
    :class:`~ublcsv.errors.UblCsvError`. As decisões por fatura ficam em
    :attr:`ExportResult.issues`.
    """

    config.validate()
    ledger = load_ledger(config.ledger_path, encoding=config.ledger_encoding)

    writer = TableWriter(
        config.output_dir, encoding=config.output_encoding, mode=config.write_mode
    )
    writer.prepare()

    collector = InvoiceCollector(ledger, config.counterparty_id)
    paths = iter_xml_files(config.inputs)
    documents = collect_invoices(
        parse_documents(paths, workers=config.workers),
        collector,
        fail_fast=config.fail_fast,
    )

    invoices = collector.invoices
    issues = collector.issues
    tables = project_tables(invoices, issues)
    outputs = writer.write_all(tables)

    result = ExportResult(
        documents=documents,
        invoices=list(invoices),
        tables=list(tables),
        outputs=outputs,
        issues=issues,
        counts=collector.counts(),
    )

    if config.report_path is not None:
        excel = ExcelLogger(ExcelLoggerConfig(filename=str(config.report_path)))
        try:
            result.report_path = excel.write_rows(issues, summary=result.counts)
        except OSError as exc:
            raise OutputError(f"Cannot write run log {config.report_path}: {exc}") from exc
        LOGGER.info("Run log saved to %s", result.report_path)

    LOGGER.info(
        "Processed %d documents: %s",
        documents,
        ", ".join(f"{name}={count}" for name, count in result.counts.items()),
    )
    return result


__all__ = ["ExportResult", "collect_invoices", "parse_documents", "run_export"]
