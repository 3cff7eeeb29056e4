"""Registo em Excel das ocorrências de uma exportação.

Cada execução pode guardar as ocorrências por registo (duplicados, faturas
sem número no livro, datas inválidas, documentos ignorados) num pequeno
*workbook*, para revisão junto das tabelas exportadas. A primeira folha
lista as ocorrências e uma segunda folha opcional guarda os contadores.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Mapping, Protocol, Sequence

REPORT_COLUMNS = ("code", "message", "source", "key")
SUMMARY_COLUMNS = ("outcome", "count")


class RowLike(Protocol):
    """Protocolo para linhas serializáveis como células de folha de cálculo."""

    def as_cells(self) -> Iterable[str]:
        """Devolver os valores ordenados a escrever na folha."""


@dataclass(slots=True)
class ExcelLoggerConfig:
    """Configuração usada pelo :class:`ExcelLogger`."""

    columns: Sequence[str] = REPORT_COLUMNS
    filename: str = "ublcsv-report.xlsx"
    sheet_title: str = "Log"
    summary_title: str = "Summary"
    widths: Mapping[str, int] = field(
        default_factory=lambda: {"code": 16, "message": 60, "source": 48, "key": 32}
    )


def _cells(row: RowLike | Iterable[str]) -> list[str]:
    if hasattr(row, "as_cells"):
        return list(row.as_cells())  # type: ignore[union-attr]
    return list(row)  # type: ignore[arg-type]


class ExcelLogger:
    """Gravar as ocorrências de uma execução num *workbook* :mod:`openpyxl` novo."""

    def __init__(self, config: ExcelLoggerConfig) -> None:
        self.config = config

    def write_rows(
        self,
        rows: Iterable[RowLike | Iterable[str]],
        summary: Mapping[str, int] | None = None,
    ) -> Path:
        """Persistir ``rows`` (e os contadores ``summary``) e devolver o caminho."""

        from openpyxl import Workbook
        from openpyxl.utils import get_column_letter

        destination = Path(self.config.filename)
        destination.parent.mkdir(parents=True, exist_ok=True)

        workbook = Workbook()
        worksheet = workbook.active
        worksheet.title = self.config.sheet_title

        columns = list(self.config.columns)
        if columns:
            worksheet.append(columns)
            worksheet.freeze_panes = "A2"
            for index, name in enumerate(columns, start=1):
                width = self.config.widths.get(name)
                if width:
                    worksheet.column_dimensions[get_column_letter(index)].width = width

        for row in rows:
            worksheet.append(_cells(row))

        if columns and worksheet.max_row > 1:
            worksheet.auto_filter.ref = worksheet.dimensions

        if summary is not None:
            sheet = workbook.create_sheet(self.config.summary_title)
            sheet.append(list(SUMMARY_COLUMNS))
            for name, count in summary.items():
                sheet.append([name, count])

        workbook.save(destination)
        return destination


__all__ = [
    "REPORT_COLUMNS",
    "SUMMARY_COLUMNS",
    "ExcelLogger",
    "ExcelLoggerConfig",
    "RowLike",
]
