"""Gravar as tabelas projetadas em texto separado por ponto e vírgula."""

from __future__ import annotations

import enum
import logging
from pathlib import Path
from typing import Iterable

import pandas as pd

from .errors import OutputError
from .projector import Table

LOGGER = logging.getLogger("ublcsv.writer")

DEFAULT_ENCODING = "cp1250"
DELIMITER = ";"
LINE_TERMINATOR = "\r\n"

FILENAMES = {
    "invoices": "invoices.txt",
    "parties": "customer.txt",
    "lines": "lines.txt",
}


class WriteMode(enum.Enum):
    REPLACE = "replace"
    APPEND = "append"


class TableWriter:
    """Gravar objetos :class:`~ublcsv.projector.Table` em ``output_dir``.

    No modo ``REPLACE`` cada ficheiro é removido por :meth:`prepare` e
    regravado com o cabeçalho. O modo ``APPEND`` mantém os ficheiros e só
    escreve o cabeçalho se o ficheiro for novo ou estiver vazio. Caracteres
    que a code page de destino não representa são gravados como ``?``.
    """

    def __init__(
        self,
        output_dir: Path,
        *,
        encoding: str = DEFAULT_ENCODING,
        mode: WriteMode = WriteMode.REPLACE,
    ) -> None:
        self.output_dir = Path(output_dir)
        self.encoding = encoding
        self.mode = mode

    def path_for(self, table: Table | str) -> Path:
        name = table if isinstance(table, str) else table.name
        return self.output_dir / FILENAMES.get(name, f"{name}.txt")

    def prepare(self, names: Iterable[str] = tuple(FILENAMES)) -> None:
        """Criar a pasta de saída e remover tabelas antigas no modo ``REPLACE``."""

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputError(f"Cannot create output directory {self.output_dir}: {exc}") from exc

        if self.mode is not WriteMode.REPLACE:
            return
        for name in names:
            path = self.path_for(name)
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                raise OutputError(f"Cannot remove {path}: {exc}") from exc
            LOGGER.debug("Removed previous output %s", path)

    def write(self, table: Table) -> Path:
        path = self.path_for(table)
        append = self.mode is WriteMode.APPEND
        with_header = not append or not path.exists() or path.stat().st_size == 0

        frame = pd.DataFrame(table.rows, columns=list(table.columns), dtype=str)
        try:
            frame.to_csv(
                path,
                sep=DELIMITER,
                index=False,
                header=with_header,
                mode="a" if append else "w",
                encoding=self.encoding,
                errors="replace",
                lineterminator=LINE_TERMINATOR,
            )
        except (OSError, LookupError) as exc:
            raise OutputError(f"Cannot write {path}: {exc}") from exc

        LOGGER.info("Wrote %d rows to %s", len(table), path)
        return path

    def write_all(self, tables: Iterable[Table]) -> list[Path]:
        return [self.write(table) for table in tables]


__all__ = ["DEFAULT_ENCODING", "FILENAMES", "TableWriter", "WriteMode"]
