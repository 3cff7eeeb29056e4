"""Configuração de uma exportação."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .errors import ConfigError
from .writer import DEFAULT_ENCODING, WriteMode

COUNTERPARTY_ENV_VARIABLE = "UBLCSV_COUNTERPARTY_ID"
DEFAULT_OUTPUT_DIR = Path("output")
DEFAULT_LEDGER_FILE = Path("Obrazac_URA-2.csv")


@dataclass(frozen=True)
class ExportConfig:
    """Tudo o que :func:`ublcsv.pipeline.run_export` precisa de saber.

    ``counterparty_id`` identifica a entidade recetora cujas faturas têm de
    constar do livro de registo. ``fail_fast`` interrompe no primeiro
    documento ilegível; quando desativado, esses documentos são
    reportados e ignorados.
    """

    inputs: tuple[Path, ...]
    ledger_path: Path = DEFAULT_LEDGER_FILE
    output_dir: Path = DEFAULT_OUTPUT_DIR
    counterparty_id: str = ""
    write_mode: WriteMode = WriteMode.REPLACE
    fail_fast: bool = True
    workers: int = 1
    output_encoding: str = DEFAULT_ENCODING
    ledger_encoding: str = "utf-8"
    report_path: Path | None = None

    def validate(self) -> "ExportConfig":
        if not self.inputs:
            raise ConfigError("At least one input location is required")
        if not self.counterparty_id:
            raise ConfigError(
                "A counter-party identifier is required "
                f"(--counterparty or {COUNTERPARTY_ENV_VARIABLE})"
            )
        if self.workers < 1:
            raise ConfigError(f"workers must be at least 1, got {self.workers}")
        return self


def resolve_counterparty(value: str | None, environ: Mapping[str, str] | None = None) -> str:
    """Devolver ``value`` ou o identificador definido no ambiente."""

    if value:
        return value.strip()
    env = os.environ if environ is None else environ
    return env.get(COUNTERPARTY_ENV_VARIABLE, "").strip()


__all__ = [
    "COUNTERPARTY_ENV_VARIABLE",
    "DEFAULT_LEDGER_FILE",
    "DEFAULT_OUTPUT_DIR",
    "ExportConfig",
    "resolve_counterparty",
]
