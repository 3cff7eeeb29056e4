"""Hierarquia de exceções para erros fatais da exportação."""

from __future__ import annotations


class UblCsvError(Exception):
    """Classe base para erros que interrompem a exportação."""


class ConfigError(UblCsvError):
    """Configuração inválida ou incompleta."""


class LedgerError(UblCsvError):
    """Não foi possível abrir ou interpretar o livro de registo."""


class DocumentError(UblCsvError):
    """Documento de fatura ilegível ou XML mal formado."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


class DiscoveryError(UblCsvError):
    """Pasta de entrada inexistente ou impossível de percorrer."""


class OutputError(UblCsvError):
    """Falha ao gravar a pasta de saída ou uma das tabelas."""


__all__ = [
    "UblCsvError",
    "ConfigError",
    "LedgerError",
    "DocumentError",
    "DiscoveryError",
    "OutputError",
]
