"""Conversão de faturas eletrónicas UBL em tabelas planas e relacionadas.

A exportação lê uma pasta de faturas, descarta documentos repetidos, associa
os números do livro de registo às faturas dirigidas à contraparte
configurada e grava faturas, entidades e linhas em ficheiros de texto
separados por ponto e vírgula.
"""

__version__ = "0.1.0"

__all__ = [
    "cli",
    "commands",
    "config",
    "discovery",
    "engine",
    "errors",
    "formatting",
    "invoices",
    "issues",
    "ledger",
    "logging",
    "parser",
    "pipeline",
    "projector",
    "utils",
    "writer",
]
