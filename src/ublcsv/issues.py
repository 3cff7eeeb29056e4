"""Ocorrências por registo reportadas durante a exportação."""

from __future__ import annotations

DUPLICATE = "DUPLICATE"
MISSING_LEDGER = "MISSING_LEDGER"
DATE_UNPARSABLE = "DATE_UNPARSABLE"
DOCUMENT_ERROR = "DOCUMENT_ERROR"


class ProcessingIssue:
    """Problema recuperável detetado num documento ou numa fatura."""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: dict[str, str] | None = None,
    ) -> None:
        self.message = message
        self.code = code or "GENERIC"
        self.details = details or {}

    def as_cells(self) -> list[str]:
        """Serializar a ocorrência para exportação tabular."""

        return [
            self.code,
            self.message,
            self.details.get("source", ""),
            self.details.get("key", ""),
        ]

    def __repr__(self) -> str:
        return f"ProcessingIssue(code={self.code!r}, message={self.message!r})"


__all__ = [
    "DATE_UNPARSABLE",
    "DOCUMENT_ERROR",
    "DUPLICATE",
    "MISSING_LEDGER",
    "ProcessingIssue",
]
