"""Entidades de fatura extraídas dos documentos UBL."""

from __future__ import annotations

from dataclasses import dataclass, field


def composite_key(first: str, second: str) -> str:
    """Juntar dois identificadores na chave ``primeiro-segundo``."""

    return f"{first}-{second}"


@dataclass
class Party:
    """Bloco de fornecedor ou cliente incluído na fatura."""

    id: str = ""
    name: str = ""
    tax_number: str = ""
    address_line: str = ""
    street: str = ""
    city: str = ""
    postal_zone: str = ""
    country: str = ""
    contact_name: str = ""
    contact_email: str = ""


@dataclass
class Quantity:
    value: str = ""
    unit_code: str = ""


@dataclass
class InvoiceLine:
    """Uma ``InvoiceLine``; o ``id`` só é único dentro da própria fatura."""

    id: str = ""
    item_name: str = ""
    item_id: str = ""
    quantity: Quantity = field(default_factory=Quantity)
    unit_price: str = ""
    amount: str = ""
    tax_percent: str = ""
    tax_id: str = ""
    tax_scheme: str = ""


@dataclass
class Invoice:
    """Cabeçalho, entidades, totais e linhas da fatura.

    Os totais monetários ficam exatamente como no documento, pelo que os
    valores exportados nunca passam por ``float``.
    """

    id: str = ""
    issue_date: str = ""
    issue_time: str = ""
    due_date: str = ""
    reference: str = ""
    reference_name: str = ""
    supplier: Party = field(default_factory=Party)
    customer: Party = field(default_factory=Party)
    line_extension: str = ""
    tax_exclusive: str = ""
    tax_inclusive: str = ""
    tax: str = ""
    payable: str = ""
    lines: list[InvoiceLine] = field(default_factory=list)
    ledger_number: str | None = None

    @property
    def key(self) -> str:
        """Identidade da fatura dentro de um lote."""

        return composite_key(self.id, self.supplier.id)

    @property
    def issued_at(self) -> str:
        return f"{self.issue_date} {self.issue_time}"

    def attach_ledger_number(self, number: str) -> None:
        if self.ledger_number is not None:
            raise ValueError(f"Invoice {self.key} already has ledger number {self.ledger_number!r}")
        self.ledger_number = number


__all__ = ["Invoice", "InvoiceLine", "Party", "Quantity", "composite_key"]
