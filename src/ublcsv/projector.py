"""Projetar a coleção canónica de faturas em três tabelas planas."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .formatting import format_number, format_timestamp, sanitize_ascii, unit_label
from .invoices import Invoice, Party
from .issues import DATE_UNPARSABLE, ProcessingIssue

LOGGER = logging.getLogger("ublcsv.projector")

INVOICE_COLUMNS = (
    "ID",
    "IssueDate",
    "DueDate",
    "Supplier",
    "Customer",
    "Reference",
    "ReferenceName",
    "LineExtension",
    "TaxExclusive",
    "TaxInclusive",
    "Tax",
    "Payable",
    "Broj",
)

PARTY_COLUMNS = (
    "ID",
    "Name",
    "OIB",
    "Street",
    "City",
    "PostalZone",
    "Country",
    "Contact",
    "Email",
)

LINE_COLUMNS = (
    "InvoiceID",
    "ID",
    "ItemName",
    "ItemID",
    "Quantity",
    "UnitPrice",
    "Amount",
    "Unit",
    "TaxPercent",
    "TaxScheme",
)


@dataclass
class Table:
    """Cabeçalho e linhas ordenadas de uma tabela de saída."""

    name: str
    columns: Sequence[str]
    rows: list[list[str]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)


def _timestamp(
    invoice: Invoice,
    field_name: str,
    value: str,
    issues: list[ProcessingIssue] | None,
) -> str:
    formatted = format_timestamp(value)
    if formatted is not None:
        return formatted
    if value.strip():
        message = f"Invoice {invoice.key}: cannot parse {field_name} {value.strip()!r}"
        LOGGER.warning(message)
        if issues is not None:
            issues.append(
                ProcessingIssue(
                    message,
                    code=DATE_UNPARSABLE,
                    details={"key": invoice.key, "field": field_name},
                )
            )
    return ""


def invoice_table(
    invoices: Iterable[Invoice],
    issues: list[ProcessingIssue] | None = None,
) -> Table:
    table = Table("invoices", INVOICE_COLUMNS)
    for invoice in invoices:
        table.rows.append(
            [
                invoice.id,
                _timestamp(invoice, "IssueDate", invoice.issued_at, issues),
                _timestamp(invoice, "DueDate", invoice.due_date, issues),
                invoice.supplier.id,
                invoice.customer.id,
                invoice.reference,
                invoice.reference_name,
                invoice.line_extension,
                invoice.tax_exclusive,
                invoice.tax_inclusive,
                invoice.tax,
                invoice.payable,
                invoice.ledger_number or "",
            ]
        )
    return table


def _party_row(party: Party) -> list[str]:
    return [
        party.id,
        party.name,
        party.tax_number,
        sanitize_ascii(party.street),
        sanitize_ascii(party.city),
        party.postal_zone,
        party.country,
        party.contact_name,
        party.contact_email,
    ]


def party_table(invoices: Iterable[Invoice]) -> Table:
    """Uma linha por entidade; vence a primeira (fornecedor antes do cliente)."""

    table = Table("parties", PARTY_COLUMNS)
    seen: set[str] = set()
    for invoice in invoices:
        for party in (invoice.supplier, invoice.customer):
            if party.id in seen:
                continue
            seen.add(party.id)
            table.rows.append(_party_row(party))
    return table


def line_table(invoices: Iterable[Invoice]) -> Table:
    table = Table("lines", LINE_COLUMNS)
    for invoice in invoices:
        for line in invoice.lines:
            table.rows.append(
                [
                    invoice.id,
                    line.id,
                    line.item_name,
                    line.item_id,
                    format_number(line.quantity.value),
                    format_number(line.unit_price),
                    format_number(line.amount),
                    unit_label(line.quantity.unit_code),
                    format_number(line.tax_percent),
                    f"{line.tax_id}-{line.tax_scheme}",
                ]
            )
    return table


def project_tables(
    invoices: Sequence[Invoice],
    issues: list[ProcessingIssue] | None = None,
) -> tuple[Table, Table, Table]:
    """Devolver as tabelas de faturas, entidades e linhas para ``invoices``."""

    return invoice_table(invoices, issues), party_table(invoices), line_table(invoices)


__all__ = [
    "INVOICE_COLUMNS",
    "LINE_COLUMNS",
    "PARTY_COLUMNS",
    "Table",
    "invoice_table",
    "line_table",
    "party_table",
    "project_tables",
]
