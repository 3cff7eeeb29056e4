"""Deduplicação e enriquecimento das faturas com o livro de registo.

:class:`InvoiceCollector` é o único ponto onde se decidem ordem e
identidade. As faturas entram pela ordem de descoberta; vence a primeira
fatura vista para cada chave ``ID-SupplierID``.
"""

from __future__ import annotations

import enum
import logging
import threading
from collections import Counter
from collections.abc import Mapping

from .invoices import Invoice
from .issues import DUPLICATE, MISSING_LEDGER, ProcessingIssue

LOGGER = logging.getLogger("ublcsv.engine")


class Outcome(enum.Enum):
    ACCEPTED = "accepted"
    DUPLICATE = "duplicate"
    MISSING_LEDGER = "missing-ledger"


class InvoiceCollector:
    """Acumular a coleção canónica e deduplicada de faturas.

    Parâmetros
    ----------
    ledger:
        Mapeamento das chaves ``fatura-fornecedor`` para números do livro.
    counterparty_id:
        Identificador do cliente cujas faturas exigem número no livro. Um
        valor vazio desativa essa verificação.
    """

    def __init__(self, ledger: Mapping[str, str], counterparty_id: str | None) -> None:
        self.ledger = ledger
        self.counterparty_id = counterparty_id or ""
        self.issues: list[ProcessingIssue] = []
        self._invoices: list[Invoice] = []
        self._seen: set[str] = set()
        self._outcomes: Counter[Outcome] = Counter()
        self._lock = threading.Lock()

    @property
    def invoices(self) -> tuple[Invoice, ...]:
        with self._lock:
            return tuple(self._invoices)

    def requires_ledger(self, invoice: Invoice) -> bool:
        return bool(self.counterparty_id) and invoice.customer.id == self.counterparty_id

    def accept(self, invoice: Invoice, *, source: str = "") -> Outcome:
        """Decidir se ``invoice`` entra na coleção e enriquecê-la."""

        with self._lock:
            outcome = self._accept(invoice, source)
            self._outcomes[outcome] += 1
            return outcome

    def _accept(self, invoice: Invoice, source: str) -> Outcome:
        key = invoice.key
        if key in self._seen:
            self._report(
                DUPLICATE,
                f"Skipping duplicate ID: {invoice.id} supplier: {invoice.supplier.id}",
                source=source,
                key=key,
            )
            return Outcome.DUPLICATE
        self._seen.add(key)

        if self.requires_ledger(invoice):
            number = self.ledger.get(key)
            if number is None:
                self._report(
                    MISSING_LEDGER,
                    f"Skipping {key}: no ledger number",
                    source=source,
                    key=key,
                )
                return Outcome.MISSING_LEDGER
            invoice.attach_ledger_number(number)

        self._invoices.append(invoice)
        LOGGER.info("%-20s OK", source or key)
        return Outcome.ACCEPTED

    def _report(self, code: str, message: str, *, source: str, key: str) -> None:
        LOGGER.warning("%-20s %s", source or key, message)
        self.issues.append(
            ProcessingIssue(message, code=code, details={"source": source, "key": key})
        )

    def record_issue(self, issue: ProcessingIssue) -> None:
        """Registar uma ocorrência detetada fora de :meth:`accept`."""

        with self._lock:
            self.issues.append(issue)

    def counts(self) -> dict[str, int]:
        with self._lock:
            return {outcome.value: self._outcomes[outcome] for outcome in Outcome}


__all__ = ["InvoiceCollector", "Outcome"]
