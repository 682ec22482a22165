from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Sequence
from uuid import uuid4

import structlog
from returns.result import Failure, Result, Success

from invoice_actions.core.domain.model.errors import InvoiceActionError, PersistenceError
from invoice_actions.core.domain.model.invoice import Invoice, InvoiceDraft, InvoiceId
from invoice_actions.core.ports.outbound.invoices import InvoiceRepository

log = structlog.get_logger(__name__)

UNREACHABLE = "store is unreachable"
FOREIGN_KEY = "customer_id violates foreign key"


@dataclass
class InMemoryInvoiceRepository(InvoiceRepository):
    customer_ids: set[str] | None = None  # None: any customer is accepted
    fail: bool = False
    _store: Dict[str, Invoice] = field(default_factory=dict)

    def insert(self, draft: InvoiceDraft, on: date) -> Result[None, InvoiceActionError]:
        if self.fail:
            return _store_failure("insert", UNREACHABLE)
        if self.customer_ids is not None and draft.customer_id.value not in self.customer_ids:
            return _store_failure("insert", FOREIGN_KEY)

        invoice_id = InvoiceId(str(uuid4()))
        self._store[invoice_id.value] = Invoice(
            invoice_id=invoice_id,
            customer_id=draft.customer_id,
            amount=draft.amount,
            status=draft.status,
            date=on,
        )
        return Success(None)

    def update(
        self, invoice_id: InvoiceId, draft: InvoiceDraft
    ) -> Result[int, InvoiceActionError]:
        if self.fail:
            return _store_failure("update", UNREACHABLE)
        if self.customer_ids is not None and draft.customer_id.value not in self.customer_ids:
            return _store_failure("update", FOREIGN_KEY)

        current = self._store.get(invoice_id.value)
        if current is None:
            return Success(0)
        self._store[invoice_id.value] = current.revise(draft)
        return Success(1)

    def delete(self, invoice_id: InvoiceId) -> Result[int, InvoiceActionError]:
        if self.fail:
            return _store_failure("delete", UNREACHABLE)
        return Success(1 if self._store.pop(invoice_id.value, None) is not None else 0)

    def list(self) -> Result[Sequence[Invoice], InvoiceActionError]:
        if self.fail:
            return _store_failure("select", UNREACHABLE)
        return Success(tuple(sorted(self._store.values(), key=lambda i: i.date, reverse=True)))


def _store_failure(statement: str, reason: str) -> Result[Any, InvoiceActionError]:
    log.error("invoice_statement_failed", statement=statement, reason=reason)
    return Failure(PersistenceError(message=f"{statement} failed: {reason}"))
