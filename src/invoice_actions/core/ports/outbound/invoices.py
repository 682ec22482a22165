from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from returns.result import Result

from invoice_actions.core.domain.model.errors import InvoiceActionError
from invoice_actions.core.domain.model.invoice import Invoice, InvoiceDraft, InvoiceId


class InvoiceRepository(Protocol):
    """
    Each mutation is one single-row statement; the store is the only owner of
    invoice rows. update/delete report how many rows they touched.
    """

    def insert(self, draft: InvoiceDraft, on: date) -> Result[None, InvoiceActionError]: ...

    def update(
        self, invoice_id: InvoiceId, draft: InvoiceDraft
    ) -> Result[int, InvoiceActionError]: ...

    def delete(self, invoice_id: InvoiceId) -> Result[int, InvoiceActionError]: ...

    def list(self) -> Result[Sequence[Invoice], InvoiceActionError]: ...
