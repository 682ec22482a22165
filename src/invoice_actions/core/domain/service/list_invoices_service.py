from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from returns.result import Result

from invoice_actions.core.domain.model.errors import InvoiceActionError
from invoice_actions.core.domain.model.invoice import Invoice
from invoice_actions.core.ports.inbound.list_invoices import (
    InvoiceRowView,
    ListInvoicesUseCase,
)
from invoice_actions.core.ports.outbound.invoices import InvoiceRepository


@dataclass(frozen=True)
class ListInvoicesDeps:
    invoices: InvoiceRepository


@dataclass(frozen=True)
class ListInvoicesService(ListInvoicesUseCase):
    deps: ListInvoicesDeps

    def list_invoices(self) -> Result[Sequence[InvoiceRowView], InvoiceActionError]:
        return self.deps.invoices.list().map(
            lambda invoices: tuple(_to_view(inv) for inv in invoices)
        )


def _to_view(inv: Invoice) -> InvoiceRowView:
    return InvoiceRowView(
        id=inv.invoice_id.value,
        customer_id=inv.customer_id.value,
        amount=inv.amount.value,
        status=inv.status.value,
        date=inv.date.isoformat(),
    )
