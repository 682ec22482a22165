from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

from returns.result import Result

from invoice_actions.core.domain.model.errors import InvoiceActionError


@dataclass(frozen=True)
class InvoiceRowView:
    id: str
    customer_id: str
    amount: int  # cents
    status: str
    date: str  # ISO


class ListInvoicesUseCase(Protocol):
    def list_invoices(self) -> Result[Sequence[InvoiceRowView], InvoiceActionError]: ...
