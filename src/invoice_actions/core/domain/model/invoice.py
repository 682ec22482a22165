from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, localcontext
from enum import Enum


# the invoices.amount column is a signed 64-bit integer
MAX_CENTS = 2**63 - 1
MAX_AMOUNT = Decimal(MAX_CENTS) / 100


def cents_of(amount: Decimal) -> int:
    """amount x 100, half-up to a whole cent. Exact at any magnitude."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(amount.as_tuple().digits) + 3)
        return int((amount * 100).to_integral_value(rounding=ROUND_HALF_UP))


class InvoiceStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


@dataclass(frozen=True)
class InvoiceId:
    value: str


@dataclass(frozen=True)
class CustomerId:
    value: str


@dataclass(frozen=True)
class AmountInCents:
    """Monetary amount in minor currency units. Always a positive int."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"amount_in_cents must be int, got {type(self.value).__name__}")
        if self.value <= 0:
            raise ValueError(f"amount_in_cents must be > 0, got {self.value}")
        if self.value > MAX_CENTS:
            raise ValueError(f"amount_in_cents exceeds the store limit, got {self.value}")

    @staticmethod
    def from_amount(amount: Decimal | int | str) -> "AmountInCents":
        return AmountInCents(cents_of(Decimal(str(amount))))

    def to_decimal(self) -> Decimal:
        return (Decimal(self.value) / 100).quantize(Decimal("0.01"))


@dataclass(frozen=True)
class InvoiceDraft:
    customer_id: CustomerId
    amount: AmountInCents
    status: InvoiceStatus


@dataclass(frozen=True)
class Invoice:
    invoice_id: InvoiceId
    customer_id: CustomerId
    amount: AmountInCents
    status: InvoiceStatus
    date: date

    def revise(self, draft: InvoiceDraft) -> "Invoice":
        # date is fixed at creation
        return Invoice(
            invoice_id=self.invoice_id,
            customer_id=draft.customer_id,
            amount=draft.amount,
            status=draft.status,
            date=self.date,
        )


@dataclass(frozen=True)
class Customer:
    customer_id: CustomerId
    name: str
    email: str
