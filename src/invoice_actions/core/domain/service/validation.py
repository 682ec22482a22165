from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as SchemaError
from returns.result import Failure, Result, Success

from invoice_actions.core.domain.model.errors import ValidationError
from invoice_actions.core.domain.model.invoice import (
    MAX_AMOUNT,
    AmountInCents,
    CustomerId,
    InvoiceDraft,
    InvoiceStatus,
    cents_of,
)

CREATE_FAILED_MESSAGE = "Missing Fields. Failed to Create Invoice."
UPDATE_FAILED_MESSAGE = "Missing Fields. Failed to Update Invoice."

# One display message per form field, whatever the underlying schema error.
FIELD_MESSAGES: dict[str, str] = {
    "customerId": "Please select a customer.",
    "amount": "Please enter an amount greater than $0.",
    "status": "Please select an invoice status.",
}


class InvoiceForm(BaseModel):
    """Mutable invoice fields as posted by the form. id and date are ignored."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True, frozen=True)

    customer_id: str = Field(alias="customerId", min_length=1)
    amount: Decimal = Field(gt=0, le=MAX_AMOUNT, allow_inf_nan=False)
    status: InvoiceStatus

    @field_validator("amount")
    @classmethod
    def _at_least_one_cent(cls, v: Decimal) -> Decimal:
        if cents_of(v) <= 0:
            raise ValueError("amount rounds to zero cents")
        return v


def validate_invoice_form(
    form: Mapping[str, Any], message: str = CREATE_FAILED_MESSAGE
) -> Result[InvoiceDraft, ValidationError]:
    """Pure: raw form values -> InvoiceDraft, or field-keyed errors."""
    try:
        parsed = InvoiceForm.model_validate(dict(form))
    except SchemaError as exc:
        return Failure(ValidationError(message=message, field_errors=field_errors_of(exc)))

    return Success(
        InvoiceDraft(
            customer_id=CustomerId(parsed.customer_id),
            amount=AmountInCents.from_amount(parsed.amount),
            status=parsed.status,
        )
    )


def field_errors_of(exc: SchemaError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        name = _form_field(err["loc"])
        text = FIELD_MESSAGES.get(name, err["msg"])
        messages = errors.setdefault(name, [])
        if text not in messages:
            messages.append(text)
    return errors


def _form_field(loc: tuple[int | str, ...]) -> str:
    head = str(loc[0]) if loc else "__root__"
    return "customerId" if head == "customer_id" else head
