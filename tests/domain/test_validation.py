"""Tests for the invoice form schema validator."""

from __future__ import annotations

import pytest
from returns.result import Failure, Success

from invoice_actions.core.domain.model.errors import ErrorKind, ValidationError
from invoice_actions.core.domain.model.invoice import MAX_AMOUNT, MAX_CENTS, InvoiceStatus
from invoice_actions.core.domain.service.validation import (
    CREATE_FAILED_MESSAGE,
    UPDATE_FAILED_MESSAGE,
    validate_invoice_form,
)

AMOUNT_MESSAGE = "Please enter an amount greater than $0."
CUSTOMER_MESSAGE = "Please select a customer."
STATUS_MESSAGE = "Please select an invoice status."


def _errors(form: dict[str, str]) -> ValidationError:
    result = validate_invoice_form(form)
    assert isinstance(result, Failure)
    return result.failure()


class TestValidForms:
    def test_converts_amount_to_cents(self) -> None:
        result = validate_invoice_form(
            {"customerId": "c1", "amount": "49.99", "status": "pending"}
        )
        assert isinstance(result, Success)
        draft = result.unwrap()
        assert draft.customer_id.value == "c1"
        assert draft.amount.value == 4999
        assert draft.status is InvoiceStatus.PENDING

    @pytest.mark.parametrize(
        ("raw", "cents"),
        [("1", 100), ("0.01", 1), ("19.999", 2000), ("1234.5", 123450)],
    )
    def test_cents_are_rounded(self, raw: str, cents: int) -> None:
        result = validate_invoice_form({"customerId": "c1", "amount": raw, "status": "paid"})
        assert result.unwrap().amount.value == cents

    def test_largest_storable_amount(self) -> None:
        result = validate_invoice_form(
            {"customerId": "c1", "amount": str(MAX_AMOUNT), "status": "paid"}
        )
        assert result.unwrap().amount.value == MAX_CENTS

    def test_id_and_date_are_ignored(self) -> None:
        result = validate_invoice_form(
            {
                "id": "forged",
                "date": "1999-01-01",
                "customerId": "c1",
                "amount": "10",
                "status": "paid",
            }
        )
        assert isinstance(result, Success)
        assert not hasattr(result.unwrap(), "date")

    def test_is_pure(self) -> None:
        form = {"customerId": "", "amount": "x", "status": "nope"}
        assert validate_invoice_form(form) == validate_invoice_form(form)


class TestInvalidAmount:
    @pytest.mark.parametrize(
        "raw", ["0", "-5", "abc", "", "NaN", "0.001", "1e27", "92233720368547758.08"]
    )
    def test_rejected_with_amount_message(self, raw: str) -> None:
        err = _errors({"customerId": "c1", "amount": raw, "status": "pending"})
        assert err.field_errors == {"amount": [AMOUNT_MESSAGE]}
        assert err.kind is ErrorKind.VALIDATION

    def test_missing_amount(self) -> None:
        err = _errors({"customerId": "c1", "status": "pending"})
        assert err.field_errors["amount"] == [AMOUNT_MESSAGE]


class TestMissingFields:
    def test_missing_customer(self) -> None:
        err = _errors({"amount": "5", "status": "paid"})
        assert err.field_errors == {"customerId": [CUSTOMER_MESSAGE]}

    def test_blank_customer(self) -> None:
        err = _errors({"customerId": "   ", "amount": "5", "status": "paid"})
        assert err.field_errors == {"customerId": [CUSTOMER_MESSAGE]}

    @pytest.mark.parametrize("status", ["", "Pending", "overdue"])
    def test_bad_status(self, status: str) -> None:
        err = _errors({"customerId": "c1", "amount": "5", "status": status})
        assert err.field_errors == {"status": [STATUS_MESSAGE]}

    def test_all_fields_reported_together(self) -> None:
        err = _errors({})
        assert err.field_errors == {
            "customerId": [CUSTOMER_MESSAGE],
            "amount": [AMOUNT_MESSAGE],
            "status": [STATUS_MESSAGE],
        }
        assert err.message == CREATE_FAILED_MESSAGE

    def test_update_message(self) -> None:
        result = validate_invoice_form({}, UPDATE_FAILED_MESSAGE)
        assert result.failure().message == UPDATE_FAILED_MESSAGE
