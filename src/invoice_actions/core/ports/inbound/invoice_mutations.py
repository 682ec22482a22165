from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Protocol, Sequence

from returns.result import Result

from invoice_actions.core.domain.model.errors import (
    ErrorKind,
    InvoiceActionError,
    ValidationError,
)
from invoice_actions.core.ports.outbound.navigation import Redirect

FormData = Mapping[str, str]


@dataclass(frozen=True)
class CreateInvoiceCommand:
    form: FormData


@dataclass(frozen=True)
class UpdateInvoiceCommand:
    invoice_id: str  # from the route, never from the form body
    form: FormData


@dataclass(frozen=True)
class DeleteInvoiceCommand:
    invoice_id: str


@dataclass(frozen=True)
class ActionState:
    """What a form gets back when a mutation does not redirect."""

    message: str
    kind: ErrorKind | None = None
    errors: Mapping[str, Sequence[str]] | None = field(default=None)

    @staticmethod
    def from_error(err: InvoiceActionError) -> "ActionState":
        if isinstance(err, ValidationError):
            return ActionState(
                message=err.message,
                kind=err.kind,
                errors={k: list(v) for k, v in err.field_errors.items()},
            )
        return ActionState(message=err.message, kind=err.kind)


@dataclass(frozen=True)
class DeleteResult:
    message: str = "Deleted Invoice"


class CreateInvoiceUseCase(Protocol):
    def create_invoice(
        self, command: CreateInvoiceCommand
    ) -> Result[Redirect, InvoiceActionError]: ...


class UpdateInvoiceUseCase(Protocol):
    def update_invoice(
        self, command: UpdateInvoiceCommand
    ) -> Result[Redirect, InvoiceActionError]: ...


class DeleteInvoiceUseCase(Protocol):
    def delete_invoice(
        self, command: DeleteInvoiceCommand
    ) -> Result[DeleteResult, InvoiceActionError]: ...
