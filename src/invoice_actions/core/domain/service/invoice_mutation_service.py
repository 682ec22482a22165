from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, TypeVar

import structlog
from returns.pipeline import flow
from returns.pointfree import alt, bind, map_
from returns.result import Failure, Result, Success

from invoice_actions.core.domain.model.errors import (
    InvoiceActionError,
    InvoiceNotFound,
    PersistenceError,
    ValidationError,
)
from invoice_actions.core.domain.model.invoice import InvoiceDraft, InvoiceId
from invoice_actions.core.domain.service.validation import (
    CREATE_FAILED_MESSAGE,
    UPDATE_FAILED_MESSAGE,
    validate_invoice_form,
)
from invoice_actions.core.ports.inbound.invoice_mutations import (
    CreateInvoiceCommand,
    CreateInvoiceUseCase,
    DeleteInvoiceCommand,
    DeleteInvoiceUseCase,
    DeleteResult,
    UpdateInvoiceCommand,
    UpdateInvoiceUseCase,
)
from invoice_actions.core.ports.outbound.clock import Clock
from invoice_actions.core.ports.outbound.invoices import InvoiceRepository
from invoice_actions.core.ports.outbound.navigation import (
    Redirect,
    Redirector,
    ViewInvalidator,
)

log = structlog.get_logger(__name__)

T = TypeVar("T")

NOT_FOUND_MESSAGE = "Invoice Not Found."


@dataclass(frozen=True)
class InvoiceMutationDeps:
    invoices: InvoiceRepository
    invalidator: ViewInvalidator
    redirector: Redirector
    clock: Clock
    invoices_path: str = "/dashboard/invoices"


@dataclass(frozen=True)
class InvoiceMutationService(
    CreateInvoiceUseCase, UpdateInvoiceUseCase, DeleteInvoiceUseCase
):
    """
    Received -> Validating -> Invalid
                           -> Validated -> Persisting -> Persisted (invalidate + redirect)
                                                      -> PersistFailed
    """

    deps: InvoiceMutationDeps

    def create_invoice(
        self, command: CreateInvoiceCommand
    ) -> Result[Redirect, InvoiceActionError]:
        return flow(
            validate_invoice_form(command.form, CREATE_FAILED_MESSAGE),
            bind(self._insert),
            map_(lambda _: self._invalidate_and_redirect()),
        )

    def update_invoice(
        self, command: UpdateInvoiceCommand
    ) -> Result[Redirect, InvoiceActionError]:
        invoice_id = InvoiceId(command.invoice_id)
        return flow(
            validate_invoice_form(command.form, UPDATE_FAILED_MESSAGE),
            bind(lambda draft: self._update(invoice_id, draft)),
            map_(lambda _: self._invalidate_and_redirect()),
        )

    def delete_invoice(
        self, command: DeleteInvoiceCommand
    ) -> Result[DeleteResult, InvoiceActionError]:
        invoice_id = InvoiceId(command.invoice_id)
        result = self._execute("Delete", lambda: self.deps.invoices.delete(invoice_id))
        if isinstance(result, Success):
            # zero rows is still a success: delete is idempotent
            log.info("invoice_deleted", invoice_id=invoice_id.value, rows=result.unwrap())
            self.deps.invalidator.invalidate(self.deps.invoices_path)
        return result.map(lambda _: DeleteResult())

    # ---- persistence steps ------------------------------------------------

    def _insert(self, draft: InvoiceDraft) -> Result[None, InvoiceActionError]:
        today = self.deps.clock.today()
        result = self._execute("Create", lambda: self.deps.invoices.insert(draft, today))
        if isinstance(result, Success):
            log.info(
                "invoice_created",
                customer_id=draft.customer_id.value,
                amount_in_cents=draft.amount.value,
                status=draft.status.value,
                date=today.isoformat(),
            )
        return result

    def _update(
        self, invoice_id: InvoiceId, draft: InvoiceDraft
    ) -> Result[int, InvoiceActionError]:
        result = self._execute("Update", lambda: self.deps.invoices.update(invoice_id, draft))
        if isinstance(result, Success) and result.unwrap() == 0:
            log.info("invoice_update_missed", invoice_id=invoice_id.value)
            return Failure(
                InvoiceNotFound(message=NOT_FOUND_MESSAGE, invoice_id=invoice_id.value)
            )
        if isinstance(result, Success):
            log.info("invoice_updated", invoice_id=invoice_id.value)
        return result

    def _execute(
        self, action: str, statement: Callable[[], Result[T, InvoiceActionError]]
    ) -> Result[T, InvoiceActionError]:
        try:
            result = statement()
        except Exception as exc:  # noqa: BLE001
            log.error("invoice_store_raised", action=action.lower(), exc_info=exc)
            result = Failure(PersistenceError(message=repr(exc)))
        return flow(result, alt(_masked(action)))

    def _invalidate_and_redirect(self) -> Redirect:
        self.deps.invalidator.invalidate(self.deps.invoices_path)
        return self.deps.redirector.redirect(self.deps.invoices_path)


def _masked(action: str) -> Callable[[InvoiceActionError], InvoiceActionError]:
    """Replace store-level detail with a stable user-facing message."""

    def mask(err: InvoiceActionError) -> InvoiceActionError:
        if isinstance(err, (ValidationError, InvoiceNotFound)):
            return err
        # the cause was logged where the store failed
        return PersistenceError(message=f"Database Error: Failed to {action} Invoice.")

    return mask
