from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Sequence

import structlog
from returns.result import Failure, Result, Success
from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from invoice_actions.adapters.outbound.sql_schema import invoices
from invoice_actions.core.domain.model.errors import InvoiceActionError, PersistenceError
from invoice_actions.core.domain.model.invoice import (
    AmountInCents,
    CustomerId,
    Invoice,
    InvoiceDraft,
    InvoiceId,
    InvoiceStatus,
)
from invoice_actions.core.ports.outbound.invoices import InvoiceRepository

log = structlog.get_logger(__name__)


@dataclass
class SqlInvoiceRepository(InvoiceRepository):
    """One parameterised statement per call, each in its own transaction."""

    engine: Engine

    def insert(self, draft: InvoiceDraft, on: date) -> Result[None, InvoiceActionError]:
        stmt = insert(invoices).values(
            customer_id=draft.customer_id.value,
            amount=draft.amount.value,
            status=draft.status.value,
            date=on,
        )
        try:
            with self.engine.begin() as conn:
                conn.execute(stmt)
        except SQLAlchemyError as exc:
            return Failure(_store_error("insert", exc))
        return Success(None)

    def update(
        self, invoice_id: InvoiceId, draft: InvoiceDraft
    ) -> Result[int, InvoiceActionError]:
        stmt = (
            update(invoices)
            .where(invoices.c.id == invoice_id.value)
            .values(
                customer_id=draft.customer_id.value,
                amount=draft.amount.value,
                status=draft.status.value,
            )
        )
        try:
            with self.engine.begin() as conn:
                rows = conn.execute(stmt).rowcount
        except SQLAlchemyError as exc:
            return Failure(_store_error("update", exc))
        return Success(rows)

    def delete(self, invoice_id: InvoiceId) -> Result[int, InvoiceActionError]:
        stmt = delete(invoices).where(invoices.c.id == invoice_id.value)
        try:
            with self.engine.begin() as conn:
                rows = conn.execute(stmt).rowcount
        except SQLAlchemyError as exc:
            return Failure(_store_error("delete", exc))
        return Success(rows)

    def list(self) -> Result[Sequence[Invoice], InvoiceActionError]:
        stmt = select(invoices).order_by(invoices.c.date.desc(), invoices.c.id)
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(stmt).mappings().all()
        except SQLAlchemyError as exc:
            return Failure(_store_error("select", exc))
        return Success(
            tuple(
                Invoice(
                    invoice_id=InvoiceId(r["id"]),
                    customer_id=CustomerId(r["customer_id"]),
                    amount=AmountInCents(r["amount"]),
                    status=InvoiceStatus(r["status"]),
                    date=r["date"],
                )
                for r in rows
            )
        )


def _store_error(statement: str, exc: SQLAlchemyError) -> PersistenceError:
    log.error("invoice_statement_failed", statement=statement, exc_info=exc)
    return PersistenceError(message=f"{statement} failed: {type(exc).__name__}")
