"""Shared pytest fixtures and fakes for invoice_actions tests."""

from __future__ import annotations

from collections.abc import Generator
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Mapping

import pytest
from sqlalchemy.engine import Engine

from invoice_actions.adapters.outbound.in_memory_invoices import InMemoryInvoiceRepository
from invoice_actions.adapters.outbound.route_redirector import RouteRedirector
from invoice_actions.adapters.outbound.sql_schema import (
    create_db_engine,
    init_database,
    seed_customers,
)
from invoice_actions.core.domain.model.invoice import Customer, CustomerId
from invoice_actions.core.domain.service.authentication_service import (
    AuthenticationDeps,
    AuthenticationService,
)
from invoice_actions.core.domain.service.invoice_mutation_service import (
    InvoiceMutationDeps,
    InvoiceMutationService,
)

TODAY = date(2026, 10, 19)

CUSTOMERS = (
    Customer(CustomerId("c1"), "Evil Rabbit", "evil@rabbit.com"),
    Customer(CustomerId("c2"), "Delba de Oliveira", "delba@oliveira.com"),
)


@dataclass(frozen=True)
class FixedClock:
    day: date = TODAY

    def today(self) -> date:
        return self.day


@dataclass
class RecordingInvalidator:
    paths: list[str] = field(default_factory=list)
    calls: list[str] | None = None

    def invalidate(self, path: str) -> None:
        self.paths.append(path)
        if self.calls is not None:
            self.calls.append(f"invalidate:{path}")


@dataclass
class ScriptedIdentityProvider:
    """Raises ``error`` on sign-in when set; records every call."""

    error: BaseException | None = None
    calls: list[str] = field(default_factory=list)
    last_credentials: Mapping[str, str] | None = None

    def sign_in(self, strategy: str, credentials: Mapping[str, str]) -> None:
        self.calls.append(f"sign_in:{strategy}")
        self.last_credentials = dict(credentials)
        if self.error is not None:
            raise self.error

    def sign_out(self) -> None:
        self.calls.append("sign_out")


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def repository() -> InMemoryInvoiceRepository:
    return InMemoryInvoiceRepository(customer_ids={c.customer_id.value for c in CUSTOMERS})


@pytest.fixture
def invalidator() -> RecordingInvalidator:
    return RecordingInvalidator()


@pytest.fixture
def mutations(
    repository: InMemoryInvoiceRepository,
    invalidator: RecordingInvalidator,
    clock: FixedClock,
) -> InvoiceMutationService:
    return InvoiceMutationService(
        InvoiceMutationDeps(
            invoices=repository,
            invalidator=invalidator,
            redirector=RouteRedirector(),
            clock=clock,
        )
    )


@pytest.fixture
def identity() -> ScriptedIdentityProvider:
    return ScriptedIdentityProvider()


@pytest.fixture
def auth(identity: ScriptedIdentityProvider) -> AuthenticationService:
    return AuthenticationService(
        AuthenticationDeps(
            identity=identity,
            redirector=RouteRedirector(),
            invalidator=RecordingInvalidator(calls=identity.calls),
        )
    )


@pytest.fixture
def db_engine(tmp_path: Path) -> Generator[Engine, None, None]:
    """SQLite engine on a temp file with tables created and customers seeded."""
    engine = create_db_engine(f"sqlite:///{tmp_path / 'invoices.db'}")
    init_database(engine)
    seed_customers(engine, CUSTOMERS)
    try:
        yield engine
    finally:
        engine.dispose()
