from __future__ import annotations

from dataclasses import dataclass

from fastapi import FastAPI
from sqlalchemy.engine import Engine

from invoice_actions.adapters.inbound.web.fastapi_app import create_app
from invoice_actions.adapters.outbound.credentials_identity import CredentialsIdentityProvider
from invoice_actions.adapters.outbound.route_redirector import RouteRedirector
from invoice_actions.adapters.outbound.sql_invoices import SqlInvoiceRepository
from invoice_actions.adapters.outbound.sql_schema import create_db_engine, init_database
from invoice_actions.adapters.outbound.system_clock import SystemClock
from invoice_actions.adapters.outbound.view_cache import InMemoryViewCache
from invoice_actions.config.logging import configure_logging
from invoice_actions.config.settings import Settings
from invoice_actions.core.domain.service.authentication_service import (
    AuthenticationDeps,
    AuthenticationService,
)
from invoice_actions.core.domain.service.invoice_mutation_service import (
    InvoiceMutationDeps,
    InvoiceMutationService,
)
from invoice_actions.core.domain.service.list_invoices_service import (
    ListInvoicesDeps,
    ListInvoicesService,
)


@dataclass(frozen=True)
class UseCases:
    invoices: InvoiceMutationService
    auth: AuthenticationService
    list_invoices: ListInvoicesService
    view_cache: InMemoryViewCache
    settings: Settings


def build_usecases(settings: Settings | None = None, engine: Engine | None = None) -> UseCases:
    settings = settings or Settings()
    if engine is None:
        engine = create_db_engine(settings.database_url)
    init_database(engine)

    repository = SqlInvoiceRepository(engine)
    view_cache = InMemoryViewCache()
    redirector = RouteRedirector(root_path=settings.root_path)
    identity = CredentialsIdentityProvider(
        users={email.lower(): hashed for email, hashed in settings.users.items()}
    )

    invoices = InvoiceMutationService(
        InvoiceMutationDeps(
            invoices=repository,
            invalidator=view_cache,
            redirector=redirector,
            clock=SystemClock(),
            invoices_path=settings.invoices_path,
        )
    )
    auth = AuthenticationService(
        AuthenticationDeps(
            identity=identity,
            redirector=redirector,
            invalidator=view_cache,
            dashboard_path=settings.dashboard_path,
        )
    )
    list_invoices = ListInvoicesService(ListInvoicesDeps(invoices=repository))

    return UseCases(
        invoices=invoices,
        auth=auth,
        list_invoices=list_invoices,
        view_cache=view_cache,
        settings=settings,
    )


def build_app(usecases: UseCases) -> FastAPI:
    return create_app(
        create_invoice_uc=usecases.invoices,
        update_invoice_uc=usecases.invoices,
        delete_invoice_uc=usecases.invoices,
        authenticate_uc=usecases.auth,
        logout_uc=usecases.auth,
        list_invoices_uc=usecases.list_invoices,
        view_cache=usecases.view_cache,
        invoices_path=usecases.settings.invoices_path,
    )


def create_asgi_app() -> FastAPI:
    settings = Settings()
    configure_logging(verbose=settings.verbose, log_json=settings.log_json)
    return build_app(build_usecases(settings))
