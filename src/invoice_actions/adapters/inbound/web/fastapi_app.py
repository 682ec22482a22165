from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel
from returns.result import Success
from starlette.concurrency import run_in_threadpool

from invoice_actions.adapters.outbound.view_cache import InMemoryViewCache
from invoice_actions.core.domain.model.errors import (
    AuthenticationError,
    ErrorKind,
    InvoiceActionError,
    InvoiceNotFound,
    PersistenceError,
    ValidationError,
)
from invoice_actions.core.ports.inbound.authenticate import (
    AuthenticateCommand,
    AuthenticateUseCase,
    LogoutUseCase,
)
from invoice_actions.core.ports.inbound.invoice_mutations import (
    ActionState,
    CreateInvoiceCommand,
    CreateInvoiceUseCase,
    DeleteInvoiceCommand,
    DeleteInvoiceUseCase,
    UpdateInvoiceCommand,
    UpdateInvoiceUseCase,
)
from invoice_actions.core.ports.inbound.list_invoices import ListInvoicesUseCase

# ---- HTTP DTOs (adapter layer) ---------------------------------------------


class ActionStateResponse(BaseModel):
    message: str
    kind: str | None = None
    errors: dict[str, list[str]] | None = None


class MessageResponse(BaseModel):
    message: str


class InvoiceOut(BaseModel):
    id: str
    customer_id: str
    amount: int
    status: str
    date: str


class InvoiceListResponse(BaseModel):
    items: list[InvoiceOut]


class ErrorResponse(BaseModel):
    type: str
    message: str


def _status_of(err: InvoiceActionError) -> int:
    if isinstance(err, ValidationError):
        return 400

    if isinstance(err, InvoiceNotFound):
        return 404

    if isinstance(err, AuthenticationError):
        return 401 if err.kind is ErrorKind.INVALID_CREDENTIALS else 500

    if isinstance(err, PersistenceError):
        return 500

    return 500


def _state_response(err: InvoiceActionError) -> JSONResponse:
    state = ActionState.from_error(err)
    body = ActionStateResponse(
        message=state.message,
        kind=state.kind.value if state.kind else None,
        errors={k: list(v) for k, v in state.errors.items()} if state.errors else None,
    )
    return JSONResponse(
        status_code=_status_of(err), content=body.model_dump(exclude_none=True)
    )


async def _form_of(request: Request) -> dict[str, str]:
    form = await request.form()
    # uploads are not part of any invoice form
    return {k: v for k, v in form.items() if isinstance(v, str)}


def create_app(
    create_invoice_uc: CreateInvoiceUseCase,
    update_invoice_uc: UpdateInvoiceUseCase,
    delete_invoice_uc: DeleteInvoiceUseCase,
    authenticate_uc: AuthenticateUseCase,
    logout_uc: LogoutUseCase,
    list_invoices_uc: ListInvoicesUseCase,
    view_cache: InMemoryViewCache,
    invoices_path: str = "/dashboard/invoices",
) -> FastAPI:
    app = FastAPI(title="invoice_actions")

    # --- exception handlers ---------------------------------------------------

    @app.exception_handler(Exception)
    async def handle_unexpected(_: Request, exc: Exception) -> JSONResponse:
        body = ErrorResponse(type=type(exc).__name__, message="internal server error")
        return JSONResponse(status_code=500, content=body.model_dump())

    # --- routes --------------------------------------------------------------

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get(invoices_path, response_model=InvoiceListResponse)
    async def list_invoices() -> Any:
        cached = view_cache.get(invoices_path)
        if cached is not None:
            return cached

        # a mutation landing during the read makes this result stale
        generation = view_cache.generation(invoices_path)
        result = await run_in_threadpool(list_invoices_uc.list_invoices)
        if not isinstance(result, Success):
            return _state_response(result.failure())

        body = InvoiceListResponse(
            items=[
                InvoiceOut(
                    id=v.id,
                    customer_id=v.customer_id,
                    amount=v.amount,
                    status=v.status,
                    date=v.date,
                )
                for v in result.unwrap()
            ]
        ).model_dump()
        view_cache.put(invoices_path, body, generation)
        return body

    @app.post(
        invoices_path,
        status_code=303,
        responses={
            400: {"model": ActionStateResponse},
            500: {"model": ActionStateResponse},
        },
    )
    async def create_invoice(request: Request) -> Any:
        cmd = CreateInvoiceCommand(form=await _form_of(request))
        result = await run_in_threadpool(create_invoice_uc.create_invoice, cmd)

        if isinstance(result, Success):
            return RedirectResponse(result.unwrap().location, status_code=303)
        return _state_response(result.failure())

    @app.post(
        f"{invoices_path}/{{invoice_id}}/edit",
        status_code=303,
        responses={
            400: {"model": ActionStateResponse},
            404: {"model": ActionStateResponse},
            500: {"model": ActionStateResponse},
        },
    )
    async def update_invoice(invoice_id: str, request: Request) -> Any:
        cmd = UpdateInvoiceCommand(invoice_id=invoice_id, form=await _form_of(request))
        result = await run_in_threadpool(update_invoice_uc.update_invoice, cmd)

        if isinstance(result, Success):
            return RedirectResponse(result.unwrap().location, status_code=303)
        return _state_response(result.failure())

    @app.post(
        f"{invoices_path}/{{invoice_id}}/delete",
        response_model=MessageResponse,
        responses={500: {"model": MessageResponse}},
    )
    async def delete_invoice(invoice_id: str) -> Any:
        cmd = DeleteInvoiceCommand(invoice_id=invoice_id)
        result = await run_in_threadpool(delete_invoice_uc.delete_invoice, cmd)

        if isinstance(result, Success):
            return MessageResponse(message=result.unwrap().message)
        err = result.failure()
        return JSONResponse(
            status_code=_status_of(err), content=MessageResponse(message=err.message).model_dump()
        )

    @app.post(
        "/login",
        status_code=303,
        responses={401: {"model": MessageResponse}, 500: {"model": MessageResponse}},
    )
    async def login(request: Request) -> Any:
        cmd = AuthenticateCommand(form=await _form_of(request))
        # unclassified failures propagate to handle_unexpected
        result = await run_in_threadpool(authenticate_uc.authenticate, cmd)

        if isinstance(result, Success):
            return RedirectResponse(result.unwrap().location, status_code=303)
        err = result.failure()
        return JSONResponse(
            status_code=_status_of(err), content=MessageResponse(message=err.message).model_dump()
        )

    @app.post("/logout", status_code=204)
    async def logout() -> Response:
        await run_in_threadpool(logout_uc.logout)
        return Response(status_code=204)

    return app
