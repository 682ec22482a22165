from __future__ import annotations

import json
from typing import Any, Sequence

from returns.result import Success

from invoice_actions.core.domain.service.invoice_mutation_service import (
    InvoiceMutationService,
)
from invoice_actions.core.ports.inbound.invoice_mutations import (
    ActionState,
    CreateInvoiceCommand,
    DeleteInvoiceCommand,
    UpdateInvoiceCommand,
)

USAGE = (
    "usage: invoice-actions create '<json>'\n"
    "       invoice-actions update <invoice_id> '<json>'\n"
    "       invoice-actions delete <invoice_id>\n"
    "       invoice-actions serve"
)


def run_cli(service: InvoiceMutationService, argv: Sequence[str]) -> int:
    """
    Runs one mutation against the configured store.
    Example:
      create '{"customerId":"c1","amount":"49.99","status":"pending"}'
    """
    action, *args = argv
    try:
        if action == "create" and len(args) == 1:
            result = service.create_invoice(CreateInvoiceCommand(form=_parse_form(args[0])))
        elif action == "update" and len(args) == 2:
            result = service.update_invoice(
                UpdateInvoiceCommand(invoice_id=args[0], form=_parse_form(args[1]))
            )
        elif action == "delete" and len(args) == 1:
            result = service.delete_invoice(DeleteInvoiceCommand(invoice_id=args[0]))
        else:
            print(USAGE)
            return 2
    except ValueError as e:
        print(f"invalid_input: {e}")
        return 2

    if isinstance(result, Success):
        print("[ok]", _describe(result.unwrap()))
        return 0

    state = ActionState.from_error(result.failure())
    print("[ng]", state.message)
    for name, messages in (state.errors or {}).items():
        for message in messages:
            print(f"  {name}: {message}")
    return 1


def _parse_form(raw: str) -> dict[str, str]:
    payload: Any = json.loads(raw)
    if not isinstance(payload, dict):
        raise ValueError("form must be a JSON object")
    # form posts only carry strings
    return {str(k): str(v) for k, v in payload.items() if v is not None}


def _describe(value: Any) -> str:
    location = getattr(value, "location", None)
    if location is not None:
        return f"redirect {location}"
    return str(getattr(value, "message", value))
