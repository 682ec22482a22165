from __future__ import annotations

import sys

import uvicorn

from invoice_actions.adapters.inbound.cli import USAGE, run_cli
from invoice_actions.bootstrap import build_usecases
from invoice_actions.config.logging import configure_logging
from invoice_actions.config.settings import Settings


def serve(settings: Settings) -> None:
    uvicorn.run(
        "invoice_actions.bootstrap:create_asgi_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=False,
    )


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    if not argv:
        print(USAGE)
        return 2

    settings = Settings()
    if argv[0] == "serve":
        serve(settings)
        return 0

    configure_logging(verbose=settings.verbose, log_json=settings.log_json)
    usecases = build_usecases(settings)
    return run_cli(usecases.invoices, argv)


if __name__ == "__main__":
    raise SystemExit(main())
