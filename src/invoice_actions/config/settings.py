"""Runtime settings for the invoice actions service.

Priority chain (highest to lowest):
  1. Init kwargs, e.g. overrides passed by tests or the CLI
  2. Env vars with the ``INVOICE_ACTIONS_`` prefix
  3. ``.env`` file in the working directory
  4. Code defaults
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Frozen settings object built once by :func:`invoice_actions.bootstrap.build_usecases`.

    Attributes:
        database_url: SQLAlchemy URL of the invoices store.
        invoices_path: Listing route; invalidated and redirected to after a mutation.
        dashboard_path: Authenticated landing route; invalidated on logout.
        users: email -> scrypt password hash for the credentials provider.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="INVOICE_ACTIONS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_url: str = "sqlite:///invoices.db"
    invoices_path: str = "/dashboard/invoices"
    dashboard_path: str = "/dashboard"
    root_path: str = ""
    users: dict[str, str] = Field(default_factory=dict)

    host: str = "0.0.0.0"
    port: int = 8000
    verbose: bool = False
    log_json: bool = False
