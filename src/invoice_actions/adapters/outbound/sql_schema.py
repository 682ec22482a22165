"""SQLAlchemy Core tables for the invoices store.

Invoice ids are generated on insert and never supplied by a form.
Amounts are integer cents.
"""

from __future__ import annotations

from typing import Any, Iterable
from uuid import uuid4

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    ForeignKey,
    Integer,
    MetaData,
    Table,
    Text,
    create_engine,
    event,
    insert,
    select,
)
from sqlalchemy.engine import Engine

from invoice_actions.core.domain.model.invoice import Customer

metadata = MetaData()

customers = Table(
    "customers",
    metadata,
    Column("id", Text, primary_key=True),
    Column("name", Text, nullable=False),
    Column("email", Text, nullable=False),
)

invoices = Table(
    "invoices",
    metadata,
    Column("id", Text, primary_key=True, default=lambda: str(uuid4())),
    Column("customer_id", Text, ForeignKey("customers.id"), nullable=False),
    Column("amount", Integer, nullable=False),
    Column("status", Text, nullable=False),
    Column("date", Date, nullable=False),
    CheckConstraint("amount > 0", name="ck_invoices_amount_positive"),
    CheckConstraint("status IN ('pending', 'paid')", name="ck_invoices_status"),
)


def create_db_engine(database_url: str) -> Engine:
    """Create an engine; SQLite connections get foreign keys enabled."""
    engine = create_engine(database_url, echo=False)

    if engine.dialect.name == "sqlite":

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def init_database(engine: Engine) -> None:
    """Create missing tables. Safe to call on an existing database."""
    metadata.create_all(engine)


def seed_customers(engine: Engine, rows: Iterable[Customer]) -> int:
    """Insert customers that are not present yet. Returns how many were added."""
    added = 0
    with engine.begin() as conn:
        existing = set(conn.execute(select(customers.c.id)).scalars())
        for c in rows:
            if c.customer_id.value in existing:
                continue
            conn.execute(
                insert(customers).values(id=c.customer_id.value, name=c.name, email=c.email)
            )
            added += 1
    return added
