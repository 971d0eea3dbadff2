# This file declares the relational table backing subscription storage.
# SQLAlchemy Core renders it for Postgres in production and SQLite in tests.

from __future__ import annotations

from sqlalchemy import Column, DateTime, Index, Integer, MetaData, String, Table, Uuid

PERIOD_COLUMN_LENGTH = 7


def build_subscriptions_table(metadata: MetaData, table_name: str = "subscriptions") -> Table:
    """Return the subscriptions table bound to `metadata`."""

    return Table(
        table_name,
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("service_name", String(255), nullable=False),
        Column("price", Integer, nullable=False),
        Column("user_id", Uuid(as_uuid=True), nullable=False),
        Column("start_date", String(PERIOD_COLUMN_LENGTH), nullable=False),
        Column("end_date", String(PERIOD_COLUMN_LENGTH), nullable=True),
        Column("created_at", DateTime(timezone=True), nullable=False),
        Column("updated_at", DateTime(timezone=True), nullable=False),
        Index(f"ix_{table_name}_user_id", "user_id"),
        Index(f"ix_{table_name}_service_name", "service_name"),
    )
