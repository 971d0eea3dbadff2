# This file wraps database access so repositories can run SQLAlchemy Core statements safely.
# It exists to keep connection and transaction handling out of repository and router code.
# Statements carry their own bound values and results come back as plain dictionaries.
# Keeping this layer small makes query behavior easier to audit and troubleshoot.

from __future__ import annotations

import re
from typing import Any

from sqlalchemy import MetaData, create_engine, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.base import Executable

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


class DatabaseClient:
    """Minimal SQLAlchemy wrapper for API read/write access."""

    def __init__(self, *, database_url: str) -> None:
        self._engine: Engine = create_engine(database_url, pool_pre_ping=True, future=True)

    @property
    def engine(self) -> Engine:
        return self._engine

    def can_connect(self) -> bool:
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            return False

    def table_exists(self, table_name: str) -> bool:
        self._validate_identifier(table_name)
        return inspect(self._engine).has_table(table_name)

    def create_tables(self, metadata: MetaData) -> None:
        metadata.create_all(self._engine, checkfirst=True)

    def fetch_all(self, statement: Executable) -> list[dict[str, Any]]:
        with self._engine.connect() as connection:
            rows = connection.execute(statement).mappings().all()
        return [dict(row) for row in rows]

    def fetch_one(self, statement: Executable) -> dict[str, Any] | None:
        with self._engine.connect() as connection:
            row = connection.execute(statement).mappings().first()
        return dict(row) if row is not None else None

    def execute(self, statement: Executable) -> int:
        """Run a write statement in its own transaction and return the affected row count."""

        with self._engine.begin() as connection:
            result = connection.execute(statement)
            return result.rowcount

    def execute_returning(self, statement: Executable) -> dict[str, Any] | None:
        """Run a write statement with a RETURNING clause and return the first row, if any."""

        with self._engine.begin() as connection:
            row = connection.execute(statement).mappings().first()
            return dict(row) if row is not None else None

    def dispose(self) -> None:
        self._engine.dispose()

    def _validate_identifier(self, identifier: str) -> str:
        if not _IDENTIFIER_RE.match(identifier):
            raise ValueError(f"Unsafe SQL identifier: {identifier!r}")
        return identifier
