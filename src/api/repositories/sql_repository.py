# This file implements subscription storage on a relational database through SQLAlchemy Core.
# It exists so the service layer never sees SQL, driver exceptions, or row mappings.
# Filters are appended as optional conditions so one query shape serves every cost request.
# Driver failures are logged in full and surfaced as StorageError with a generic message.

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from sqlalchemy import MetaData, Table, delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.elements import ColumnElement

from src.api.db_access import DatabaseClient
from src.api.domain import NewSubscription, Subscription
from src.api.repositories.base import SubscriptionRepository
from src.api.repositories.tables import build_subscriptions_table
from src.common.exceptions import NotFoundError, StorageError

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class SqlSubscriptionRepository(SubscriptionRepository):
    """Subscription repository backed by a SQL table."""

    def __init__(self, *, db: DatabaseClient, table_name: str = "subscriptions") -> None:
        self.db = db
        self.metadata = MetaData()
        self.table: Table = build_subscriptions_table(self.metadata, table_name)

    def ensure_schema(self) -> None:
        """Create the subscriptions table and its indexes when they are missing."""

        try:
            self.db.create_tables(self.metadata)
        except SQLAlchemyError as exc:
            logger.exception("Creating table %s failed", self.table.name)
            raise StorageError("failed to initialise subscription storage") from exc

    def create(self, new: NewSubscription) -> Subscription:
        now = _utc_now()
        statement = (
            insert(self.table)
            .values(
                service_name=new.service_name,
                price=new.price,
                user_id=new.user_id,
                start_date=new.start_date,
                end_date=new.end_date,
                created_at=now,
                updated_at=now,
            )
            .returning(*self.table.c)
        )
        try:
            row = self.db.execute_returning(statement)
        except SQLAlchemyError as exc:
            logger.exception("Insert into %s failed", self.table.name)
            raise StorageError("failed to create subscription") from exc
        if row is None:
            raise StorageError("failed to create subscription")
        return self._to_subscription(row)

    def get_by_id(self, subscription_id: int) -> Subscription:
        statement = select(self.table).where(self.table.c.id == subscription_id)
        try:
            row = self.db.fetch_one(statement)
        except SQLAlchemyError as exc:
            logger.exception("Lookup of subscription %s failed", subscription_id)
            raise StorageError("failed to get subscription") from exc
        if row is None:
            raise NotFoundError(subscription_id)
        return self._to_subscription(row)

    def get_all(self) -> list[Subscription]:
        return self._fetch_many(conditions=[], operation="get subscriptions")

    def update(self, subscription: Subscription) -> Subscription:
        statement = (
            update(self.table)
            .where(self.table.c.id == subscription.id)
            .values(
                service_name=subscription.service_name,
                price=subscription.price,
                user_id=subscription.user_id,
                start_date=subscription.start_date,
                end_date=subscription.end_date,
                updated_at=_utc_now(),
            )
            .returning(*self.table.c)
        )
        try:
            row = self.db.execute_returning(statement)
        except SQLAlchemyError as exc:
            logger.exception("Update of subscription %s failed", subscription.id)
            raise StorageError("failed to update subscription") from exc
        if row is None:
            raise NotFoundError(subscription.id)
        return self._to_subscription(row)

    def delete(self, subscription_id: int) -> None:
        statement = delete(self.table).where(self.table.c.id == subscription_id)
        try:
            affected = self.db.execute(statement)
        except SQLAlchemyError as exc:
            logger.exception("Delete of subscription %s failed", subscription_id)
            raise StorageError("failed to delete subscription") from exc
        if affected == 0:
            raise NotFoundError(subscription_id)

    def get_by_filters(
        self,
        *,
        user_id: UUID | None = None,
        service_name: str | None = None,
        period: str | None = None,
    ) -> list[Subscription]:
        columns = self.table.c
        conditions: list[ColumnElement[bool]] = []

        if user_id is not None:
            conditions.append(columns.user_id == user_id)
        if service_name:
            conditions.append(columns.service_name == service_name)
        if period:
            conditions.append(columns.start_date <= period)
            conditions.append(columns.end_date.is_(None) | (columns.end_date >= period))

        return self._fetch_many(conditions=conditions, operation="get filtered subscriptions")

    def _fetch_many(
        self, *, conditions: list[ColumnElement[bool]], operation: str
    ) -> list[Subscription]:
        statement = (
            select(self.table)
            .where(*conditions)
            .order_by(self.table.c.created_at.desc(), self.table.c.id.desc())
        )
        try:
            rows = self.db.fetch_all(statement)
        except SQLAlchemyError as exc:
            logger.exception("Query on %s failed", self.table.name)
            raise StorageError(f"failed to {operation}") from exc
        return [self._to_subscription(row) for row in rows]

    @staticmethod
    def _to_subscription(row: dict[str, Any]) -> Subscription:
        user_id = row["user_id"]
        return Subscription(
            id=int(row["id"]),
            service_name=str(row["service_name"]),
            price=int(row["price"]),
            user_id=user_id if isinstance(user_id, UUID) else UUID(str(user_id)),
            start_date=str(row["start_date"]),
            end_date=row["end_date"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
