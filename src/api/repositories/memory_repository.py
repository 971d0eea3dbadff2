# This file implements subscription storage in process memory.
# It backs local runs without a database and keeps service tests free of SQL setup.
# Every call holds one lock so concurrent requests see atomic reads and writes.

from __future__ import annotations

import itertools
import threading
from collections.abc import Iterable
from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID

from src.api.domain import NewSubscription, Subscription
from src.api.repositories.base import SubscriptionRepository, is_active_in_period
from src.common.exceptions import NotFoundError


class InMemorySubscriptionRepository(SubscriptionRepository):
    """Dictionary-backed repository with database-like id and timestamp assignment."""

    def __init__(self) -> None:
        self._rows: dict[int, Subscription] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def create(self, new: NewSubscription) -> Subscription:
        with self._lock:
            now = datetime.now(tz=UTC)
            stored = replace(
                Subscription.from_new(next(self._ids), new),
                created_at=now,
                updated_at=now,
            )
            self._rows[stored.id] = stored
            return stored

    def get_by_id(self, subscription_id: int) -> Subscription:
        with self._lock:
            stored = self._rows.get(subscription_id)
        if stored is None:
            raise NotFoundError(subscription_id)
        return stored

    def get_all(self) -> list[Subscription]:
        with self._lock:
            return self._newest_first(self._rows.values())

    def update(self, subscription: Subscription) -> Subscription:
        with self._lock:
            existing = self._rows.get(subscription.id)
            if existing is None:
                raise NotFoundError(subscription.id)
            stored = replace(
                subscription,
                created_at=existing.created_at,
                updated_at=datetime.now(tz=UTC),
            )
            self._rows[stored.id] = stored
            return stored

    def delete(self, subscription_id: int) -> None:
        with self._lock:
            if self._rows.pop(subscription_id, None) is None:
                raise NotFoundError(subscription_id)

    def get_by_filters(
        self,
        *,
        user_id: UUID | None = None,
        service_name: str | None = None,
        period: str | None = None,
    ) -> list[Subscription]:
        with self._lock:
            rows = list(self._rows.values())

        if user_id is not None:
            rows = [row for row in rows if row.user_id == user_id]
        if service_name:
            rows = [row for row in rows if row.service_name == service_name]
        if period:
            rows = [row for row in rows if is_active_in_period(row, period)]
        return self._newest_first(rows)

    @staticmethod
    def _newest_first(rows: Iterable[Subscription]) -> list[Subscription]:
        return sorted(rows, key=lambda row: (row.created_at, row.id), reverse=True)
