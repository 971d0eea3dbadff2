"""Subscription repository interface.

Defines the persistence contract consumed by ``SubscriptionService``. Adapters
signal a missing row with ``NotFoundError`` and wrap backend failures in
``StorageError``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from uuid import UUID

from src.api.domain import NewSubscription, Subscription


class SubscriptionRepository(ABC):
    """Storage gateway for subscription records."""

    @abstractmethod
    def create(self, new: NewSubscription) -> Subscription:
        """Persist a subscription and return it with id and timestamps assigned."""

    @abstractmethod
    def get_by_id(self, subscription_id: int) -> Subscription:
        """Return one subscription or raise ``NotFoundError``."""

    @abstractmethod
    def get_all(self) -> list[Subscription]:
        """Return every subscription, most recently created first."""

    @abstractmethod
    def update(self, subscription: Subscription) -> Subscription:
        """Overwrite mutable fields, refresh ``updated_at`` and return the stored row.

        Raises ``NotFoundError`` when no row has ``subscription.id``.
        """

    @abstractmethod
    def delete(self, subscription_id: int) -> None:
        """Hard-delete one subscription or raise ``NotFoundError``."""

    @abstractmethod
    def get_by_filters(
        self,
        *,
        user_id: UUID | None = None,
        service_name: str | None = None,
        period: str | None = None,
    ) -> list[Subscription]:
        """Return subscriptions matching every supplied filter, newest first.

        The period filter keeps rows where ``start_date <= period`` and
        ``end_date`` is null or ``>= period``, compared as plain strings.
        """


def is_active_in_period(subscription: Subscription, period: str) -> bool:
    """Apply the period inclusion rule with string comparison."""

    if subscription.start_date > period:
        return False
    return subscription.end_date is None or subscription.end_date >= period
