# This file implements the subscription business operations behind the HTTP routes.
# It exists so period validation and cost aggregation live in one place, independent of transport.
# The service holds no state besides its repository, so one instance is shared across requests.
# Storage errors pass through unchanged; this layer only adds validation and aggregation.

from __future__ import annotations

import logging
from uuid import UUID

from src.api.domain import ALL_TIME_PERIOD_LABEL, CostSummary, NewSubscription, Subscription
from src.api.periods import validate_period
from src.api.repositories.base import SubscriptionRepository
from src.common.exceptions import ValidationError

logger = logging.getLogger(__name__)


def _validate_dates(start_date: str, end_date: str | None) -> None:
    validate_period(start_date, field_name="start_date")
    if end_date is not None:
        validate_period(end_date, field_name="end_date")


class SubscriptionService:
    """CRUD and cost aggregation over subscription records."""

    def __init__(self, *, repository: SubscriptionRepository) -> None:
        self.repository = repository

    def create(self, request: NewSubscription | None) -> Subscription:
        if request is None:
            raise ValidationError("subscription request cannot be nil")
        _validate_dates(request.start_date, request.end_date)

        created = self.repository.create(request)
        logger.info(
            "Created subscription id=%s service=%s user=%s",
            created.id,
            created.service_name,
            created.user_id,
        )
        return created

    def get_by_id(self, subscription_id: int) -> Subscription:
        return self.repository.get_by_id(subscription_id)

    def get_all(self) -> list[Subscription]:
        return self.repository.get_all()

    def update(self, subscription: Subscription | None) -> Subscription:
        if subscription is None:
            raise ValidationError("subscription cannot be nil")
        _validate_dates(subscription.start_date, subscription.end_date)

        updated = self.repository.update(subscription)
        logger.info("Updated subscription id=%s", updated.id)
        return updated

    def delete(self, subscription_id: int) -> None:
        self.repository.delete(subscription_id)
        logger.info("Deleted subscription id=%s", subscription_id)

    def calculate_total_cost(
        self,
        *,
        user_id: UUID | None = None,
        service_name: str | None = None,
        period: str | None = None,
    ) -> CostSummary:
        """Sum prices over subscriptions matching every supplied filter.

        A subscription counts toward ``period`` when it started on or before it
        and has no end date or ends on or after it. Periods are compared as
        ``MM-YYYY`` strings, not as calendar months.
        """

        if period is not None:
            validate_period(period, field_name="period")

        subscriptions = self.repository.get_by_filters(
            user_id=user_id,
            service_name=service_name,
            period=period,
        )
        total_cost = sum(subscription.price for subscription in subscriptions)
        logger.debug(
            "Cost summary user=%s service=%s period=%s matched=%d total=%d",
            user_id,
            service_name,
            period,
            len(subscriptions),
            total_cost,
        )

        return CostSummary(
            total_cost=total_cost,
            period=period if period is not None else ALL_TIME_PERIOD_LABEL,
            user_id=user_id,
            service_name=service_name,
            subscriptions=subscriptions,
        )
