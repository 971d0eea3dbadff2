# This file defines the subscription entities shared by the service and storage layers.
# Routers convert these into pydantic response models; repositories build them from rows.

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

ALL_TIME_PERIOD_LABEL = "all time"


@dataclass(frozen=True)
class NewSubscription:
    """Subscription fields supplied by a client, without storage identity."""

    service_name: str
    price: int
    user_id: UUID
    start_date: str
    end_date: str | None = None


@dataclass(frozen=True)
class Subscription:
    id: int
    service_name: str
    price: int
    user_id: UUID
    start_date: str
    end_date: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_new(cls, subscription_id: int, new: NewSubscription) -> Subscription:
        return cls(
            id=subscription_id,
            service_name=new.service_name,
            price=new.price,
            user_id=new.user_id,
            start_date=new.start_date,
            end_date=new.end_date,
        )


@dataclass(frozen=True)
class CostSummary:
    total_cost: int
    period: str
    user_id: UUID | None = None
    service_name: str | None = None
    subscriptions: list[Subscription] = field(default_factory=list)
