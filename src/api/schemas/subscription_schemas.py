# This file defines request and response contracts for subscription endpoints.
# It exists so body shape rules like a non-empty service name and a positive price are checked before the service runs.
# Period strings stay plain strings here; their format is a business rule enforced by the service.
# Response models serialize snake_case fields and omit optional values that are absent.

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.api.domain import NewSubscription

# Largest value the INTEGER price column holds.
MAX_PRICE = 2_147_483_647


class SubscriptionRequest(BaseModel):
    """Body accepted by create and update endpoints."""

    model_config = ConfigDict(extra="ignore")

    service_name: str = Field(min_length=1)
    price: int = Field(gt=0, le=MAX_PRICE)
    user_id: UUID
    start_date: str
    end_date: str | None = None

    def to_domain(self) -> NewSubscription:
        return NewSubscription(
            service_name=self.service_name,
            price=self.price,
            user_id=self.user_id,
            start_date=self.start_date,
            end_date=self.end_date,
        )


class SubscriptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    service_name: str
    price: int
    user_id: UUID
    start_date: str
    end_date: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SummaryCostResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_cost: int = Field(ge=0)
    period: str
    user_id: UUID | None = None
    service_name: str | None = None
    subscriptions: list[SubscriptionResponse]


class MessageResponse(BaseModel):
    message: str
