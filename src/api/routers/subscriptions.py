# This file defines subscription CRUD and cost summary endpoints under the versioned API path.
# It exists so HTTP parsing stays separate from the business rules in the subscription service.
# The router converts request bodies into domain objects and domain results into response models.
# Domain errors propagate to the global handlers, which choose the HTTP status code.

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_subscription_service
from src.api.domain import Subscription
from src.api.error_handlers import APIError
from src.api.schemas.subscription_schemas import (
    MessageResponse,
    SubscriptionRequest,
    SubscriptionResponse,
    SummaryCostResponse,
)
from src.api.services.subscription_service import SubscriptionService

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])
SubscriptionServiceDep = Annotated[SubscriptionService, Depends(get_subscription_service)]


def _blank_to_none(value: str | None) -> str | None:
    if value is None or value == "":
        return None
    return value


def _parse_user_id(raw: str | None) -> uuid.UUID | None:
    value = _blank_to_none(raw)
    if value is None:
        return None
    try:
        return uuid.UUID(value)
    except ValueError as exc:
        raise APIError(
            status_code=400,
            error_code="INVALID_USER_ID",
            message="Invalid user_id format",
            details={"user_id": raw},
        ) from exc


@router.post(
    "",
    response_model=SubscriptionResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_subscription(
    body: SubscriptionRequest,
    service: SubscriptionServiceDep,
) -> SubscriptionResponse:
    created = service.create(body.to_domain())
    return SubscriptionResponse.model_validate(created)


@router.get("", response_model=list[SubscriptionResponse], response_model_exclude_none=True)
def list_subscriptions(service: SubscriptionServiceDep) -> list[SubscriptionResponse]:
    return [SubscriptionResponse.model_validate(item) for item in service.get_all()]


@router.get("/cost", response_model=SummaryCostResponse, response_model_exclude_none=True)
def subscriptions_cost(
    service: SubscriptionServiceDep,
    user_id: str | None = Query(default=None),
    service_name: str | None = Query(default=None),
    period: str | None = Query(default=None, description="Billing month as MM-YYYY."),
) -> SummaryCostResponse:
    summary = service.calculate_total_cost(
        user_id=_parse_user_id(user_id),
        service_name=_blank_to_none(service_name),
        period=_blank_to_none(period),
    )
    return SummaryCostResponse.model_validate(summary)


@router.get(
    "/{subscription_id}",
    response_model=SubscriptionResponse,
    response_model_exclude_none=True,
)
def get_subscription(subscription_id: int, service: SubscriptionServiceDep) -> SubscriptionResponse:
    return SubscriptionResponse.model_validate(service.get_by_id(subscription_id))


@router.put(
    "/{subscription_id}",
    response_model=SubscriptionResponse,
    response_model_exclude_none=True,
)
def update_subscription(
    subscription_id: int,
    body: SubscriptionRequest,
    service: SubscriptionServiceDep,
) -> SubscriptionResponse:
    updated = service.update(Subscription.from_new(subscription_id, body.to_domain()))
    return SubscriptionResponse.model_validate(updated)


@router.delete("/{subscription_id}", response_model=MessageResponse)
def delete_subscription(subscription_id: int, service: SubscriptionServiceDep) -> MessageResponse:
    service.delete(subscription_id)
    return MessageResponse(message="Subscription deleted successfully")
