"""
Domain error types raised by the subscription service and its repositories.
Only the API error handlers translate these into HTTP status codes.
"""

from __future__ import annotations


class SubscriptionServiceError(Exception):
    """Base error for subscription domain failures."""


class ValidationError(SubscriptionServiceError):
    """Input failed a business rule, such as a malformed period string."""


class NotFoundError(SubscriptionServiceError):
    """The referenced subscription id does not exist in storage."""

    def __init__(self, subscription_id: int) -> None:
        self.subscription_id = subscription_id
        super().__init__("subscription not found")


class StorageError(SubscriptionServiceError):
    """The backing store failed while executing an operation."""
