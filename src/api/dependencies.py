# This file provides dependency factories for FastAPI routes and middleware.
# It exists so the database client, repository, and service are created once and shared through dependency injection.
# The setup keeps routers thin and makes endpoint tests easy to override.
# Centralized construction also ensures one consistent API configuration is used.

from __future__ import annotations

from functools import lru_cache

from src.api.api_config import ApiConfig, get_api_config
from src.api.db_access import DatabaseClient
from src.api.repositories.base import SubscriptionRepository
from src.api.repositories.memory_repository import InMemorySubscriptionRepository
from src.api.repositories.sql_repository import SqlSubscriptionRepository
from src.api.services.subscription_service import SubscriptionService


@lru_cache(maxsize=1)
def get_database_client() -> DatabaseClient:
    config = get_api_config()
    return DatabaseClient(database_url=config.database_url)


@lru_cache(maxsize=1)
def get_subscription_repository() -> SubscriptionRepository:
    config = get_api_config()
    if config.storage_backend == "memory":
        return InMemorySubscriptionRepository()
    return SqlSubscriptionRepository(
        db=get_database_client(),
        table_name=config.subscriptions_table_name,
    )


@lru_cache(maxsize=1)
def get_subscription_service() -> SubscriptionService:
    return SubscriptionService(repository=get_subscription_repository())


def get_config() -> ApiConfig:
    return get_api_config()
