# This file provides shared helpers for API endpoint tests.
# It exists so tests can override service dependencies without touching real databases.
# The helpers build consistent config objects and scoped TestClient contexts.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi.testclient import TestClient

from src.api.api_config import ApiConfig
from src.api.app import app
from src.api.dependencies import (
    get_config,
    get_database_client,
    get_subscription_repository,
    get_subscription_service,
)
from src.api.repositories.memory_repository import InMemorySubscriptionRepository
from src.api.services.subscription_service import SubscriptionService


def build_test_config(*, storage_backend: str = "memory") -> ApiConfig:
    """Create deterministic API config for tests."""

    return ApiConfig(
        api_name="Test Subscription API",
        api_version_path="/api/v1",
        host="0.0.0.0",
        port=8080,
        environment="test",
        database_url="sqlite+pysqlite:///:memory:",
        storage_backend=storage_backend,
        log_level="INFO",
        enable_request_logging=False,
        allowed_origins=["*"],
        subscriptions_table_name="subscriptions",
        auto_create_schema=False,
        app_version="0.1.0",
    )


class FakeDBClient:
    """Simple fake DB dependency for readiness endpoint tests."""

    def __init__(self, *, connected: bool = True, existing_tables: set[str] | None = None) -> None:
        self._connected = connected
        self._tables = existing_tables if existing_tables is not None else {"subscriptions"}

    def can_connect(self) -> bool:
        return self._connected

    def table_exists(self, table_name: str) -> bool:
        return self._connected and table_name in self._tables


@contextmanager
def api_test_client(
    *,
    config: ApiConfig | None = None,
    db_client: Any | None = None,
    repository: Any | None = None,
    subscription_service: Any | None = None,
) -> Iterator[TestClient]:
    """Yield a TestClient with scoped dependency overrides.

    Without an explicit repository or service, routes run against a fresh in-memory repository.
    """

    resolved_config = config or build_test_config()
    if repository is None:
        repository = InMemorySubscriptionRepository()
    service = subscription_service or SubscriptionService(repository=repository)

    app.dependency_overrides[get_config] = lambda: resolved_config
    app.dependency_overrides[get_database_client] = lambda: db_client or FakeDBClient()
    app.dependency_overrides[get_subscription_repository] = lambda: repository
    app.dependency_overrides[get_subscription_service] = lambda: service

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
