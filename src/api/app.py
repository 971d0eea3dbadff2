# This file builds the FastAPI application and registers all API routers.
# It exists so startup behavior, middleware, and error handling are configured in one place.
# The app adds request IDs, timing headers, Prometheus metrics, and per-request log lines.
# Keeping bootstrap logic centralized makes deployment and testing more predictable.

from __future__ import annotations

import logging
import time
import uuid

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import RequestResponseEndpoint

from src.api.api_config import get_api_config
from src.api.dependencies import get_config, get_subscription_repository
from src.api.error_handlers import register_error_handlers
from src.api.repositories.sql_repository import SqlSubscriptionRepository
from src.api.routers.health import router as health_router
from src.api.routers.subscriptions import router as subscriptions_router
from src.common.exceptions import StorageError
from src.common.logging import configure_logging

logger = logging.getLogger(__name__)

API_HTTP_REQUESTS_TOTAL = Counter(
    "api_http_requests_total",
    "Total number of HTTP requests processed by the API.",
    ["method", "path", "status_code"],
)
API_HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "api_http_request_duration_seconds",
    "API request duration in seconds.",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
API_HTTP_INFLIGHT_REQUESTS = Gauge(
    "api_http_inflight_requests",
    "Number of API requests currently being processed.",
    ["method"],
)


UNMATCHED_ROUTE_LABEL = "unmatched"


def _route_label(request: Request, mount_prefix: str) -> str:
    """Return the route template for metrics, never the raw URL."""

    template = getattr(request.scope.get("route"), "path", None)
    if template is None:
        return UNMATCHED_ROUTE_LABEL
    raw_path = request.url.path
    mounted = raw_path == mount_prefix or raw_path.startswith(f"{mount_prefix}/")
    if mounted and not template.startswith(mount_prefix):
        return f"{mount_prefix}{template}"
    return template


def create_app() -> FastAPI:
    """Create configured FastAPI application instance."""

    config = get_api_config()
    configure_logging(config.log_level)

    app = FastAPI(
        title=config.api_name,
        description=(
            "Versioned API for managing subscription records and summarizing their cost "
            "by user, service, and billing period."
        ),
        version=config.app_version,
        openapi_tags=[
            {"name": "health", "description": "Service liveness, readiness, and version metadata."},
            {
                "name": "subscriptions",
                "description": "Subscription CRUD and aggregated cost summaries.",
            },
        ],
    )

    if config.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.allowed_origins,
            allow_credentials="*" not in config.allowed_origins,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["Content-Type", "Authorization"],
        )

    @app.middleware("http")
    async def request_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        method_label = request.method
        started = time.perf_counter()
        status_code = 500
        API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label).inc()
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            duration_ms = (time.perf_counter() - started) * 1000.0

            response.headers["x-request-id"] = request_id
            response.headers["x-response-time-ms"] = f"{duration_ms:.2f}"

            if config.enable_request_logging:
                client_host = request.client.host if request.client else "-"
                logger.info(
                    "%s %s %d %.2fms %s",
                    request.method,
                    request.url.path,
                    response.status_code,
                    duration_ms,
                    client_host,
                )

            return response
        finally:
            duration_s = time.perf_counter() - started
            path_label = _route_label(request, config.api_version_path)
            API_HTTP_REQUESTS_TOTAL.labels(
                method=method_label,
                path=path_label,
                status_code=str(status_code),
            ).inc()
            API_HTTP_REQUEST_DURATION_SECONDS.labels(
                method=method_label,
                path=path_label,
            ).observe(duration_s)
            API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label).dec()

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.on_event("startup")
    def startup_checks() -> None:
        startup_config = app.dependency_overrides.get(get_config, get_config)()
        repository = app.dependency_overrides.get(
            get_subscription_repository, get_subscription_repository
        )()
        app.state.storage_ready_at_startup = True
        auto_create = startup_config.auto_create_schema
        if isinstance(repository, SqlSubscriptionRepository) and auto_create:
            try:
                repository.ensure_schema()
            except StorageError:
                app.state.storage_ready_at_startup = False
                logger.warning("Subscription storage is not reachable; requests will fail until it is.")
        logger.info(
            "Serving %s %s with %s storage under %s",
            config.api_name,
            config.app_version,
            config.storage_backend,
            config.api_version_path,
        )

    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(subscriptions_router, prefix=config.api_version_path)

    return app


app = create_app()
