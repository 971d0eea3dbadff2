# This file defines liveness, readiness, and version endpoints for API operations.
# It exists so orchestration and monitoring systems can verify service health quickly.
# The readiness check confirms database connectivity and that the subscriptions table exists.
# It also reports whether schema creation succeeded when the app started.

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.api.api_config import ApiConfig
from src.api.db_access import DatabaseClient
from src.api.dependencies import get_config, get_database_client
from src.api.schemas.health_schemas import HealthResponse, ReadinessResponse, VersionResponse

router = APIRouter(tags=["health"])
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
DBDep = Annotated[DatabaseClient, Depends(get_database_client)]


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@router.get("/health", response_model=HealthResponse)
def health(request: Request, config: ConfigDep) -> dict[str, object]:
    return {
        "status": "ok",
        "api_version": config.api_version_label(),
        "request_id": request.state.request_id,
        "environment": config.environment,
        "service_name": config.api_name,
        "timestamp": _utc_now(),
    }


@router.get("/ready", response_model=ReadinessResponse)
def ready(
    request: Request,
    config: ConfigDep,
    db: DBDep,
) -> dict[str, object]:
    if config.storage_backend == "memory":
        db_connected = False
        table_ready = True
    else:
        db_connected = db.can_connect()
        table_ready = db_connected and db.table_exists(config.subscriptions_table_name)

    return {
        "api_version": config.api_version_label(),
        "request_id": request.state.request_id,
        "storage_backend": config.storage_backend,
        "db_connected": db_connected,
        "subscriptions_table_ready": table_ready,
        "storage_ready_at_startup": getattr(request.app.state, "storage_ready_at_startup", True),
        "ready": table_ready,
        "timestamp": _utc_now(),
    }


@router.get("/version", response_model=VersionResponse)
def version(request: Request, config: ConfigDep) -> dict[str, object]:
    return {
        "api_version": config.api_version_label(),
        "request_id": request.state.request_id,
        "api_version_path": config.api_version_path,
        "project": config.api_name,
        "version": config.app_version,
        "timestamp": _utc_now(),
    }
