# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Liveness for load balancers and a readiness probe that touches the
# task and project tables and the local store.
# =============================================================================

from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.config import settings
from app.dependencies import get_local_store, get_record_client
from core.models.query import PagingInfo, QueryDescriptor
from lib.local_store import LocalStore
from lib.record_client import RecordClient

router = APIRouter()

VERSION = "1.0.0"


class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual dependency checks."""
    tasks_table: str
    projects_table: str
    local_store: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health", response_model=HealthResponse)
def health_check():
    """Basic health status for load balancers and monitoring."""
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
def readiness_check(
    records: Annotated[RecordClient, Depends(get_record_client)],
    store: Annotated[LocalStore, Depends(get_local_store)],
):
    """
    Readiness check.

    Issues a one-row read against each record table and reads the local
    store. Failures are reported, not raised.
    """
    probe = QueryDescriptor(
        fields=[records.id_field],
        paging_info=PagingInfo(limit=1),
    )

    def check_table(table: str) -> str:
        try:
            records.fetch_records(table, probe)
            return "healthy"
        except Exception as e:
            return f"unhealthy: {str(e)[:50]}"

    checks = ChecksResponse(
        tasks_table=check_table(settings.TASK_TABLE),
        projects_table=check_table(settings.PROJECT_TABLE),
        local_store="unknown",
    )

    try:
        store.keys()
        checks.local_store = "healthy"
    except Exception as e:
        checks.local_store = f"unhealthy: {str(e)[:50]}"

    all_healthy = all(
        value == "healthy"
        for value in (checks.tasks_table, checks.projects_table, checks.local_store)
    )

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        checks=checks,
        timestamp=_now(),
    )
