# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for services.
# These are injected into route handlers using Depends(), and can be swapped
# in tests via app.dependency_overrides.
# =============================================================================

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from app.config import settings
from core.services import DashboardService, ListService, ProjectService, TaskService
from lib.local_store import LocalStore
from lib.record_client import RecordClient


def get_record_client() -> RecordClient:
    """Adapter bound to the shared Supabase client (created on first use)."""
    return RecordClient()


def get_task_service(
    records: Annotated[RecordClient, Depends(get_record_client)],
) -> TaskService:
    return TaskService(records)


def get_project_service(
    records: Annotated[RecordClient, Depends(get_record_client)],
) -> ProjectService:
    return ProjectService(records)


def get_dashboard_service(
    tasks: Annotated[TaskService, Depends(get_task_service)],
    projects: Annotated[ProjectService, Depends(get_project_service)],
) -> DashboardService:
    return DashboardService(tasks, projects)


@lru_cache
def get_local_store() -> LocalStore:
    """One store per process so its file lock is shared."""
    return LocalStore(settings.LOCAL_STORE_PATH)


def get_list_service(
    store: Annotated[LocalStore, Depends(get_local_store)],
) -> ListService:
    return ListService(store)


# Type aliases for dependency injection
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
DashboardServiceDep = Annotated[DashboardService, Depends(get_dashboard_service)]
ListServiceDep = Annotated[ListService, Depends(get_list_service)]
