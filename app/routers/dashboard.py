# =============================================================================
# app/routers/dashboard.py - Dashboard Endpoint
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from app.auth import get_current_user
from app.dependencies import DashboardServiceDep
from app.exceptions import BackendRequestError

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("")
def get_dashboard(service: DashboardServiceDep):
    """
    Dashboard summary.

    Task counts by status and priority, project counts by status, and the
    five newest tasks and projects.
    """
    try:
        return service.get_summary()
    except Exception as e:
        logger.error(f"Error loading dashboard: {e}")
        raise BackendRequestError("Failed to load dashboard. Please try again later.")
