# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - tasks.py: Task CRUD and statistics endpoints
# - projects.py: Project CRUD and statistics endpoints
# - dashboard.py: Dashboard summary endpoint
# - lists.py: Local list and local task endpoints
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import tasks
from . import projects
from . import dashboard
from . import lists

__all__ = [
    "health",
    "tasks",
    "projects",
    "dashboard",
    "lists",
]
