# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the TaskFlow API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main      (binds API_HOST:API_PORT, reloads in development)
# =============================================================================

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    TaskFlowException,
    taskflow_exception_handler,
    validation_exception_handler,
)
from app.routers import dashboard, health, lists, projects, tasks

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    The Supabase client is created lazily on the first record call, so
    startup only logs configuration.
    """
    logger.info(f"Starting TaskFlow API in {settings.ENVIRONMENT} mode")
    logger.info(f"Task table: {settings.TASK_TABLE}, project table: {settings.PROJECT_TABLE}")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    yield

    logger.info("Shutting down TaskFlow API")


# Create FastAPI application
app = FastAPI(
    title="TaskFlow API",
    description="""
## Task & Project Management API

Create, list, filter, sort, paginate, edit and delete tasks and projects,
and read aggregate counts for the dashboard. Records live in Supabase;
requests carry a Supabase Auth bearer token.

### Quick Start

```bash
# List tasks that are done, newest due date first
curl -H "Authorization: Bearer $TOKEN" \\
  "http://localhost:8000/api/v1/tasks?status=Done&sort_direction=desc"

# Create a task
curl -X POST http://localhost:8000/api/v1/tasks \\
  -H "Authorization: Bearer $TOKEN" -H "Content-Type: application/json" \\
  -d '{"title": "Write report", "priority": "Medium"}'
```
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Tasks",
            "description": "Task CRUD, filtering, paging and statistics",
        },
        {
            "name": "Projects",
            "description": "Project CRUD, filtering, paging and statistics",
        },
        {
            "name": "Dashboard",
            "description": "Aggregate counts and recent records",
        },
        {
            "name": "Lists",
            "description": "Local to-do lists (not synced with backend tasks)",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(TaskFlowException)
async def handle_taskflow_exception(request: Request, exc: TaskFlowException):
    """Handle custom TaskFlow exceptions."""
    return await taskflow_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    """Handle request body/query validation errors."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

app.include_router(
    tasks.router,
    prefix="/api/v1/tasks",
    tags=["Tasks"]
)

app.include_router(
    projects.router,
    prefix="/api/v1/projects",
    tags=["Projects"]
)

app.include_router(
    dashboard.router,
    prefix="/api/v1/dashboard",
    tags=["Dashboard"]
)

app.include_router(
    lists.router,
    prefix="/api/v1/lists",
    tags=["Lists"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """Root endpoint - returns API info."""
    return {
        "name": "TaskFlow API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }


def run() -> None:
    """Serve the app with uvicorn on API_HOST:API_PORT."""
    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.is_development,
        log_level="debug" if settings.DEBUG else "info",
    )


if __name__ == "__main__":
    run()
