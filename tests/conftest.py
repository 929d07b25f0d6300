# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - FakeSupabase: in-memory stand-in for the Supabase table query builder
# - Service fixtures wired to the fake backend
# =============================================================================

import os
import re
from datetime import datetime, timedelta
from types import SimpleNamespace

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest

from core.services import ProjectService, TaskService
from lib.local_store import LocalStore
from lib.record_client import RecordClient


# =============================================================================
# Fake backend
# =============================================================================

class FakeQuery:
    """
    Chainable query over one in-memory table.

    Supports the subset of the PostgREST builder the record client uses:
    select/insert/update/delete, eq, ilike, order, range, execute.
    """

    def __init__(self, backend: "FakeSupabase", table: str):
        self.backend = backend
        self.table = table
        self.mode = None
        self.payload = None
        self.columns = None
        self.count_requested = False
        self.predicates = []
        self.orders = []
        self.window = None

    def select(self, columns="*", count=None):
        self.mode = "select"
        if columns != "*":
            self.columns = [c.strip() for c in columns.split(",")]
        self.count_requested = count is not None
        return self

    def insert(self, data):
        self.mode = "insert"
        self.payload = dict(data)
        return self

    def update(self, data):
        self.mode = "update"
        self.payload = dict(data)
        return self

    def delete(self):
        self.mode = "delete"
        return self

    def eq(self, field, value):
        self.predicates.append(lambda row, f=field, v=value: row.get(f) == v)
        return self

    def ilike(self, field, pattern):
        # Outer % wrap removed, then backslash escapes undone
        needle = re.sub(r"\\(.)", r"\1", pattern[1:-1]).lower()
        self.predicates.append(
            lambda row, f=field: needle in str(row.get(f) or "").lower()
        )
        return self

    def order(self, field, desc=False):
        self.orders.append((field, desc))
        return self

    def range(self, start, end):
        self.window = (start, end)
        return self

    def execute(self):
        self.backend.calls.append((self.table, self.mode))
        if self.backend.error is not None:
            raise self.backend.error

        rows = self.backend.tables.setdefault(self.table, [])

        if self.mode == "insert":
            row = dict(self.payload)
            row_id = self.backend.next_id()
            row.setdefault("Id", row_id)
            row.setdefault(
                "CreatedOn",
                (datetime(2024, 1, 1) + timedelta(seconds=row_id)).isoformat(),
            )
            rows.append(row)
            return SimpleNamespace(data=[dict(row)], count=None)

        matched = [row for row in rows if all(p(row) for p in self.predicates)]

        if self.mode == "update":
            for row in matched:
                row.update(self.payload)
            return SimpleNamespace(data=[dict(row) for row in matched], count=None)

        if self.mode == "delete":
            for row in matched:
                rows.remove(row)
            return SimpleNamespace(data=[dict(row) for row in matched], count=None)

        for field, desc in reversed(self.orders):
            matched.sort(key=lambda row, f=field: str(row.get(f) or ""), reverse=desc)

        total = len(matched)
        if self.window is not None:
            start, end = self.window
            matched = matched[start:end + 1]

        if self.columns:
            matched = [{c: row.get(c) for c in self.columns} for row in matched]
        else:
            matched = [dict(row) for row in matched]

        return SimpleNamespace(
            data=matched,
            count=total if self.count_requested else None,
        )


class FakeSupabase:
    """In-memory replacement for supabase.Client (tables only)."""

    def __init__(self):
        self.tables: dict[str, list[dict]] = {}
        self.calls: list[tuple[str, str]] = []
        self.error: Exception | None = None
        self._last_id = 0

    def next_id(self) -> int:
        self._last_id += 1
        return self._last_id

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def seed(self, table: str, rows: list[dict]) -> None:
        for row in rows:
            row = dict(row)
            row.setdefault("Id", self.next_id())
            self.tables.setdefault(table, []).append(row)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_backend():
    """Empty in-memory backend."""
    return FakeSupabase()


@pytest.fixture
def record_client(fake_backend):
    """Record client bound to the fake backend."""
    return RecordClient(client=fake_backend)


@pytest.fixture
def task_service(record_client):
    return TaskService(record_client, table="task6")


@pytest.fixture
def project_service(record_client):
    return ProjectService(record_client, table="project2")


@pytest.fixture
def local_store(tmp_path):
    """Local key-value store in a temp directory."""
    return LocalStore(tmp_path / "store" / "local_store.json")


@pytest.fixture
def sample_tasks():
    """Sample task rows for seeding."""
    return [
        {"title": "Write report", "status": "To Do", "priority": "High", "category": "Work", "due_date": "2024-02-03"},
        {"title": "Review report", "status": "In Progress", "priority": "Medium", "category": "Work", "due_date": "2024-02-01"},
        {"title": "Gym", "status": "Done", "priority": "Low", "category": "Personal", "due_date": "2024-02-02"},
        {"title": "Read book", "status": "Done", "priority": "Low", "category": "Learning", "due_date": "2024-02-05"},
    ]


@pytest.fixture
def sample_projects():
    """Sample project rows for seeding."""
    return [
        {"Name": "Website relaunch", "status": "In Progress", "start_date": "2024-01-10", "end_date": "2024-03-01", "team_members": ["alice", "bob"]},
        {"Name": "Mobile app", "status": "Not Started", "start_date": "2024-04-01", "end_date": None, "team_members": []},
        {"Name": "Data cleanup", "status": "Completed", "start_date": "2023-11-01", "end_date": "2023-12-15", "team_members": ["carol"]},
    ]
