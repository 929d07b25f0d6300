# =============================================================================
# core/services/list_service.py - Local List Business Logic
# =============================================================================
# Manages named to-do lists and their tasks in the local key-value store.
# This is a standalone feature: local tasks have their own ids and are never
# synced with backend task records.
#
# Storage keys:
# - taskflow-lists            JSON array of lists
# - taskflow-active-list      id of the selected list
# - taskflow-tasks-<list_id>  JSON array of that list's tasks
# =============================================================================

import json
import logging
import time
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Callable, TypeVar

from app.exceptions import (
    BlankNameError,
    LastListError,
    ListNotFoundError,
    LocalTaskNotFoundError,
)
from core.models.task_list import (
    LocalPriority,
    LocalTask,
    LocalTaskFilter,
    LocalTaskList,
    LocalTaskStats,
)
from lib.local_store import LocalStore

logger = logging.getLogger(__name__)

LISTS_KEY = "taskflow-lists"
ACTIVE_LIST_KEY = "taskflow-active-list"
TASKS_KEY_PREFIX = "taskflow-tasks-"

DEFAULT_LIST = LocalTaskList(id="default", name="My Tasks", description="Default task list")


def _new_id(prefix: str, taken: set[str]) -> str:
    """Millisecond-timestamp id, bumped until it is unused."""
    millis = int(time.time() * 1000)
    while f"{prefix}-{millis}" in taken:
        millis += 1
    return f"{prefix}-{millis}"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


F = TypeVar("F", bound=Callable[..., Any])


def _atomic(method: F) -> F:
    """Run a ListService mutation inside one store transaction."""

    @wraps(method)
    def wrapper(self: "ListService", *args: Any, **kwargs: Any) -> Any:
        with self.store.transaction():
            return method(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]


class ListService:
    """
    Service for local lists and their tasks.

    There is always at least one list: with nothing stored, the default
    "My Tasks" list is returned.
    """

    def __init__(self, store: LocalStore):
        self.store = store

    # -------------------------------------------------------------------------
    # Storage helpers
    # -------------------------------------------------------------------------

    def _read_json(self, key: str) -> Any:
        raw = self.store.get_item(key)
        return json.loads(raw) if raw else None

    def _write_json(self, key: str, value: Any) -> None:
        self.store.set_item(key, json.dumps(value))

    def _save_lists(self, lists: list[LocalTaskList]) -> None:
        self._write_json(
            LISTS_KEY,
            [item.model_dump(mode="json", by_alias=True, exclude_none=True) for item in lists],
        )

    def _load_tasks(self, list_id: str) -> list[LocalTask]:
        rows = self._read_json(f"{TASKS_KEY_PREFIX}{list_id}") or []
        return [LocalTask.model_validate(row) for row in rows]

    def _save_tasks(self, list_id: str, tasks: list[LocalTask]) -> None:
        self._write_json(
            f"{TASKS_KEY_PREFIX}{list_id}",
            [task.model_dump(mode="json", by_alias=True) for task in tasks],
        )

    # -------------------------------------------------------------------------
    # Lists
    # -------------------------------------------------------------------------

    def get_lists(self) -> list[LocalTaskList]:
        rows = self._read_json(LISTS_KEY)
        if not rows:
            return [DEFAULT_LIST.model_copy()]
        return [LocalTaskList.model_validate(row) for row in rows]

    def get_list(self, list_id: str) -> LocalTaskList:
        """
        Raises:
            ListNotFoundError: If no list has this id
        """
        for item in self.get_lists():
            if item.id == list_id:
                return item
        raise ListNotFoundError(list_id)

    @_atomic
    def add_list(self, name: str, description: str = "") -> LocalTaskList:
        """
        Create a list and make it the active one.

        Raises:
            BlankNameError: If name is empty after trimming
        """
        if not name or not name.strip():
            raise BlankNameError("name")

        lists = self.get_lists()
        new_list = LocalTaskList(
            id=_new_id("list", {item.id for item in lists}),
            name=name.strip(),
            description=description,
            created_at=_now_iso(),
        )
        lists.append(new_list)
        self._save_lists(lists)
        self.store.set_item(ACTIVE_LIST_KEY, new_list.id)

        logger.info(f"Created local list: {new_list.id}")
        return new_list

    @_atomic
    def delete_list(self, list_id: str) -> None:
        """
        Delete a list and its tasks.

        If the deleted list was active, the first remaining list becomes
        active.

        Raises:
            ListNotFoundError: If no list has this id
            LastListError: If it is the only list
        """
        lists = self.get_lists()
        if not any(item.id == list_id for item in lists):
            raise ListNotFoundError(list_id)
        if len(lists) <= 1:
            raise LastListError(list_id)

        remaining = [item for item in lists if item.id != list_id]
        self._save_lists(remaining)
        self.store.remove_item(f"{TASKS_KEY_PREFIX}{list_id}")

        if self.store.get_item(ACTIVE_LIST_KEY) == list_id:
            self.store.set_item(ACTIVE_LIST_KEY, remaining[0].id)

        logger.info(f"Deleted local list: {list_id}")

    def get_active_list(self) -> LocalTaskList:
        """Return the active list, or the first list if none is active."""
        lists = self.get_lists()
        active_id = self.store.get_item(ACTIVE_LIST_KEY) or DEFAULT_LIST.id
        for item in lists:
            if item.id == active_id:
                return item
        return lists[0]

    @_atomic
    def set_active_list(self, list_id: str) -> LocalTaskList:
        selected = self.get_list(list_id)
        self.store.set_item(ACTIVE_LIST_KEY, selected.id)
        return selected

    # -------------------------------------------------------------------------
    # Tasks
    # -------------------------------------------------------------------------

    def get_tasks(
        self,
        list_id: str,
        task_filter: LocalTaskFilter = LocalTaskFilter.ALL,
    ) -> list[LocalTask]:
        """Return a list's tasks, optionally only active or completed ones."""
        self.get_list(list_id)
        tasks = self._load_tasks(list_id)

        if task_filter == LocalTaskFilter.ACTIVE:
            return [task for task in tasks if not task.completed]
        if task_filter == LocalTaskFilter.COMPLETED:
            return [task for task in tasks if task.completed]
        return tasks

    @_atomic
    def add_task(
        self,
        list_id: str,
        title: str,
        description: str = "",
        due_date: str | None = None,
        priority: LocalPriority = LocalPriority.MEDIUM,
    ) -> LocalTask:
        """
        Append a task to a list.

        Raises:
            BlankNameError: If title is empty after trimming
        """
        if not title or not title.strip():
            raise BlankNameError("title")

        self.get_list(list_id)
        tasks = self._load_tasks(list_id)

        task = LocalTask(
            id=_new_id("task", {t.id for t in tasks}),
            title=title.strip(),
            description=(description or "").strip(),
            completed=False,
            created_at=_now_iso(),
            due_date=due_date or None,
            priority=LocalPriority(priority),
            list_id=list_id,
        )
        tasks.append(task)
        self._save_tasks(list_id, tasks)
        return task

    @_atomic
    def _replace_task(self, list_id: str, task_id: str, **changes: Any) -> LocalTask:
        self.get_list(list_id)
        tasks = self._load_tasks(list_id)

        for index, task in enumerate(tasks):
            if task.id == task_id:
                updated = task.model_copy(update=changes)
                tasks[index] = updated
                self._save_tasks(list_id, tasks)
                return updated

        raise LocalTaskNotFoundError(list_id, task_id)

    @_atomic
    def toggle_task(self, list_id: str, task_id: str) -> LocalTask:
        """Flip a task between completed and active."""
        for task in self.get_tasks(list_id):
            if task.id == task_id:
                return self._replace_task(list_id, task_id, completed=not task.completed)
        raise LocalTaskNotFoundError(list_id, task_id)

    @_atomic
    def update_task(
        self,
        list_id: str,
        task_id: str,
        title: str | None = None,
        description: str | None = None,
        due_date: str | None = None,
        priority: LocalPriority | None = None,
        completed: bool | None = None,
    ) -> LocalTask:
        """
        Edit a task. Only arguments that aren't None are changed.

        Raises:
            BlankNameError: If a new title is empty after trimming
        """
        changes: dict[str, Any] = {}
        if title is not None:
            if not title.strip():
                raise BlankNameError("title")
            changes["title"] = title.strip()
        if description is not None:
            changes["description"] = description
        if due_date is not None:
            changes["due_date"] = due_date or None
        if priority is not None:
            changes["priority"] = LocalPriority(priority)
        if completed is not None:
            changes["completed"] = completed

        return self._replace_task(list_id, task_id, **changes)

    @_atomic
    def delete_task(self, list_id: str, task_id: str) -> None:
        self.get_list(list_id)
        tasks = self._load_tasks(list_id)
        remaining = [task for task in tasks if task.id != task_id]
        if len(remaining) == len(tasks):
            raise LocalTaskNotFoundError(list_id, task_id)
        self._save_tasks(list_id, remaining)

    def get_stats(self, list_id: str) -> LocalTaskStats:
        tasks = self.get_tasks(list_id)
        completed = sum(1 for task in tasks if task.completed)
        return LocalTaskStats(
            total=len(tasks),
            completed=completed,
            active=len(tasks) - completed,
        )
