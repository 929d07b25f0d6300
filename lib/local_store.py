# =============================================================================
# lib/local_store.py - Local Key-Value Store
# =============================================================================
# A small string key-value store persisted to one JSON file. It mirrors the
# browser storage API (get_item / set_item / remove_item) so the local list
# feature can keep its JSON-encoded values under fixed keys.
#
# Values are strings; callers JSON-encode their own structures.
#
# Usage:
#   from lib.local_store import LocalStore
#   store = LocalStore("/tmp/taskflow.json")
#   store.set_item("taskflow-active-list", "default")
# =============================================================================

from __future__ import annotations

import json
import logging
import os
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from lib.utils import ApplicationError

logger = logging.getLogger(__name__)


class LocalStoreError(ApplicationError):
    """Raised when the store file can't be read or written."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, code="LOCAL_STORE_ERROR", **kwargs)


class LocalStore:
    """
    JSON-file backed string key-value store.

    The whole file is re-read on every access and rewritten on every change,
    so separate instances pointed at the same path see each other's writes.

    Single calls are atomic. Callers that read, change and write back hold
    transaction() around the whole sequence:

        with store.transaction():
            lists = json.loads(store.get_item("taskflow-lists"))
            lists.append(new_list)
            store.set_item("taskflow-lists", json.dumps(lists))
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.RLock()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Hold the store lock for a read-modify-write sequence (re-entrant)."""
        with self._lock:
            yield

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise LocalStoreError(
                f"Failed to read local store: {e}",
                suggestion="Check LOCAL_STORE_PATH and file permissions",
                details={"path": str(self.path)},
            )
        if not content.strip():
            return {}
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise LocalStoreError(
                f"Local store is not valid JSON: {e}",
                suggestion="Delete or repair the store file",
                details={"path": str(self.path)},
            )
        return {str(k): str(v) for k, v in data.items()}

    def _save(self, data: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise LocalStoreError(
                f"Failed to write local store: {e}",
                suggestion="Check LOCAL_STORE_PATH and file permissions",
                details={"path": str(self.path)},
            )

    def get_item(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""
        with self._lock:
            return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._save(data)
        logger.debug(f"Stored local key {key}")

    def remove_item(self, key: str) -> None:
        """Remove a key. Missing keys are ignored."""
        with self._lock:
            data = self._load()
            if key in data:
                del data[key]
                self._save(data)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._load())

    def clear(self) -> None:
        with self._lock:
            self._save({})
