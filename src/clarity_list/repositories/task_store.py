"""JSON-file backed task store.

The store mirrors a browser-style key-value storage: one JSON document holds
named slots, and the task collection lives in a single slot as a JSON array.
Only the slot owned by the store is touched; other slots are preserved.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from platformdirs import user_data_dir
from pydantic import TypeAdapter

from clarity_list.models import STORAGE_KEY, PersistenceError, Task

logger = logging.getLogger(__name__)

_TASK_LIST = TypeAdapter(list[Task])


def default_storage_path() -> Path:
    """Return the default slot document path in the user data dir."""
    return Path(user_data_dir("clarity_list")) / "storage.json"


class TaskStore:
    """In-memory task collection synchronised to a persisted slot.

    There is exactly one writer (the owning service); operations are
    synchronous and never raise on I/O problems. Read failures yield an
    empty collection, write failures are logged and reported via the
    return value of :meth:`save`.
    """

    def __init__(self, path: str | Path | None = None, key: str = STORAGE_KEY):
        self.path = Path(path) if path else default_storage_path()
        self.key = key
        self._tasks: list[Task] = []

    @property
    def tasks(self) -> list[Task]:
        """Current in-memory collection (a copy)."""
        return list(self._tasks)

    # ---- low-level helpers ----

    def _read_document(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        with open(self.path, encoding="utf-8") as f:
            document = json.load(f)
        if not isinstance(document, dict):
            raise PersistenceError(f"Slot document {self.path} is not a JSON object")
        return document

    @staticmethod
    def _dump(document: dict[str, Any]) -> str:
        return json.dumps(document, indent=2, sort_keys=True, ensure_ascii=False) + "\n"

    def _write_atomic(self, text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    # ---- public API ----

    def load(self) -> list[Task]:
        """Read the persisted slot into memory.

        Returns:
            The loaded tasks, or an empty list when the slot is missing or
            malformed. Never raises.
        """
        try:
            document = self._read_document()
            raw = document.get(self.key)
            tasks = [] if raw is None else _TASK_LIST.validate_python(raw)
        except (OSError, ValueError, PersistenceError) as e:
            err = PersistenceError(f"Failed to load tasks from {self.path}: {e}")
            logger.error("%s; starting with an empty list", err)
            tasks = []

        self._tasks = tasks
        logger.debug("Loaded %d task(s) from %s [%s]", len(tasks), self.path, self.key)
        return self.tasks

    def save(self, tasks: list[Task]) -> bool:
        """Serialise and write the whole collection.

        The write goes through a temporary file and ``os.replace`` so a reader
        never sees a partially written document.

        Returns:
            True if the slot was written, False if the write failed (logged).
        """
        try:
            try:
                document = self._read_document()
            except (ValueError, PersistenceError) as e:
                logger.warning("Overwriting unreadable slot document %s: %s", self.path, e)
                document = {}
            document[self.key] = [task.to_storage() for task in tasks]
            self._write_atomic(self._dump(document))
        except OSError as e:
            err = PersistenceError(f"Failed to save tasks to {self.path}: {e}")
            logger.error("%s; changes are kept in memory only", err)
            return False

        logger.debug("Saved %d task(s) to %s [%s]", len(tasks), self.path, self.key)
        return True

    def replace(self, tasks: list[Task]) -> bool:
        """Set the in-memory collection and persist it."""
        self._tasks = list(tasks)
        return self.save(self._tasks)
