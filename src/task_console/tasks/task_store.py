# src/task_console/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
import threading
from collections.abc import Iterable, Iterator
from datetime import datetime
from pathlib import Path
from typing import Any

from .errors import DuplicateTaskError, TaskIOError, TaskNotFoundError, TaskParseError
from .task_models import Priority, Task

logger = logging.getLogger(__name__)

_FIELDS = ("name", "description", "priority", "createdAt")


class TaskStore:
    """
    Ordered in-memory task store with JSON file persistence.

    - insertion order is display order, nothing re-sorts it
    - lookups by name are case-insensitive and return the first match
    - duplicate names are allowed unless unique_names=True
    - nothing is persisted automatically; save/load are explicit

    Thread-safety:
    - every public method holds an RLock, so a shared instance stays consistent
    """

    def __init__(self, tasks: Iterable[Task] | None = None, *, unique_names: bool = False) -> None:
        self._tasks: list[Task] = list(tasks or [])
        self._unique_names = unique_names
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks())

    @property
    def unique_names(self) -> bool:
        return self._unique_names

    # ---- collection API ----

    def tasks(self) -> list[Task]:
        """Snapshot copy in insertion order."""
        with self._lock:
            return list(self._tasks)

    def append(self, task: Task) -> None:
        with self._lock:
            if self._unique_names and self._find_locked(task.name) is not None:
                raise DuplicateTaskError(task.name)
            self._tasks.append(task)
            logger.debug("Task appended name=%r priority=%s total=%d", task.name, task.priority, len(self._tasks))

    def pop_last(self) -> Task | None:
        with self._lock:
            if not self._tasks:
                return None
            task = self._tasks.pop()
            logger.debug("Task popped name=%r total=%d", task.name, len(self._tasks))
            return task

    def find(self, name: str) -> int | None:
        with self._lock:
            return self._find_locked(name)

    def get(self, index: int) -> Task:
        with self._lock:
            return self._tasks[index]

    def remove(self, name: str) -> Task:
        with self._lock:
            index = self._find_locked(name)
            if index is None:
                raise TaskNotFoundError(name)
            task = self._tasks.pop(index)
            logger.debug("Task removed name=%r index=%d total=%d", task.name, index, len(self._tasks))
            return task

    def clear(self) -> None:
        with self._lock:
            dropped = len(self._tasks)
            self._tasks.clear()
            logger.debug("Task store cleared dropped=%d", dropped)

    def _find_locked(self, name: str) -> int | None:
        key = name.casefold()
        for i, task in enumerate(self._tasks):
            if task.name.casefold() == key:
                return i
        return None

    # ---- serialization ----

    @staticmethod
    def _task_to_dict(task: Task) -> dict[str, str]:
        return {
            "name": task.name,
            "description": task.description,
            "priority": task.priority.value,
            "createdAt": task.created_at.isoformat(),
        }

    @staticmethod
    def _dict_to_task(raw: Any, pos: int) -> Task:
        if not isinstance(raw, dict):
            raise TaskParseError(f"entry #{pos} is not an object")

        for key in _FIELDS:
            if not isinstance(raw.get(key), str):
                raise TaskParseError(f"entry #{pos}: field {key!r} is missing or not a string")

        try:
            priority = Priority(raw["priority"])
        except ValueError:
            raise TaskParseError(f"entry #{pos}: unknown priority {raw['priority']!r}") from None

        try:
            created_at = datetime.fromisoformat(raw["createdAt"])
        except ValueError:
            raise TaskParseError(f"entry #{pos}: bad timestamp {raw['createdAt']!r}") from None

        return Task(
            name=raw["name"],
            description=raw["description"],
            priority=priority,
            created_at=created_at,
        )

    def serialize(self) -> bytes:
        with self._lock:
            payload = [self._task_to_dict(t) for t in self._tasks]
        return json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")

    @classmethod
    def deserialize(cls, data: bytes | str) -> list[Task]:
        try:
            if isinstance(data, bytes):
                data = data.decode("utf-8")
            raw = json.loads(data)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise TaskParseError(str(e)) from e
        except RecursionError:
            raise TaskParseError("input is nested too deeply") from None

        if not isinstance(raw, list):
            raise TaskParseError("top-level value is not a list")

        return [cls._dict_to_task(item, pos) for pos, item in enumerate(raw, start=1)]

    # ---- files ----

    def save_to_file(self, path: str | Path, *, overwrite: bool = True) -> bool:
        """
        Write serialize() output to `path`.

        Returns False (and writes nothing) if the file exists and overwrite is False.
        The data goes to a uniquely named temp sibling first and is moved into place
        with os.replace, so the target is either fully written or left as it was.
        """
        path = Path(path)
        with self._lock:
            if path.exists() and not overwrite:
                logger.info("Save skipped, file exists path=%s", path)
                return False

            data = self.serialize()
            tmp: Path | None = None
            try:
                with tempfile.NamedTemporaryFile(
                    dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
                ) as fh:
                    tmp = Path(fh.name)
                    fh.write(data)
                os.replace(tmp, path)
            except OSError as e:
                if tmp is not None:
                    with contextlib.suppress(OSError):
                        tmp.unlink()
                raise TaskIOError(path, e.strerror or str(e)) from e

            logger.info("Tasks saved path=%s total=%d", path, len(self._tasks))
            return True

    def load_from_file(self, path: str | Path) -> bool:
        """
        Replace the in-memory tasks with the contents of `path`.

        Returns False if the file does not exist (tasks are left untouched).
        """
        path = Path(path)
        with self._lock:
            if not path.exists():
                logger.info("Load skipped, no file path=%s", path)
                return False

            try:
                data = path.read_bytes()
            except OSError as e:
                raise TaskIOError(path, e.strerror or str(e)) from e

            try:
                tasks = self.deserialize(data)
            except TaskParseError:
                logger.warning("Failed to parse tasks file path=%s", path)
                raise

            self._tasks = tasks
            logger.info("Tasks loaded path=%s total=%d", path, len(tasks))
            return True
