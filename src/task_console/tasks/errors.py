# src/task_console/tasks/errors.py

from __future__ import annotations

from pathlib import Path


class TaskStoreError(Exception):
    """Base class for task store failures. str(err) is safe to show to the user."""


class TaskNotFoundError(TaskStoreError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'Task "{name}" not found')


class DuplicateTaskError(TaskStoreError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'Task "{name}" already exists')


class TaskIOError(TaskStoreError):
    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f'Error accessing file "{path}": {reason}')


class TaskParseError(TaskStoreError):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Error reading tasks: {reason}")
