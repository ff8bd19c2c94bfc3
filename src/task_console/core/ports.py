# src/task_console/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the console.

The console depends on Protocols instead of concrete implementations.
This keeps terminal I/O and storage swappable and makes testing easier.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Task


class LineIO(Protocol):
    """
    Line-based console collaborator.

    read_line() blocks until a full line is available and returns it without the newline.
    It raises EOFError when the stream is closed.
    """

    def read_line(self, prompt: str) -> str: ...
    def write(self, text: str) -> None: ...


class TaskRepo(Protocol):
    @property
    def unique_names(self) -> bool: ...

    def append(self, task: Task) -> None: ...
    def pop_last(self) -> Task | None: ...
    def find(self, name: str) -> int | None: ...
    def get(self, index: int) -> Task: ...
    def remove(self, name: str) -> Task: ...
    def clear(self) -> None: ...
    def tasks(self) -> list[Task]: ...
    def save_to_file(self, path: str | Path, *, overwrite: bool = True) -> bool: ...
    def load_from_file(self, path: str | Path) -> bool: ...


class ConsoleInputError(Exception):
    """The line reader failed (closed stream, terminal error) while a command was prompting."""
