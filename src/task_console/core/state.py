# src/task_console/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from .ports import TaskRepo


@dataclass
class AppState:
    # Settings are stored on the state so command handlers can read them.
    settings: object

    task_store: TaskRepo
