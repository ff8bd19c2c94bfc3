# src/task_console/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

DISPLAY_TIME_FORMAT = "%d-%m-%Y  %H:%M:%S"


class Priority(StrEnum):
    """
    Task priority.

    Notes:
    - values are the names written to disk ("VeryHigh", not "Very High")
    - there is no "unset" member; interactive entry retries until a real level is picked
    """

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    VERY_HIGH = "VeryHigh"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def from_index(cls, raw: str | None) -> Priority | None:
        """Map a menu index ("1".."4") to a level, None for anything else."""
        if raw is None:
            return None
        return _BY_INDEX.get(raw.strip())


_LABELS: dict[Priority, str] = {
    Priority.LOW: "Low",
    Priority.MEDIUM: "Medium",
    Priority.HIGH: "High",
    Priority.VERY_HIGH: "Very High",
}

_BY_INDEX: dict[str, Priority] = {
    "1": Priority.LOW,
    "2": Priority.MEDIUM,
    "3": Priority.HIGH,
    "4": Priority.VERY_HIGH,
}

PRIORITY_PROMPT = "Enter index of priority (1. Low, 2. Medium, 3. High, 4. Very High): "


@dataclass(frozen=True, slots=True)
class Task:
    name: str
    description: str
    priority: Priority
    created_at: datetime

    def __post_init__(self) -> None:
        # Naive timestamps are local time; every Task carries an offset.
        if self.created_at.tzinfo is None:
            object.__setattr__(self, "created_at", self.created_at.astimezone())

    @classmethod
    def new(cls, name: str, description: str, priority: Priority) -> Task:
        return cls(
            name=name,
            description=description,
            priority=priority,
            created_at=datetime.now().astimezone(),
        )


def format_task(task: Task) -> str:
    return (
        f"{task.name} | {task.priority.label} | {task.created_at.strftime(DISPLAY_TIME_FORMAT)}\n"
        f'"{task.description}"'
    )
