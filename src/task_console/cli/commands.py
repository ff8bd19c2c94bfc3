# src/task_console/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from ..core.ports import ConsoleInputError, LineIO
from ..core.state import AppState
from ..tasks.errors import DuplicateTaskError
from ..tasks.task_models import PRIORITY_PROMPT, Priority, Task, format_task

CommandHandler = Callable[[AppState, LineIO, list[str]], str]

EXIT_COMMAND = "9"
EXIT_ALIASES = ("exit", "quit", "q")

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Menu command registry used by the console controller (h, 1..8, add, list, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def is_exit(self, line: str) -> bool:
        parts = line.split()
        return bool(parts) and parts[0].lower() in (EXIT_COMMAND, *EXIT_ALIASES)

    def handle(self, state: AppState, io: LineIO, line: str) -> str | None:
        """
        Handle a line like "3" or "remove Bread".
        Returns the text to show, or None if the first token is not a command.
        """
        parts = line.split()
        if not parts:
            return None

        handler = self._handlers.get(parts[0].lower())
        if handler is None:
            return None

        return handler(state, io, parts[1:])

    def build_help(self) -> str:
        lines = ["h - for help", ""]
        for name, help_text in self._help.items():
            if name.isdigit():
                lines.append(f"{name}. {help_text}")
        lines.append(f"{EXIT_COMMAND}. Exit")
        return "\n".join(lines)


registry = CommandRegistry()


def _ask(io: LineIO, prompt: str) -> str:
    try:
        return io.read_line(prompt).strip()
    except (EOFError, OSError) as e:
        raise ConsoleInputError(str(e) or type(e).__name__) from e


def _arg_or_ask(io: LineIO, args: list[str], prompt: str) -> str:
    if args:
        return " ".join(args).strip()
    return _ask(io, prompt)


def _resolve_path(state: AppState, raw: str) -> Path:
    if raw:
        return Path(raw).expanduser()
    default = Path(getattr(state.settings, "default_tasks_path", "tasks.json"))
    default.parent.mkdir(parents=True, exist_ok=True)
    return default


def cmd_help(state: AppState, io: LineIO, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, io: LineIO, args: list[str]) -> str:
    name = _arg_or_ask(io, args, "Enter name of new task: ")
    if not name:
        return "Name required."
    if state.task_store.unique_names and state.task_store.find(name) is not None:
        raise DuplicateTaskError(name)
    description = _ask(io, "Enter description: ")

    priority: Priority | None = None
    while priority is None:
        priority = Priority.from_index(_ask(io, PRIORITY_PROMPT))

    state.task_store.append(Task.new(name, description, priority))
    return f'Task "{name}" added'


def cmd_pop(state: AppState, io: LineIO, args: list[str]) -> str:
    task = state.task_store.pop_last()
    if task is None:
        return "List of tasks is empty"
    return f'Task "{task.name}" removed'


def cmd_remove(state: AppState, io: LineIO, args: list[str]) -> str:
    name = _arg_or_ask(io, args, "Enter name of task that you wanna remove: ")
    task = state.task_store.remove(name)
    return f'Task "{task.name}" removed'


def cmd_find(state: AppState, io: LineIO, args: list[str]) -> str:
    name = _arg_or_ask(io, args, "Enter name of task that you wanna find: ")
    index = state.task_store.find(name)
    if index is None:
        return f'Task "{name}" not found'
    return format_task(state.task_store.get(index))


def cmd_list(state: AppState, io: LineIO, args: list[str]) -> str:
    tasks = state.task_store.tasks()
    if not tasks:
        return "List of tasks is empty"
    return "\n\n".join(format_task(t) for t in tasks)


def cmd_clear(state: AppState, io: LineIO, args: list[str]) -> str:
    state.task_store.clear()
    return "All tasks removed"


def cmd_save(state: AppState, io: LineIO, args: list[str]) -> str:
    raw = _arg_or_ask(io, args, "Enter path to file where to store tasks: ")
    path = _resolve_path(state, raw)
    overwrite = bool(getattr(state.settings, "save_overwrite", True))
    logger.debug("Save requested path=%s overwrite=%s", path, overwrite)

    if not state.task_store.save_to_file(path, overwrite=overwrite):
        return f'File "{path}" already exists, nothing written'
    return f'Tasks stored to "{path}"'


def cmd_load(state: AppState, io: LineIO, args: list[str]) -> str:
    raw = _arg_or_ask(io, args, "Enter path to file that store tasks: ")
    path = _resolve_path(state, raw)
    logger.debug("Load requested path=%s", path)

    if not state.task_store.load_from_file(path):
        return f'File "{path}" not found'
    return f'Loaded {len(state.task_store.tasks())} tasks from "{path}"'


registry.register("h", cmd_help, help_text="Help", aliases=["help", "?"])
registry.register("1", cmd_add, help_text="Add Task", aliases=["add"])
registry.register("2", cmd_pop, help_text="Pop Task", aliases=["pop"])
registry.register("3", cmd_remove, help_text="Remove Task", aliases=["remove", "rm"])
registry.register("4", cmd_find, help_text="Find Task", aliases=["find"])
registry.register("5", cmd_list, help_text="List of Tasks", aliases=["list", "ls"])
registry.register("6", cmd_clear, help_text="Remove all Tasks", aliases=["clear"])
registry.register("7", cmd_save, help_text="Store Tasks to file", aliases=["save"])
registry.register("8", cmd_load, help_text="Read Tasks from file", aliases=["load"])
