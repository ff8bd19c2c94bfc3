# src/task_console/connectors/console_connector.py

from __future__ import annotations

import logging
from enum import StrEnum

from ..cli.commands import CommandRegistry
from ..cli.commands import registry as command_registry
from ..core.ports import ConsoleInputError, LineIO
from ..core.state import AppState
from ..tasks.errors import TaskStoreError

logger = logging.getLogger(__name__)

COMMAND_PROMPT = "\nEnter command index: "
# Consecutive read failures at the command prompt before the loop gives up.
MAX_INPUT_ERRORS = 3


class ConsoleState(StrEnum):
    RUNNING = "running"
    EXITED = "exited"


class StdConsoleIO:
    """LineIO over input()/print()."""

    def read_line(self, prompt: str) -> str:
        return input(prompt)

    def write(self, text: str) -> None:
        print(text, flush=True)


class ConsoleController:
    """
    Menu loop: one command per iteration, one store operation per command.

    Store failures (missing task, unreadable file, ...) are reported and the loop goes on.
    EOF or Ctrl+C at the command prompt ends the loop.
    """

    def __init__(
        self,
        state: AppState,
        io: LineIO | None = None,
        registry: CommandRegistry | None = None,
    ) -> None:
        self.state = state
        self.io: LineIO = io or StdConsoleIO()
        self.registry = registry or command_registry
        self.status = ConsoleState.RUNNING
        self._input_errors = 0

    def print_menu(self) -> None:
        self.io.write("\n" + self.registry.build_help())

    def step(self) -> ConsoleState:
        if self.status is ConsoleState.EXITED:
            return self.status

        try:
            line = self.io.read_line(COMMAND_PROMPT).strip()
        except (EOFError, KeyboardInterrupt):
            logger.info("Console input closed, exiting.")
            self.status = ConsoleState.EXITED
            return self.status
        except OSError as e:
            self.io.write(f"Error user input: {e}")
            self._input_errors += 1
            if self._input_errors >= MAX_INPUT_ERRORS:
                logger.warning("Console input failed %d times in a row, exiting.", self._input_errors)
                self.status = ConsoleState.EXITED
            return self.status

        self._input_errors = 0

        if not line:
            return self.status

        if self.registry.is_exit(line):
            logger.info("Console exit command received.")
            self.status = ConsoleState.EXITED
            return self.status

        try:
            reply = self.registry.handle(self.state, self.io, line)
        except ConsoleInputError as e:
            reply = f"Error user input: {e}"
        except TaskStoreError as e:
            logger.info("Command %r failed: %s", line, e)
            reply = str(e)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is None:
            reply = "Invalid input"
        if reply:
            self.io.write(reply)
        return self.status

    def run(self, greeting: str | None = None) -> int:
        logger.info("Console connector started.")
        if greeting:
            self.io.write(greeting)
        self.print_menu()

        try:
            while self.step() is ConsoleState.RUNNING:
                pass
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            self.status = ConsoleState.EXITED

        logger.info("Console connector finished.")
        return 0


def run_console_loop(state: AppState, io: LineIO | None = None, *, greeting: str | None = None) -> int:
    return ConsoleController(state, io).run(greeting)
