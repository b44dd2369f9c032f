"""Interactive shell for taskmaster.

The shell works on an already loaded TaskStore and never saves it; the
caller saves once the shell returns.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional

from rich.console import Console
from rich.text import Text

from taskmaster.display import print_message, print_tasks
from taskmaster.errors import ArgumentMismatchError, InputCancelledError, TaskError
from taskmaster.store import TaskStore

try:
    import readline
except ImportError:  # not available on every platform
    readline = None

logger = logging.getLogger(__name__)

PROMPT = "» "
QUIT_COMMANDS = ("q", "quit", "x", "exit")

HELP_ENTRIES = [
    ("l / list", "List all tasks", "bold cyan"),
    ("a / add <desc>", "Add a new task", "bold cyan"),
    ("c / complete <id>", "Mark a task as completed", "bold cyan"),
    ("up / + <id>", "Increase a task's priority", "bold cyan"),
    ("down / - <id>", "Decrease a task's priority", "bold cyan"),
    ("d / delete <id>", "Delete a task", "bold cyan"),
    ("ch / change <id> <desc>", "Change a task's description", "bold cyan"),
    ("clr / clear", "Clear all completed tasks", "bold cyan"),
    ("h / help / ?", "Show this help message", "bold yellow"),
    ("q / quit / x / exit", "Exit interactive mode", "bold red"),
]


class InteractiveShell:
    """Read-eval-print loop over a TaskStore.

    Attributes:
        store: The task store commands operate on
        console: Console all output is written to
        history_file: Where line history is kept, if line editing is available
    """

    def __init__(
        self,
        store: TaskStore,
        console: Optional[Console] = None,
        read_line: Optional[Callable[[str], str]] = None,
        history_file: Optional[Path] = None,
    ):
        """Initialize the shell.

        Args:
            store: Loaded task store
            console: Output console (defaults to a new stdout Console)
            read_line: Function reading one line given a prompt (defaults
                      to input(), which uses readline when it is available)
            history_file: History file to load on start and save on exit
        """
        self.store = store
        self.console = console or Console()
        self.history_file = history_file
        self._read_line = read_line or input
        self._line_editing = readline is not None and read_line is None
        self._commands: Dict[str, Callable[[List[str]], None]] = {
            "l": self.handle_list,
            "list": self.handle_list,
            "a": self.handle_add,
            "add": self.handle_add,
            "c": self.handle_complete,
            "complete": self.handle_complete,
            "+": self.handle_up,
            "up": self.handle_up,
            "-": self.handle_down,
            "down": self.handle_down,
            "d": self.handle_delete,
            "delete": self.handle_delete,
            "ch": self.handle_change,
            "change": self.handle_change,
            "clr": self.handle_clear,
            "clear": self.handle_clear,
            "h": self.handle_help,
            "help": self.handle_help,
            "?": self.handle_help,
        }

    def run(self) -> None:
        """Run the loop until a quit command or end of input."""
        self._load_history()
        print_message(self.console, "Starting interactive mode. Type 'h' or 'help' for commands.")
        self.print_help()

        while True:
            try:
                line = self.read_input(PROMPT)
            except InputCancelledError:
                print_message(self.console, "\nExiting interactive mode.", "yellow")
                break

            if not self.execute(line):
                break

        self._save_history()

    def execute(self, line: str) -> bool:
        """Run one command line.

        Returns:
            False when the line asks the shell to quit, True otherwise
        """
        parts = line.split()
        if not parts:
            return True

        command, args = parts[0].lower(), parts[1:]
        if command in QUIT_COMMANDS:
            return False

        handler = self._commands.get(command)
        if handler is None:
            print_message(self.console, f"unknown command: '{command}'. Type 'h' for help.", "red")
            return True

        try:
            handler(args)
        except TaskError as exc:
            logger.debug("Command %r failed: %s", command, exc)
            print_message(self.console, str(exc), "red")
        return True

    def read_input(self, prompt: str, initial: str = "") -> str:
        """Read one trimmed line.

        Args:
            prompt: Prompt to show
            initial: Text to pre-fill the line with (needs line editing)

        Raises:
            InputCancelledError: On Ctrl-C or end of input
        """
        if initial and self._line_editing:
            readline.set_startup_hook(lambda: readline.insert_text(initial))
        try:
            return self._read_line(prompt).strip()
        except (EOFError, KeyboardInterrupt):
            raise InputCancelledError() from None
        finally:
            if initial and self._line_editing:
                readline.set_startup_hook()

    def print_help(self) -> None:
        self.console.print(Text("\nInteractive Mode Commands:", style="bold underline"))
        for usage, summary, style in HELP_ENTRIES:
            self.console.print(Text.assemble("  ", (f"{usage:<25}", style), f" - {summary}"), highlight=False)
        self.console.print()

    # ---- command handlers ----

    def handle_list(self, args: List[str]) -> None:
        print_tasks(self.console, self.store)

    def handle_add(self, args: List[str]) -> None:
        description = " ".join(args) if args else self.read_input("Description> ")
        task_id = self.store.add(description)
        print_message(self.console, f"Added task with ID {task_id}.", "green")

    def handle_complete(self, args: List[str]) -> None:
        print_message(self.console, self.store.complete(self._task_id(args)), "green")

    def handle_up(self, args: List[str]) -> None:
        print_message(self.console, self.store.change_priority(self._task_id(args), True), "green")

    def handle_down(self, args: List[str]) -> None:
        print_message(self.console, self.store.change_priority(self._task_id(args), False), "green")

    def handle_delete(self, args: List[str]) -> None:
        print_message(self.console, self.store.delete(self._task_id(args)), "green")

    def handle_change(self, args: List[str]) -> None:
        raw_id = args[0] if args else self.read_input("ID> ")
        task_id = _parse_id(raw_id)
        old_description = self.store.get(task_id).description

        if len(args) >= 2:
            new_description = " ".join(args[1:])
        else:
            new_description = self.read_input("Description> ", initial=old_description)

        self.store.rename(task_id, new_description)
        self.console.print(
            Text.assemble(
                "Updated task description from '",
                (old_description, "yellow"),
                "' to '",
                (self.store.get(task_id).description, "green"),
                "'.",
            ),
            highlight=False,
            soft_wrap=True,
        )

    def handle_clear(self, args: List[str]) -> None:
        cleared = self.store.clear_completed()
        self.console.print(
            Text.assemble("Cleared ", (str(cleared), "bold green"), " completed tasks."),
            highlight=False,
        )

    def handle_help(self, args: List[str]) -> None:
        self.print_help()

    # ---- helpers ----

    def _task_id(self, args: List[str]) -> int:
        raw_id = args[0] if len(args) == 1 else self.read_input("ID> ")
        return _parse_id(raw_id)

    def _load_history(self) -> None:
        if not self._line_editing or self.history_file is None:
            return
        try:
            readline.read_history_file(str(self.history_file))
        except OSError:
            logger.debug("No history loaded from %s", self.history_file)

    def _save_history(self) -> None:
        if not self._line_editing or self.history_file is None:
            return
        try:
            readline.write_history_file(str(self.history_file))
        except OSError as exc:
            print_message(self.console, f"Error saving history: {exc}", "red")


def _parse_id(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ArgumentMismatchError(f"wrong argument: '{raw}' is not a valid task ID.") from None
