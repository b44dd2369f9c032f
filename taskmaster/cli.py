"""Command-line interface for taskmaster.

This module provides the CLI interface for managing tasks using argparse.
It supports the following commands (aliases in parentheses):
- add (a): Create a new task
- change (ch): Change a task's description
- list (l): List all tasks
- complete (c): Mark a task as completed
- up / down: Raise or lower a task's priority
- delete (d): Delete a task
- clear (clr): Remove all completed tasks
- interactive (i): Start the interactive shell

Every run loads the task file, executes one command and saves the file.
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console

from taskmaster import __version__
from taskmaster.config import get_settings
from taskmaster.display import print_error, print_message, print_tasks
from taskmaster.errors import TaskError, UnknownTaskError
from taskmaster.interactive import InteractiveShell
from taskmaster.logging_setup import setup_logging
from taskmaster.storage import JsonStorage
from taskmaster.store import TaskStore

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="taskmaster",
        description="A simple commandline task manager tool",
        epilog="For more detailed help on a specific command, use: taskmaster <COMMAND> --help",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--file", help="Task file to use (default: $TASKMASTER_FILE or ~/.tasks.json)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Add command
    add_parser = subparsers.add_parser("add", aliases=["a"], help="Add a new task")
    add_parser.add_argument("description", nargs="+", help="The description of the task to be added")
    add_parser.set_defaults(handler=cmd_add)

    # Change command
    change_parser = subparsers.add_parser("change", aliases=["ch"], help="Change description of a task")
    change_parser.add_argument("id", type=int, help="The ID of the task you want to change")
    change_parser.add_argument("description", nargs="+", help="The new description for the task")
    change_parser.set_defaults(handler=cmd_change)

    # List command
    list_parser = subparsers.add_parser("list", aliases=["l"], help="List all tasks")
    list_parser.set_defaults(handler=cmd_list)

    # Complete command
    complete_parser = subparsers.add_parser("complete", aliases=["c"], help="Mark a task as completed")
    complete_parser.add_argument("id", type=int, help="The ID of the task to mark as complete")
    complete_parser.set_defaults(handler=cmd_complete)

    # Priority commands
    up_parser = subparsers.add_parser("up", help="Rank up the task's priority")
    up_parser.add_argument("id", type=int, help="The ID of the task whose priority should be raised")
    up_parser.set_defaults(handler=cmd_up)

    down_parser = subparsers.add_parser("down", help="Rank down the task's priority")
    down_parser.add_argument("id", type=int, help="The ID of the task whose priority should be lowered")
    down_parser.set_defaults(handler=cmd_down)

    # Delete command
    delete_parser = subparsers.add_parser("delete", aliases=["d"], help="Delete a task")
    delete_parser.add_argument("id", type=int, help="The ID of the task to delete")
    delete_parser.set_defaults(handler=cmd_delete)

    # Clear command
    clear_parser = subparsers.add_parser("clear", aliases=["clr"], help="Clear all completed tasks from the list")
    clear_parser.set_defaults(handler=cmd_clear)

    # Interactive command
    interactive_parser = subparsers.add_parser("interactive", aliases=["i"], help="Change into interactive mode")
    interactive_parser.set_defaults(handler=cmd_interactive)

    return parser


def build_description(words: List[str]) -> str:
    """Join the words of a multi-word description with single spaces."""
    return " ".join(words).strip()


def cmd_add(args: argparse.Namespace, store: TaskStore, console: Console) -> None:
    """Handle the 'add' command."""
    task_id = store.add(build_description(args.description))
    print_message(console, f"Added Task #{task_id}: {store.get(task_id).description}")


def cmd_change(args: argparse.Namespace, store: TaskStore, console: Console) -> None:
    """Handle the 'change' command."""
    print_message(console, store.rename(args.id, build_description(args.description)))


def cmd_list(args: argparse.Namespace, store: TaskStore, console: Console) -> None:
    """Handle the 'list' command."""
    print_tasks(console, store)


def cmd_complete(args: argparse.Namespace, store: TaskStore, console: Console) -> None:
    """Handle the 'complete' command."""
    print_message(console, store.complete(args.id))


def cmd_up(args: argparse.Namespace, store: TaskStore, console: Console) -> None:
    print_message(console, store.prioritize(args.id))


def cmd_down(args: argparse.Namespace, store: TaskStore, console: Console) -> None:
    print_message(console, store.deprioritize(args.id))


def cmd_delete(args: argparse.Namespace, store: TaskStore, console: Console) -> None:
    """Handle the 'delete' command."""
    print_message(console, store.delete(args.id))


def cmd_clear(args: argparse.Namespace, store: TaskStore, console: Console) -> None:
    """Handle the 'clear' command."""
    cleared = store.clear_completed()
    print_message(console, f"Cleared {cleared} completed tasks")


def cmd_interactive(args: argparse.Namespace, store: TaskStore, console: Console) -> None:
    """Handle the 'interactive' command.

    Line history is skipped when no history file can be determined.
    """
    try:
        history_file = get_settings().history_file
    except UnknownTaskError as exc:
        logger.debug("Running without history: %s", exc)
        history_file = None

    shell = InteractiveShell(store, console=console, history_file=history_file)
    shell.run()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:]

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    console = Console()
    error_console = Console(stderr=True)

    try:
        settings = get_settings()
        setup_logging("DEBUG" if args.verbose else settings.log_level)

        store = TaskStore(JsonStorage(args.file or settings.task_file))
        store.load()
        args.handler(args, store, console)
        store.save()
    except TaskError as exc:
        logger.debug("Command %r failed", args.command, exc_info=True)
        print_error(error_console, exc)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
