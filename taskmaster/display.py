"""Terminal rendering for taskmaster.

All output goes through a rich Console with markup disabled, so brackets
in task descriptions are printed as typed.
"""

from rich.console import Console
from rich.text import Text

from taskmaster.models import Task
from taskmaster.store import TaskStore


def render_task(task: Task, width: int) -> Text:
    """Build the display line for a single task.

    Args:
        task: Task to render
        width: Width the id is right-aligned to

    Returns:
        Styled text of the form "<id>: <priority> <status> <description>"
    """
    status_style = "bold green" if task.completed else "magenta"
    description_style = "dim" if task.completed else ""
    return Text.assemble(
        (f"{task.id:>{width}}", "bold cyan"),
        ": ",
        (task.priority.symbol, task.priority.color),
        " ",
        (task.status_marker, status_style),
        " ",
        (task.description, description_style),
    )


def print_tasks(console: Console, store: TaskStore) -> None:
    """Print every task in store order, ids aligned to the store's id width."""
    tasks = store.list()
    if not tasks:
        console.print(Text("No tasks, all done!", style="green"), soft_wrap=True)
        return

    console.print(Text("Your tasks:", style="bold underline"), soft_wrap=True)
    for task in tasks:
        console.print(render_task(task, store.id_width), highlight=False, soft_wrap=True)


def print_message(console: Console, message: str, style: str = "") -> None:
    console.print(Text(message, style=style), highlight=False, soft_wrap=True)


def print_error(console: Console, error: Exception) -> None:
    """Print an error as "Error: <message>" in bold red."""
    console.print(Text(f"Error: {error}", style="bold red"), highlight=False, soft_wrap=True)
