"""Storage layer for taskmaster.

This module provides an abstract storage interface, a JSON file-based
implementation that replaces the file atomically on every write, and the
codec that converts between Task objects and their persisted JSON form.
"""

import json
import logging
import os
import stat
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Iterable, List, Optional, Union

from taskmaster.config import get_settings
from taskmaster.errors import MalformedDataError, StorageIOError
from taskmaster.models import Priority, Task

logger = logging.getLogger(__name__)


class Storage(ABC):
    """Abstract base class for a place that holds one UTF-8 text blob."""

    @abstractmethod
    def read(self) -> Optional[str]:
        """Read the stored text.

        Returns:
            The stored text, or None if nothing has been stored yet
        """
        pass

    @abstractmethod
    def write(self, text: str) -> None:
        """Replace the stored text.

        Args:
            text: New content
        """
        pass

    @abstractmethod
    def delete(self) -> None:
        """Delete all data from storage."""
        pass


class JsonStorage(Storage):
    """JSON file-based storage implementation.

    Writes go to a temporary file in the target directory which is then
    renamed over the target, so a reader never sees a half-written file.

    Attributes:
        file_path: Path to the JSON storage file
    """

    def __init__(self, file_path: Optional[Union[str, Path]] = None):
        """Initialize JsonStorage with a file path.

        Args:
            file_path: Path to the JSON file for storage. If None, uses
                      the TASKMASTER_FILE environment variable or defaults
                      to ~/.tasks.json
        """
        if file_path is None:
            file_path = get_settings().task_file
        self.file_path = Path(file_path)

    def read(self) -> Optional[str]:
        """Read the JSON file.

        Returns:
            File content, or None if the file doesn't exist

        Raises:
            StorageIOError: If the file exists but cannot be read
        """
        try:
            return self.file_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageIOError(str(exc), str(self.file_path)) from exc

    def write(self, text: str) -> None:
        """Atomically replace the JSON file with text.

        A symlinked file is replaced at its target, so the link survives,
        and an existing file keeps its permission bits.

        Args:
            text: Content to store

        Raises:
            StorageIOError: If the file cannot be written
        """
        tmp_name = None
        try:
            target = self.file_path.resolve()
            # Ensure parent directory exists
            target.parent.mkdir(parents=True, exist_ok=True)

            fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            if target.exists():
                os.chmod(tmp_name, stat.S_IMODE(target.stat().st_mode))
            os.replace(tmp_name, target)
            tmp_name = None
            logger.debug("Wrote %d characters to %s", len(text), target)
        except OSError as exc:
            raise StorageIOError(str(exc), str(self.file_path)) from exc
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

    def delete(self) -> None:
        """Delete the JSON storage file.

        If the file doesn't exist, this method does nothing.
        """
        if self.file_path.exists():
            self.file_path.unlink()


def encode_tasks(tasks: Iterable[Task]) -> str:
    """Serialize tasks to a pretty-printed JSON array.

    Args:
        tasks: Tasks in the order they should be stored

    Returns:
        JSON text
    """
    serializable_tasks = [
        {
            "id": task.id,
            "description": task.description,
            "completed": task.completed,
            "priority": task.priority.value,
        }
        for task in tasks
    ]
    return json.dumps(serializable_tasks, indent=2, ensure_ascii=False)


def decode_tasks(text: str) -> List[Task]:
    """Parse JSON text into tasks.

    Records written before ids existed have no "id" key; they come back
    with id 0. A missing "priority" defaults to MEDIUM.

    Args:
        text: JSON text as written by encode_tasks

    Returns:
        Tasks in stored order

    Raises:
        MalformedDataError: If the text is not a valid task list
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedDataError(str(exc)) from exc

    if not isinstance(data, list):
        raise MalformedDataError(f"expected a list of tasks, got {type(data).__name__}")

    return [_decode_task(index, record) for index, record in enumerate(data)]


def _decode_task(index: int, record: Any) -> Task:
    if not isinstance(record, dict):
        raise MalformedDataError(f"task #{index} is not an object")

    description = record.get("description")
    if not isinstance(description, str):
        raise MalformedDataError(f"task #{index} has no text 'description'")

    completed = record.get("completed")
    if not isinstance(completed, bool):
        raise MalformedDataError(f"task #{index} has no boolean 'completed'")

    task_id = record.get("id", 0)
    if isinstance(task_id, bool) or not isinstance(task_id, int) or task_id < 0:
        raise MalformedDataError(f"task #{index} has an invalid 'id': {task_id!r}")

    raw_priority = record.get("priority", Priority.MEDIUM.value)
    try:
        priority = Priority(raw_priority)
    except ValueError as exc:
        raise MalformedDataError(f"task #{index} has an unknown 'priority': {raw_priority!r}") from exc

    return Task(description=description, completed=completed, priority=priority, id=task_id)
