"""Task store for managing the task collection.

This module provides the TaskStore class that owns the ordered list of
tasks, hands out task ids, applies mutations, and loads/saves the whole
collection through the storage layer. Nothing it does reaches a terminal:
callers render the returned messages and handle the raised TaskErrors.
"""

import dataclasses
import logging
from typing import Iterator, List, Optional

from taskmaster.errors import EmptyFieldError, MalformedDataError, TaskNotFoundError
from taskmaster.models import Task
from taskmaster.storage import JsonStorage, Storage, decode_tasks, encode_tasks

logger = logging.getLogger(__name__)

DESCRIPTION_FIELD = "Description"


class TaskStore:
    """In-memory task collection backed by a storage location.

    Tasks keep their insertion order. Ids are never reused or renumbered,
    so after a deletion ids and list positions diverge; every lookup goes
    through the id.

    Attributes:
        storage: Storage backend the collection is loaded from and saved to
        next_id: Id the next added task will receive
    """

    def __init__(self, storage: Optional[Storage] = None):
        """Initialize an empty TaskStore bound to a storage backend.

        Args:
            storage: Storage implementation to use. If None, uses JsonStorage
                    with the default file path.
        """
        self.storage = storage or JsonStorage()
        self._tasks: List[Task] = []
        self.next_id = 1

    def load(self) -> None:
        """Replace the collection with the stored one.

        A missing or blank file yields an empty collection. Tasks stored
        before ids existed (id 0) are given fresh ids above the highest
        stored one, in list order.

        Raises:
            MalformedDataError: If the stored content cannot be parsed
            StorageIOError: If the storage cannot be read
        """
        content = self.storage.read()
        if content is None or not content.strip():
            self._tasks = []
            self.next_id = 1
            logger.debug("No stored tasks, starting empty")
            return

        tasks = decode_tasks(content)

        current_max_id = 0
        seen = set()
        for task in tasks:
            if task.id == 0:
                continue
            if task.id in seen:
                raise MalformedDataError(f"duplicate task id {task.id}")
            seen.add(task.id)
            current_max_id = max(current_max_id, task.id)

        migrated = 0
        for task in tasks:
            if task.id == 0:
                current_max_id += 1
                task.id = current_max_id
                migrated += 1

        self._tasks = tasks
        self.next_id = current_max_id + 1
        if migrated:
            logger.info("Assigned ids to %d task(s) from an older file format", migrated)
        logger.debug("Loaded %d task(s), next id %d", len(tasks), self.next_id)

    def save(self) -> None:
        """Write the whole collection to storage.

        Raises:
            StorageIOError: If the storage cannot be written
        """
        self.storage.write(encode_tasks(self._tasks))
        logger.debug("Saved %d task(s)", len(self._tasks))

    def add(self, description: str) -> int:
        """Append a new task.

        Args:
            description: Task description; surrounding whitespace is stripped

        Returns:
            The id assigned to the new task

        Raises:
            EmptyFieldError: If the description is empty
        """
        description = _require_text(description)
        task_id = self.next_id
        self._tasks.append(Task(description=description, id=task_id))
        self.next_id += 1
        return task_id

    def find_id(self, task_id: int) -> Optional[int]:
        """Return the list position of the task with the given id, or None."""
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return None

    def get(self, task_id: int) -> Task:
        """Return a copy of the task with the given id.

        Raises:
            TaskNotFoundError: If no task has that id
        """
        return dataclasses.replace(self.get_mutable(task_id))

    def get_mutable(self, task_id: int) -> Task:
        """Return the stored task with the given id; changes to it are kept.

        Raises:
            TaskNotFoundError: If no task has that id
        """
        index = self.find_id(task_id)
        if index is None:
            raise TaskNotFoundError(task_id)
        return self._tasks[index]

    def complete(self, task_id: int) -> str:
        """Mark a task as completed.

        Returns:
            Confirmation message

        Raises:
            TaskNotFoundError: If no task has that id
        """
        task = self.get_mutable(task_id)
        task.mark_completed()
        return f"Completed Task: {task.description}"

    def prioritize(self, task_id: int) -> str:
        task = self.get_mutable(task_id)
        task.prioritize()
        return f"Prioritized Task: {task.description}"

    def deprioritize(self, task_id: int) -> str:
        task = self.get_mutable(task_id)
        task.deprioritize()
        return f"Deprioritized Task: {task.description}"

    def change_priority(self, task_id: int, prioritize: bool) -> str:
        """Raise (prioritize=True) or lower a task's priority by one level."""
        if prioritize:
            return self.prioritize(task_id)
        return self.deprioritize(task_id)

    def rename(self, task_id: int, description: str) -> str:
        """Change a task's description.

        Returns:
            Message showing the old and new description

        Raises:
            TaskNotFoundError: If no task has that id
            EmptyFieldError: If the new description is empty; the task
                is left unchanged
        """
        task = self.get_mutable(task_id)
        description = _require_text(description)
        old_description = task.description
        task.rename(description)
        return (
            f"Description of task {task_id} changed.\n"
            f'\tOld: "{old_description}"\n'
            f'\tNew: "{task.description}"'
        )

    def delete(self, task_id: int) -> str:
        """Remove a task. Remaining tasks keep their ids.

        Returns:
            Confirmation message

        Raises:
            TaskNotFoundError: If no task has that id
        """
        index = self.find_id(task_id)
        if index is None:
            raise TaskNotFoundError(task_id)
        removed = self._tasks.pop(index)
        return f"Deleted task ID {task_id}\n\t'{removed.description}'"

    def clear_completed(self) -> int:
        """Remove every completed task.

        Returns:
            Number of tasks removed
        """
        before = len(self._tasks)
        self._tasks = [task for task in self._tasks if not task.completed]
        return before - len(self._tasks)

    def list(self) -> List[Task]:
        """Return the tasks in store order."""
        return list(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def id_width(self) -> int:
        """Column width that fits every id handed out so far."""
        return self.next_id // 10 + 2


def _require_text(value: str) -> str:
    value = value.strip()
    if not value:
        raise EmptyFieldError(DESCRIPTION_FIELD)
    return value
