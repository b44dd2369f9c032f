"""Exceptions raised by taskmaster.

Every error derives from TaskError so callers can catch the whole family
with a single except clause and print the message.
"""

from typing import Optional


class TaskError(Exception):
    """Base class for all taskmaster errors."""


class TaskNotFoundError(TaskError):
    """No task with the requested id exists in the store."""

    def __init__(self, task_id: int):
        super().__init__(f"Task with id {task_id} not found")
        self.task_id = task_id


class MalformedDataError(TaskError):
    """The task file content could not be parsed into tasks."""

    def __init__(self, detail: str):
        super().__init__(f"Error parsing/serializing JSON data: {detail}")
        self.detail = detail


class EmptyFieldError(TaskError):
    """A required text field was empty after trimming."""

    def __init__(self, field: str):
        super().__init__(f"Field '{field}' needs a value, please provide one")
        self.field = field


class StorageIOError(TaskError):
    """Reading or writing the task file failed."""

    def __init__(self, detail: str, path: Optional[str] = None):
        super().__init__(f"File I/O error: {detail}")
        self.detail = detail
        self.path = path


class UnknownTaskError(TaskError):
    """Catch-all for conditions outside the other error kinds."""

    def __init__(self, detail: str):
        super().__init__(f"An unknown error occured: {detail}")
        self.detail = detail


class InputCancelledError(TaskError):
    """The user aborted an interactive prompt (Ctrl-C or end of input)."""

    def __init__(self):
        super().__init__("User input was cancelled")


class ArgumentMismatchError(TaskError):
    """An interactive command got an argument it cannot use."""

    def __init__(self, detail: str):
        super().__init__(f"Argument mismatch: {detail}")
        self.detail = detail
