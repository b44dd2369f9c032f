"""taskmaster: a command-line task list manager."""

__version__ = "0.3.0"
