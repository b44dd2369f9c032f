"""Core models for taskmaster.

This module defines the core data structures for task management:
- Priority: Enum for the three task priority levels
- Task: A dataclass representing a single to-do item and its state changes
"""

from dataclasses import dataclass
from enum import Enum


class Priority(Enum):
    """Task priority levels, valued by their persisted tag."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @property
    def symbol(self) -> str:
        """Single-character marker used when listing tasks."""
        return _SYMBOLS[self]

    @property
    def color(self) -> str:
        """Terminal color used for the priority marker."""
        return _COLORS[self]

    def raised(self) -> "Priority":
        """Return the next higher priority, saturating at HIGH."""
        return _RAISE[self]

    def lowered(self) -> "Priority":
        """Return the next lower priority, saturating at LOW."""
        return _LOWER[self]


_SYMBOLS = {Priority.LOW: "▼", Priority.MEDIUM: "◆", Priority.HIGH: "▲"}
_COLORS = {Priority.LOW: "green", Priority.MEDIUM: "yellow", Priority.HIGH: "red"}
_RAISE = {Priority.LOW: Priority.MEDIUM, Priority.MEDIUM: Priority.HIGH, Priority.HIGH: Priority.HIGH}
_LOWER = {Priority.LOW: Priority.LOW, Priority.MEDIUM: Priority.LOW, Priority.HIGH: Priority.MEDIUM}


@dataclass
class Task:
    """Task model representing a single to-do item.

    Attributes:
        description: What needs to be done
        completed: Whether the task has been completed
        priority: Priority level of the task
        id: Identifier assigned by the store (0 until one is assigned)
    """

    description: str
    completed: bool = False
    priority: Priority = Priority.MEDIUM
    id: int = 0

    def prioritize(self) -> None:
        """Raise the priority one level (no-op when already HIGH)."""
        self.priority = self.priority.raised()

    def deprioritize(self) -> None:
        """Lower the priority one level (no-op when already LOW)."""
        self.priority = self.priority.lowered()

    def mark_completed(self) -> None:
        self.completed = True

    def rename(self, description: str) -> None:
        self.description = description

    @property
    def status_marker(self) -> str:
        return "[✓]" if self.completed else "[·]"
