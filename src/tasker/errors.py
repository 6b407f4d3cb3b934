# src/tasker/errors.py

"""
Error taxonomy.

"Task not found" is deliberately absent: it is a normal outcome
(see tasks.task_models.Outcome), not a failure.
"""

from __future__ import annotations


class TaskerError(Exception):
    """Base class for every error the CLI reports to the user."""


class UsageError(TaskerError):
    """Malformed or missing command-line arguments."""

    def __init__(self, message: str, usage: str = "") -> None:
        super().__init__(message)
        self.usage = usage


class InvalidInput(TaskerError, ValueError):
    """An argument was parsed but its value is not acceptable (e.g. empty description)."""


class StorageUnavailable(TaskerError):
    """Backing file cannot be created, opened, read or written."""


class CorruptData(StorageUnavailable):
    """Backing file exists but its content is not a valid task store."""
