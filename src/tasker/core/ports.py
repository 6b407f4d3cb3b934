# src/tasker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the CLI.

Commands depend on this Protocol instead of a concrete store,
so the SQLite and JSON backends are interchangeable and tests can use fakes.
"""

from typing import Protocol

from ..tasks.task_models import Outcome, Task


class TaskRepo(Protocol):
    # Reads
    def list_tasks(self) -> list[Task]: ...
    def get(self, task_id: int) -> Task | None: ...
    def count_tasks(self) -> int: ...

    # Mutations
    def add(self, description: str) -> int: ...
    def complete(self, task_id: int) -> Outcome: ...
    def delete(self, task_id: int) -> Outcome: ...

    # Lifecycle: save() is the single persistence point per invocation.
    def save(self) -> None: ...
    def close(self) -> None: ...
