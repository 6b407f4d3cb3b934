# src/tasker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Outcome(StrEnum):
    """Result of an operation that targets an existing task by id."""

    FOUND = "found"
    NOT_FOUND = "not_found"


@dataclass(slots=True)
class Task:
    id: int
    description: str
    completed: bool = False

    @property
    def checkbox(self) -> str:
        return "[x]" if self.completed else "[ ]"

    def to_dict(self) -> dict[str, object]:
        return {"id": self.id, "description": self.description, "completed": self.completed}
