# src/tasker/tasks/json_store.py

"""
JSON document task store.

The whole collection is loaded once, mutated in memory, and written back
by save() at the end of the invocation. The write goes to a sibling
temp file first and is moved into place with os.replace, so a crash
mid-write never truncates the previous document.

Document layout:
    {"tasks": [{"id": 1, "description": "...", "completed": false}], "next_id": 2}
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path
from typing import Any

from ..errors import CorruptData, InvalidInput, StorageUnavailable
from .task_models import Outcome, Task

logger = logging.getLogger(__name__)

FIRST_ID = 1


class JsonTaskStore:
    def __init__(self, path: str | Path = "tasks.json") -> None:
        self._path = Path(path)
        self._tasks: list[Task] = []
        self._next_id = FIRST_ID
        self._dirty = False

        raw = self._read()
        if raw is None:
            # Absent or empty file: materialize an empty document right away.
            self._dirty = True
            self.save()
        else:
            self._tasks, self._next_id = self._parse(raw)
        logger.info("JsonTaskStore ready path=%s total=%s", self._path, len(self._tasks))

    @property
    def path(self) -> Path:
        return self._path

    # ---- low-level helpers ----

    def _read(self) -> str | None:
        try:
            if not self._path.exists():
                return None
            text = self._path.read_text("utf-8")
        except UnicodeDecodeError as exc:
            raise CorruptData(f"{self._path}: not valid UTF-8 ({exc})") from exc
        except OSError as exc:
            raise StorageUnavailable(f"cannot read {self._path}: {exc}") from exc
        return text if text.strip() else None

    def _parse(self, raw: str) -> tuple[list[Task], int]:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CorruptData(f"{self._path}: not valid JSON ({exc})") from exc

        if not isinstance(data, dict):
            raise CorruptData(f"{self._path}: expected an object at top level")
        items = data.get("tasks")
        next_id = data.get("next_id")
        if not isinstance(items, list):
            raise CorruptData(f"{self._path}: 'tasks' must be a list")
        if not _is_int(next_id):
            raise CorruptData(f"{self._path}: 'next_id' must be an integer")

        tasks: list[Task] = []
        seen: set[int] = set()
        for i, item in enumerate(items):
            task = self._parse_task(item, i)
            if task.id in seen:
                raise CorruptData(f"{self._path}: duplicate task id {task.id}")
            seen.add(task.id)
            tasks.append(task)

        floor = max(seen, default=FIRST_ID - 1) + 1
        if next_id < floor:
            logger.warning(
                "next_id=%s in %s is not above stored ids; raising it to %s", next_id, self._path, floor
            )
            next_id = floor
        return tasks, next_id

    def _parse_task(self, item: Any, index: int) -> Task:
        if not isinstance(item, dict):
            raise CorruptData(f"{self._path}: tasks[{index}] must be an object")
        task_id = item.get("id")
        description = item.get("description")
        completed = item.get("completed")
        if not _is_int(task_id) or task_id < 0:
            raise CorruptData(f"{self._path}: tasks[{index}].id must be a non-negative integer")
        if not isinstance(description, str):
            raise CorruptData(f"{self._path}: tasks[{index}].description must be a string")
        if not isinstance(completed, bool):
            raise CorruptData(f"{self._path}: tasks[{index}].completed must be a boolean")
        return Task(id=task_id, description=description, completed=completed)

    def _find(self, task_id: int) -> int | None:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return None

    # ---- public API ----

    def count_tasks(self) -> int:
        return len(self._tasks)

    def add(self, description: str) -> int:
        if not description or not description.strip():
            raise InvalidInput("description is required")

        task_id = self._next_id
        self._tasks.append(Task(id=task_id, description=description.strip()))
        self._next_id += 1
        self._dirty = True
        logger.debug("Task added id=%s", task_id)
        return task_id

    def list_tasks(self) -> list[Task]:
        return [Task(t.id, t.description, t.completed) for t in self._tasks]

    def get(self, task_id: int) -> Task | None:
        i = self._find(task_id)
        if i is None:
            return None
        t = self._tasks[i]
        return Task(t.id, t.description, t.completed)

    def complete(self, task_id: int) -> Outcome:
        i = self._find(task_id)
        if i is None:
            return Outcome.NOT_FOUND
        task = self._tasks[i]
        if not task.completed:
            task.completed = True
            self._dirty = True
            logger.debug("Task completed id=%s", task_id)
        return Outcome.FOUND

    def delete(self, task_id: int) -> Outcome:
        i = self._find(task_id)
        if i is None:
            return Outcome.NOT_FOUND
        del self._tasks[i]
        self._dirty = True
        logger.debug("Task deleted id=%s", task_id)
        return Outcome.FOUND

    def save(self) -> None:
        """Atomically rewrite the document if anything changed since load/last save."""
        if not self._dirty:
            return
        doc = {"tasks": [t.to_dict() for t in self._tasks], "next_id": self._next_id}
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(doc, ensure_ascii=False, indent=2) + "\n", "utf-8")
            os.replace(tmp, self._path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise StorageUnavailable(f"cannot write {self._path}: {exc}") from exc
        self._dirty = False
        logger.debug("Saved %d tasks to %s", len(self._tasks), self._path)

    def close(self) -> None:
        return


def _is_int(value: Any) -> bool:
    # bool is an int subclass; true/false must not pass as ids.
    return isinstance(value, int) and not isinstance(value, bool)
