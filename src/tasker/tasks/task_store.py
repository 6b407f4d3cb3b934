# src/tasker/tasks/task_store.py

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from ..errors import CorruptData, InvalidInput, StorageUnavailable
from .task_models import Outcome, Task

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = frozenset({"id", "description", "completed"})


class TaskStore:
    """
    SQLite task store.

    Every mutation is a single committed statement, so there is nothing
    left to flush at the end of the process and save() is a no-op.

    The schema is created when missing but never migrated: an existing
    `tasks` table without the expected columns is reported as CorruptData.
    A `tasks` table declared without AUTOINCREMENT is accepted, and ids for
    it are issued from the `task_ids` high-water mark so none is reused.

    Each method opens its own short-lived SQLite connection.
    """

    def __init__(self, db_path: str | Path = "tasks.db") -> None:
        self._db_path = Path(db_path)
        self._explicit_ids = False
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageUnavailable(f"cannot create directory for {self._db_path}: {exc}") from exc
        self._ensure_schema()
        logger.info("TaskStore ready db=%s total=%s", self._db_path, self.count_tasks())

    @property
    def path(self) -> Path:
        return self._db_path

    def save(self) -> None:
        """Writes are already durable; kept for parity with JsonTaskStore."""
        return

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        except sqlite3.Error as exc:
            raise self._translate(exc) from exc
        conn.row_factory = sqlite3.Row
        return conn

    def _translate(self, exc: sqlite3.Error) -> StorageUnavailable:
        # OperationalError covers "unable to open", "disk I/O error", "database is locked".
        # A plain DatabaseError is what SQLite raises for "file is not a database".
        if isinstance(exc, sqlite3.OperationalError):
            return StorageUnavailable(f"{self._db_path}: {exc}")
        if isinstance(exc, sqlite3.DatabaseError):
            return CorruptData(f"{self._db_path}: {exc}")
        return StorageUnavailable(f"{self._db_path}: {exc}")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    description TEXT NOT NULL,
                    completed BOOLEAN NOT NULL
                )
                """
            )
            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}
            missing = REQUIRED_COLUMNS - cols
            if missing:
                raise CorruptData(
                    f"{self._db_path}: table 'tasks' is missing columns: {', '.join(sorted(missing))}"
                )

            cur.execute("SELECT sql FROM sqlite_master WHERE type = 'table' AND name = 'tasks'")
            (table_sql,) = cur.fetchone()
            self._explicit_ids = "AUTOINCREMENT" not in str(table_sql or "").upper()
            if self._explicit_ids:
                # Plain INTEGER PRIMARY KEY hands out max(id)+1, which reuses the id
                # of a deleted last row. Track the highest id ever issued instead.
                cur.execute(
                    "CREATE TABLE IF NOT EXISTS task_ids (name TEXT PRIMARY KEY, seq INTEGER NOT NULL)"
                )
                cur.execute(
                    """
                    INSERT INTO task_ids(name, seq)
                    VALUES ('tasks', (SELECT COALESCE(MAX(id), 0) FROM tasks))
                    ON CONFLICT(name) DO UPDATE
                    SET seq = MAX(seq, excluded.seq)
                    """
                )
                logger.info(
                    "TaskStore db=%s has no AUTOINCREMENT; tracking ids in task_ids", self._db_path
                )
            conn.commit()
        except sqlite3.Error as exc:
            raise self._translate(exc) from exc
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            description=str(row["description"]),
            completed=bool(row["completed"]),
        )

    def _execute(self, sql: str, params: tuple = ()) -> int:
        """Run one write statement in its own transaction; return affected row count."""
        conn = self._get_conn()
        try:
            cur = conn.execute(sql, params)
            conn.commit()
            return cur.rowcount
        except sqlite3.Error as exc:
            raise self._translate(exc) from exc
        finally:
            conn.close()

    # ---- public API ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM tasks")
            (n,) = cur.fetchone()
            return int(n)
        except sqlite3.Error as exc:
            raise self._translate(exc) from exc
        finally:
            conn.close()

    def add(self, description: str) -> int:
        if not description or not description.strip():
            raise InvalidInput("description is required")

        conn = self._get_conn()
        try:
            cur = conn.cursor()
            if self._explicit_ids:
                cur.execute("BEGIN IMMEDIATE")
                cur.execute(
                    """
                    SELECT MAX(
                        COALESCE((SELECT seq FROM task_ids WHERE name = 'tasks'), 0),
                        (SELECT COALESCE(MAX(id), 0) FROM tasks)
                    ) + 1
                    """
                )
                (next_id,) = cur.fetchone()
                cur.execute(
                    "INSERT INTO tasks(id, description, completed) VALUES (?, ?, ?)",
                    (int(next_id), description.strip(), False),
                )
                cur.execute("UPDATE task_ids SET seq = ? WHERE name = 'tasks'", (int(next_id),))
                rowid = int(next_id)
            else:
                cur.execute(
                    "INSERT INTO tasks(description, completed) VALUES (?, ?)",
                    (description.strip(), False),
                )
                rowid = cur.lastrowid
            conn.commit()
            if rowid is None:
                raise StorageUnavailable("SQLite did not return lastrowid for tasks insert")
            task_id = int(rowid)
            logger.debug("Task added id=%s", task_id)
            return task_id
        except sqlite3.Error as exc:
            raise self._translate(exc) from exc
        finally:
            conn.close()

    def list_tasks(self) -> list[Task]:
        """All tasks in insertion order (ids only ever grow, so id order is insertion order)."""
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT id, description, completed FROM tasks ORDER BY id ASC")
            return [self._row_to_task(r) for r in cur.fetchall()]
        except sqlite3.Error as exc:
            raise self._translate(exc) from exc
        finally:
            conn.close()

    def get(self, task_id: int) -> Task | None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                "SELECT id, description, completed FROM tasks WHERE id = ?",
                (int(task_id),),
            )
            row = cur.fetchone()
            return self._row_to_task(row) if row else None
        except sqlite3.Error as exc:
            raise self._translate(exc) from exc
        finally:
            conn.close()

    def complete(self, task_id: int) -> Outcome:
        # rowcount counts matched rows, so re-completing a done task still reports FOUND.
        n = self._execute("UPDATE tasks SET completed = ? WHERE id = ?", (True, int(task_id)))
        if n == 0:
            return Outcome.NOT_FOUND
        logger.debug("Task completed id=%s", task_id)
        return Outcome.FOUND

    def delete(self, task_id: int) -> Outcome:
        n = self._execute("DELETE FROM tasks WHERE id = ?", (int(task_id),))
        if n == 0:
            return Outcome.NOT_FOUND
        logger.debug("Task deleted id=%s", task_id)
        return Outcome.FOUND
