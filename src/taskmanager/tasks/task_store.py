# src/taskmanager/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from collections.abc import Iterable
from pathlib import Path

from .task_errors import TaskConstraintError, TaskNotFoundError
from .task_models import UNASSIGNED_ID, Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    SQLite task store.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    The store owns id assignment: tasks inserted with id == 0 get the next
    AUTOINCREMENT id, tasks inserted with an explicit id keep it.

    Thread-safety:
    - each method opens its own SQLite connection, so calls may run in worker
      threads (asyncio.to_thread) without sharing a connection
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        try:
            total = self.count_tasks()
        except sqlite3.Error:
            total = -1
        logger.info("TaskStore ready db=%s total=%s", self._db_path, total)

    @property
    def db_path(self) -> Path:
        return self._db_path

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    completed INTEGER NOT NULL DEFAULT 0,
                    created_at REAL NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )

            # Migrations (safe): add missing columns.
            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("completed", "INTEGER NOT NULL DEFAULT 0")
            add_col("created_at", "REAL NOT NULL DEFAULT 0")
            add_col("updated_at", "REAL NOT NULL DEFAULT 0")

            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_completed ON tasks(completed)")

            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            title=str(row["title"] or ""),
            completed=bool(row["completed"]),
        )

    # ---- public API ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM tasks")
            (n,) = cur.fetchone()
            return int(n)
        finally:
            conn.close()

    def get_all_tasks(self) -> list[Task]:
        """All tasks in store order (ascending id)."""
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT id, title, completed FROM tasks ORDER BY id ASC")
            return [self._row_to_task(r) for r in cur.fetchall()]
        finally:
            conn.close()

    def get_task_by_id(self, task_id: int) -> Task | None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT id, title, completed FROM tasks WHERE id = ?", (int(task_id),))
            row = cur.fetchone()
            return self._row_to_task(row) if row else None
        finally:
            conn.close()

    def insert_task(self, task: Task) -> int:
        """
        Strict insert.

        Returns the id of the stored row. Raises TaskConstraintError when the
        task carries an explicit id that is already taken.
        """
        now = time.time()
        explicit_id = int(task.id) if task.id != UNASSIGNED_ID else None

        conn = self._get_conn()
        try:
            cur = conn.cursor()
            try:
                cur.execute(
                    """
                    INSERT INTO tasks(id, title, completed, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (explicit_id, task.title, int(bool(task.completed)), now, now),
                )
            except sqlite3.IntegrityError as e:
                raise TaskConstraintError(int(task.id)) from e
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise RuntimeError("SQLite did not return lastrowid for tasks insert")
            task_id = int(rowid)
            logger.debug("Task inserted id=%s completed=%s", task_id, task.completed)
            return task_id
        finally:
            conn.close()

    def insert_tasks(self, tasks: Iterable[Task]) -> int:
        """
        Bulk insert that ignores rows whose id already exists.

        Returns how many rows were actually inserted.
        """
        now = time.time()
        params = [
            (int(t.id) if t.id != UNASSIGNED_ID else None, t.title, int(bool(t.completed)), now, now)
            for t in tasks
        ]
        if not params:
            return 0

        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.executemany(
                """
                INSERT OR IGNORE INTO tasks(id, title, completed, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                params,
            )
            conn.commit()
            inserted = max(0, int(cur.rowcount))
            logger.debug("Tasks bulk insert offered=%s inserted=%s", len(params), inserted)
            return inserted
        finally:
            conn.close()

    def update_task(self, task: Task) -> None:
        """Overwrite title/completed of an existing task. Raises TaskNotFoundError if absent."""
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                "UPDATE tasks SET title = ?, completed = ?, updated_at = ? WHERE id = ?",
                (task.title, int(bool(task.completed)), time.time(), int(task.id)),
            )
            conn.commit()
            if cur.rowcount != 1:
                raise TaskNotFoundError(int(task.id))
        finally:
            conn.close()

    def delete_task(self, task_id: int) -> bool:
        """Returns True if a row was removed."""
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("DELETE FROM tasks WHERE id = ?", (int(task_id),))
            conn.commit()
            return cur.rowcount == 1
        finally:
            conn.close()
