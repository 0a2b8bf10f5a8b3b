"""SQLite implementation of TaskRepository."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from taskledger.adapters.sqlite.connection import get_connection
from taskledger.adapters.sqlite.utils import TASK_COLUMNS, row_to_task, task_values
from taskledger.models import MAX_STORABLE_INT, NotFoundError, Task, TaskCreate
from taskledger.repositories import TaskRepository

logger = logging.getLogger(__name__)


def is_storable_id(task_id: int) -> bool:
    """Whether the id fits an SQLite INTEGER; larger ids can never have been assigned."""
    return -MAX_STORABLE_INT - 1 <= task_id <= MAX_STORABLE_INT


class SqliteTaskRepository(TaskRepository):
    """SQLite implementation of the task repository.

    Every mutating call runs in a single transaction, so it either applies
    completely or leaves the database untouched. The live-id index is read
    ordered by task id, which keeps enumeration in insertion order.
    """

    def __init__(
        self,
        db_path: str | Path | None = None,
        connection: sqlite3.Connection | None = None,
    ):
        """Initialize SQLite task repository.

        Args:
            db_path: Optional database file path. If None, uses default location.
            connection: Optional pre-configured connection (takes precedence).
        """
        self.db_path = db_path
        self._connection = connection

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    async def create(self, owner_id: str, task_data: TaskCreate, now: int) -> Task:
        columns = ", ".join(("owner_id", "id", *TASK_COLUMNS))
        placeholders = ", ".join("?" for _ in range(len(TASK_COLUMNS) + 2))

        with self.connection as conn:
            # Bumping the counter first takes the write lock for the whole transaction.
            conn.execute(
                """INSERT INTO task_counters (owner_id, next_id) VALUES (?, 1)
                   ON CONFLICT(owner_id) DO UPDATE SET next_id = next_id + 1""",
                (owner_id,),
            )
            (next_id,) = conn.execute(
                "SELECT next_id FROM task_counters WHERE owner_id = ?", (owner_id,)
            ).fetchone()
            task = Task(
                id=int(next_id) - 1,
                owner_id=owner_id,
                content=task_data.content,
                created_at=now,
                updated_at=now,
                deadline=task_data.deadline,
                priority=task_data.priority,
                category=task_data.category,
            )
            conn.execute(
                f"INSERT INTO tasks ({columns}) VALUES ({placeholders})",
                (owner_id, task.id, *task_values(task)),
            )
            conn.execute(
                "INSERT INTO live_task_ids (owner_id, task_id) VALUES (?, ?)",
                (owner_id, task.id),
            )

        logger.debug("Inserted task owner=%s id=%s", owner_id, task.id)
        return task

    async def get(self, owner_id: str, task_id: int) -> Task:
        if not is_storable_id(task_id):
            raise NotFoundError(owner_id, task_id)
        row = self.connection.execute(
            "SELECT * FROM tasks WHERE owner_id = ? AND id = ? AND is_deleted = 0",
            (owner_id, task_id),
        ).fetchone()
        if not row:
            raise NotFoundError(owner_id, task_id)
        return row_to_task(row)

    async def save(self, task: Task) -> Task:
        if not is_storable_id(task.id):
            raise NotFoundError(task.owner_id, task.id)
        set_clause = ", ".join(f"{column} = ?" for column in TASK_COLUMNS)

        with self.connection as conn:
            cursor = conn.execute(
                f"UPDATE tasks SET {set_clause} WHERE owner_id = ? AND id = ? AND is_deleted = 0",
                (*task_values(task), task.owner_id, task.id),
            )
            if cursor.rowcount != 1:
                raise NotFoundError(task.owner_id, task.id)

        return task

    async def delete(self, owner_id: str, task_id: int) -> None:
        if not is_storable_id(task_id):
            raise NotFoundError(owner_id, task_id)
        with self.connection as conn:
            cursor = conn.execute(
                "UPDATE tasks SET is_deleted = 1 WHERE owner_id = ? AND id = ? AND is_deleted = 0",
                (owner_id, task_id),
            )
            if cursor.rowcount != 1:
                raise NotFoundError(owner_id, task_id)
            conn.execute(
                "DELETE FROM live_task_ids WHERE owner_id = ? AND task_id = ?",
                (owner_id, task_id),
            )

    async def list_all(self, owner_id: str) -> list[Task]:
        cursor = self.connection.execute(
            """SELECT t.* FROM live_task_ids l
               JOIN tasks t ON t.owner_id = l.owner_id AND t.id = l.task_id
               WHERE l.owner_id = ?
               ORDER BY l.task_id ASC""",
            (owner_id,),
        )
        return [row_to_task(row) for row in cursor.fetchall()]

