"""Utility functions for the SQLite adapter."""

from __future__ import annotations

import sqlite3
from typing import Any

from taskledger.models import Priority, Task

# Task columns written by the repository, in statement order.
TASK_COLUMNS = (
    "content",
    "is_completed",
    "created_at",
    "updated_at",
    "completed_at",
    "deadline",
    "priority",
    "category",
)


def row_to_dict(row: Any) -> dict[str, Any]:
    """Convert sqlite3.Row to dictionary."""
    if row is None:
        return {}
    return dict(row)


def row_to_task(row: sqlite3.Row) -> Task:
    """Build a Task from a ``tasks`` row."""
    data = row_to_dict(row)
    return Task(
        id=int(data["id"]),
        owner_id=data["owner_id"],
        content=data["content"],
        is_completed=bool(data["is_completed"]),
        created_at=int(data["created_at"]),
        updated_at=int(data["updated_at"]),
        completed_at=int(data["completed_at"] or 0),
        deadline=int(data["deadline"] or 0),
        priority=Priority(int(data["priority"])),
        category=data["category"] or "",
    )


def task_values(task: Task) -> tuple[Any, ...]:
    """Column values of a task, matching ``TASK_COLUMNS``."""
    return (
        task.content,
        int(task.is_completed),
        task.created_at,
        task.updated_at,
        task.completed_at,
        task.deadline,
        int(task.priority),
        task.category,
    )
