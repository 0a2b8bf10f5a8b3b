"""SQLite adapter module - Local database storage implementation."""

from taskledger.adapters.sqlite.connection import (
    DatabaseConnection,
    get_connection,
    open_connection,
)
from taskledger.adapters.sqlite.task_repository import SqliteTaskRepository

__all__ = [
    "SqliteTaskRepository",
    "DatabaseConnection",
    "get_connection",
    "open_connection",
]
