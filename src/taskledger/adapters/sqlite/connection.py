"""Database connection management for the local SQLite ledger.

This module provides a singleton connection manager, ensuring one configured
connection per process, WAL mode, foreign key enforcement and an up-to-date
schema.
"""

from __future__ import annotations

import atexit
import logging
import os
import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from taskledger.adapters.sqlite.migrations.m001_initial_schema import ALL_MIGRATIONS
from taskledger.adapters.sqlite.migrations.runner import MigrationRunner

logger = logging.getLogger(__name__)

DEFAULT_DB_NAME = "ledger.db"


def default_db_path() -> Path:
    """Default ledger location inside the user data directory."""
    return Path(user_data_dir("taskledger")) / DEFAULT_DB_NAME


class DatabaseConnection:
    """Singleton connection manager for the SQLite ledger.

    Provides:
    - Single connection per process (reused while the path is unchanged)
    - WAL mode and foreign key enforcement
    - Automatic directory creation and owner-only file permissions
    - Schema migrations on open
    - Cleanup on exit
    """

    _instance: DatabaseConnection | None = None
    _connection: sqlite3.Connection | None = None
    _db_path: Path | None = None

    def __new__(cls) -> DatabaseConnection:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            atexit.register(cls.close_connection)
        return cls._instance

    @classmethod
    def get_connection(cls, db_path: str | Path | None = None) -> sqlite3.Connection:
        """Get or create the database connection.

        Args:
            db_path: Path to database file. If None, uses the default location.

        Returns:
            sqlite3.Connection configured for the ledger
        """
        instance = cls()
        db_path = default_db_path() if db_path is None else Path(db_path)

        if instance._connection is not None and instance._db_path == db_path:
            return instance._connection

        if instance._connection is not None:
            cls.close_connection()

        instance._connection = open_connection(db_path)
        instance._db_path = db_path
        return instance._connection

    @classmethod
    def close_connection(cls) -> None:
        """Close the database connection."""
        instance = cls()
        if instance._connection is None:
            return
        try:
            instance._connection.commit()
            instance._connection.close()
        finally:
            instance._connection = None
            instance._db_path = None

    @classmethod
    def get_db_path(cls) -> Path | None:
        """Get current database path."""
        return cls()._db_path


def open_connection(db_path: str | Path) -> sqlite3.Connection:
    """Open and configure a new connection, applying pending migrations.

    ``":memory:"`` opens a private in-memory database.
    """
    if str(db_path) == ":memory:":
        is_new_database = False
        target = ":memory:"
    else:
        db_path = Path(db_path)
        db_path.parent.mkdir(parents=True, exist_ok=True)
        is_new_database = not db_path.exists()
        target = str(db_path)

    connection = sqlite3.connect(
        target,
        check_same_thread=False,
        timeout=30.0,
    )
    connection.row_factory = sqlite3.Row
    connection.execute("PRAGMA foreign_keys = ON")
    connection.execute("PRAGMA journal_mode = WAL")

    if is_new_database:
        os.chmod(target, 0o600)

    applied = MigrationRunner(connection).run_migrations(ALL_MIGRATIONS)
    logger.debug("Opened ledger db=%s (migrations applied: %d)", target, applied)
    return connection


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Helper function to get the shared database connection."""
    return DatabaseConnection.get_connection(db_path)
