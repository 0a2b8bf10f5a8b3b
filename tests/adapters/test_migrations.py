"""Tests for the schema migration runner and the initial migration."""

from __future__ import annotations

import sqlite3

import pytest

from taskledger.adapters.sqlite import open_connection
from taskledger.adapters.sqlite.migrations.m001_initial_schema import (
    ALL_MIGRATIONS,
    InitialSchemaMigration,
)
from taskledger.adapters.sqlite.migrations.runner import Migration, MigrationRunner
from taskledger.adapters.sqlite.schema import SCHEMA_VERSION


class BrokenMigration(Migration):
    version = 2
    description = "Always fails"

    def up(self, connection):
        connection.execute("CREATE TABLE scratch (id INTEGER)")
        raise sqlite3.OperationalError("boom")


@pytest.fixture
def conn():
    connection = sqlite3.connect(":memory:")
    yield connection
    connection.close()


def _tables(connection) -> set[str]:
    rows = connection.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
    return {row[0] for row in rows}


def test_fresh_database_has_version_zero(conn):
    assert MigrationRunner(conn).get_current_version() == 0


def test_initial_migration_creates_tables(conn):
    runner = MigrationRunner(conn)
    applied = runner.run_migrations(ALL_MIGRATIONS)

    assert applied == 1
    assert runner.get_current_version() == SCHEMA_VERSION
    assert {"tasks", "task_counters", "live_task_ids", "schema_version"} <= _tables(conn)


def test_run_migrations_is_idempotent(conn):
    runner = MigrationRunner(conn)
    runner.run_migrations(ALL_MIGRATIONS)
    assert runner.run_migrations(ALL_MIGRATIONS) == 0


def test_rerunning_applied_migration_raises(conn):
    runner = MigrationRunner(conn)
    runner.run_migration(InitialSchemaMigration())
    with pytest.raises(ValueError):
        runner.run_migration(InitialSchemaMigration())


def test_failed_migration_is_not_recorded(conn):
    runner = MigrationRunner(conn)
    runner.run_migrations(ALL_MIGRATIONS)

    with pytest.raises(RuntimeError, match="Migration 2 failed"):
        runner.run_migration(BrokenMigration())

    assert runner.get_current_version() == 1


def test_open_connection_applies_schema(tmp_path):
    db_path = tmp_path / "nested" / "ledger.db"
    connection = open_connection(db_path)
    try:
        assert db_path.exists()
        assert (db_path.stat().st_mode & 0o777) == 0o600
        assert MigrationRunner(connection).get_current_version() == SCHEMA_VERSION
        assert connection.execute("PRAGMA foreign_keys").fetchone()[0] == 1
    finally:
        connection.close()
