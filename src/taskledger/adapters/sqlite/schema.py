"""Database schema definitions for the local SQLite ledger.

Persisted layout:
- tasks:          one row per (owner, task id), soft-deleted rows are kept
- task_counters:  monotonic id counter per owner
- live_task_ids:  live-id index per owner
"""

from __future__ import annotations

# Schema version tracking
SCHEMA_VERSION = 1

# Tasks table - every task ever allocated, keyed by owner and per-owner id
CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    owner_id TEXT NOT NULL,
    id INTEGER NOT NULL,
    content TEXT NOT NULL CHECK (length(content) > 0),
    is_completed BOOLEAN NOT NULL DEFAULT 0,
    created_at INTEGER NOT NULL,
    updated_at INTEGER NOT NULL,
    completed_at INTEGER NOT NULL DEFAULT 0,
    deadline INTEGER NOT NULL DEFAULT 0,
    priority INTEGER NOT NULL DEFAULT 0 CHECK (priority BETWEEN 0 AND 3),
    category TEXT NOT NULL DEFAULT '',
    is_deleted BOOLEAN NOT NULL DEFAULT 0,
    PRIMARY KEY (owner_id, id)
)
"""

# Id allocation counter per owner (never decremented)
CREATE_TASK_COUNTERS_TABLE = """
CREATE TABLE IF NOT EXISTS task_counters (
    owner_id TEXT PRIMARY KEY,
    next_id INTEGER NOT NULL DEFAULT 0
)
"""

# Live-id index
CREATE_LIVE_TASK_IDS_TABLE = """
CREATE TABLE IF NOT EXISTS live_task_ids (
    owner_id TEXT NOT NULL,
    task_id INTEGER NOT NULL,
    PRIMARY KEY (owner_id, task_id),
    FOREIGN KEY (owner_id, task_id) REFERENCES tasks(owner_id, id)
)
"""

CREATE_TASKS_DEADLINE_INDEX = """
CREATE INDEX IF NOT EXISTS idx_tasks_owner_deadline
ON tasks(owner_id, is_deleted, deadline)
"""

CREATE_TASKS_CATEGORY_INDEX = """
CREATE INDEX IF NOT EXISTS idx_tasks_owner_category
ON tasks(owner_id, category)
"""

ALL_TABLES = [
    CREATE_TASKS_TABLE,
    CREATE_TASK_COUNTERS_TABLE,
    CREATE_LIVE_TASK_IDS_TABLE,
]

ALL_INDEXES = [
    CREATE_TASKS_DEADLINE_INDEX,
    CREATE_TASKS_CATEGORY_INDEX,
]
