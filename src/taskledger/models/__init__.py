"""taskledger domain models.

This package contains the Pydantic models that represent the core domain
entities (tasks, statistics, change notifications) and the error taxonomy.
"""

from .config_models import AppConfig, OutputConfig, StorageConfig
from .core import (
    MAX_PRIORITY,
    MAX_STORABLE_INT,
    EventType,
    Priority,
    Task,
    TaskCreate,
    TaskEvent,
    TaskStats,
)
from .exceptions import (
    InvalidStateError,
    NotFoundError,
    TaskLedgerError,
    ValidationError,
)

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskStats",
    "Priority",
    "MAX_PRIORITY",
    "MAX_STORABLE_INT",
    # Notifications
    "EventType",
    "TaskEvent",
    # Errors
    "TaskLedgerError",
    "ValidationError",
    "NotFoundError",
    "InvalidStateError",
    # Config models
    "AppConfig",
    "StorageConfig",
    "OutputConfig",
]
