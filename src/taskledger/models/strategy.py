"""
Strategy Pattern: Storage Strategy Container

The storage backend is decided once at startup from the configuration and
injected into the services, instead of branching on the backend at every
repository access.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from taskledger.repositories.repository import TaskRepository


class StorageStrategy(ABC):
    """Abstract base class for storage strategies."""

    @abstractmethod
    def get_task_repository(self) -> TaskRepository:
        """Get task repository implementation for this strategy."""

    @property
    @abstractmethod
    def storage_type(self) -> str:
        """Get storage type identifier (for logging/debugging)."""


class MemoryStrategy(StorageStrategy):
    """Process-local storage; everything is lost when the process exits."""

    def __init__(self):
        from taskledger.adapters.memory import InMemoryTaskRepository

        self._task_repo = InMemoryTaskRepository()

    def get_task_repository(self) -> TaskRepository:
        return self._task_repo

    @property
    def storage_type(self) -> str:
        return "memory"


class LocalStrategy(StorageStrategy):
    """Local SQLite storage strategy."""

    def __init__(self, db_path: str | None = None):
        """
        Initialize local strategy.

        Args:
            db_path: Path to SQLite database file (None for the default location)
        """
        self.db_path = db_path

        # Import here to avoid circular dependencies
        from taskledger.adapters.sqlite.task_repository import SqliteTaskRepository

        self._task_repo = SqliteTaskRepository(db_path=db_path)

    def get_task_repository(self) -> TaskRepository:
        return self._task_repo

    @property
    def storage_type(self) -> str:
        return "sqlite"


class StrategyContext:
    """
    Single point of repository access, created once at startup.

    Usage:
        context = StrategyContext(LocalStrategy(db_path="/path/to/ledger.db"))
        store = TaskStore(context.task_repository)
    """

    def __init__(self, strategy: StorageStrategy):
        self._strategy = strategy

    @property
    def task_repository(self) -> TaskRepository:
        """Get task repository from current strategy."""
        return self._strategy.get_task_repository()

    @property
    def storage_type(self) -> str:
        """Get storage type (for logging/debugging only)."""
        return self._strategy.storage_type

    @property
    def strategy(self) -> StorageStrategy:
        """Get underlying strategy."""
        return self._strategy
