"""Repository abstraction layer for taskledger.

This module defines the abstract base class (interface) for task persistence,
following the hexagonal architecture (Ports & Adapters) pattern.

A repository keeps, for every owner:
- the task records keyed by (owner, task id),
- a monotonic id counter,
- a live-id index enumerating the tasks that currently exist.

Business rules (validation, timestamps, notifications) live in
``taskledger.services.task_store``; adapters only guarantee that each call
is applied atomically.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from taskledger.models import Task, TaskCreate


class TaskRepository(ABC):
    """Abstract base class for per-owner task persistence.

    No method can address more than one owner's partition.
    """

    @abstractmethod
    async def create(self, owner_id: str, task_data: TaskCreate, now: int) -> Task:
        """Allocate the next id for the owner and store a new live task.

        Args:
            owner_id: Owner partition
            task_data: Validated creation data
            now: Timestamp used for created_at/updated_at

        Returns:
            The stored Task

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError("TaskRepository.create() must be implemented by adapter")

    @abstractmethod
    async def get(self, owner_id: str, task_id: int) -> Task:
        """Get a live task by id.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            NotFoundError: If the task is absent or deleted
        """
        raise NotImplementedError("TaskRepository.get() must be implemented by adapter")

    @abstractmethod
    async def save(self, task: Task) -> Task:
        """Replace the stored record of a live task.

        Args:
            task: Full new record; ``task.owner_id`` and ``task.id`` select the slot

        Returns:
            The stored Task

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            NotFoundError: If the task is absent or deleted
        """
        raise NotImplementedError("TaskRepository.save() must be implemented by adapter")

    @abstractmethod
    async def delete(self, owner_id: str, task_id: int) -> None:
        """Mark a task non-existent and drop it from the live-id index.

        The id counter is left untouched.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            NotFoundError: If the task is absent or already deleted
        """
        raise NotImplementedError("TaskRepository.delete() must be implemented by adapter")

    @abstractmethod
    async def list_all(self, owner_id: str) -> list[Task]:
        """List every live task of the owner in live-id index order.

        Returns an empty list for owners that have never stored a task.
        """
        raise NotImplementedError(
            "TaskRepository.list_all() must be implemented by adapter"
        )
