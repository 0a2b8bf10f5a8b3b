"""Task store - the canonical per-owner task collection.

The store sits between callers and a ``TaskRepository``. It validates input,
stamps timestamps, enforces the completion state machine, serializes
mutations per owner and publishes a notification for every change.

Owners are fully isolated: every operation takes the owner id explicitly and
only ever touches that owner's partition.
"""

from __future__ import annotations

import asyncio
import logging
import weakref
from collections.abc import Callable
from typing import Any

from taskledger.models import (
    MAX_PRIORITY,
    MAX_STORABLE_INT,
    EventType,
    InvalidStateError,
    Priority,
    Task,
    TaskCreate,
    TaskEvent,
    ValidationError,
)
from taskledger.repositories import TaskRepository
from taskledger.services.events import EventPublisher, NullPublisher
from taskledger.utils.clock import Clock, system_clock

logger = logging.getLogger(__name__)

# Computes the field changes for a task given the mutation timestamp.
Change = Callable[[Task, int], dict[str, Any]]


def validate_content(content: str) -> str:
    if not isinstance(content, str) or content == "":
        raise ValidationError("Task content must not be empty")
    return content


def validate_priority(priority: int) -> Priority:
    if isinstance(priority, bool) or not isinstance(priority, int):
        raise ValidationError(f"Priority must be an integer between 0 and {MAX_PRIORITY}")
    if priority < 0 or priority > MAX_PRIORITY:
        raise ValidationError(
            f"Priority {priority} is out of range (0-{MAX_PRIORITY})"
        )
    return Priority(priority)


def validate_deadline(deadline: int) -> int:
    if isinstance(deadline, bool) or not isinstance(deadline, int) or deadline < 0:
        raise ValidationError("Deadline must be a non-negative timestamp (0 for none)")
    if deadline > MAX_STORABLE_INT:
        raise ValidationError(f"Deadline {deadline} is too large (max {MAX_STORABLE_INT})")
    return deadline


def validate_category(category: str) -> str:
    if not isinstance(category, str):
        raise ValidationError("Category must be text")
    return category


class TaskStore:
    """Owns every owner's task set and all mutations on it.

    Mutations of one owner are serialized by a per-owner ``asyncio.Lock``;
    different owners never contend. Reads take no lock: repositories swap
    whole immutable records, so a reader sees either the old or the new task.
    """

    def __init__(
        self,
        repository: TaskRepository,
        publisher: EventPublisher | None = None,
        clock: Clock = system_clock,
    ):
        """Initialize the task store.

        Args:
            repository: TaskRepository implementation for data access
            publisher: Receiver of change notifications (dropped if None)
            clock: Time source returning epoch seconds
        """
        self.repository = repository
        self.publisher = publisher or NullPublisher()
        self._clock = clock
        # Entries vanish once no coroutine holds or waits on the lock.
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def _lock(self, owner_id: str) -> asyncio.Lock:
        lock = self._locks.get(owner_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[owner_id] = lock
        return lock

    def now(self) -> int:
        """Current time from the store clock, never below 1."""
        return max(int(self._clock()), 1)

    def _emit(self, event_type: EventType, task: Task, now: int, **payload: Any) -> None:
        self.publisher.publish(
            TaskEvent(
                type=event_type,
                owner_id=task.owner_id,
                task_id=task.id,
                payload=payload,
                emitted_at=now,
            )
        )

    async def _mutate(
        self,
        owner_id: str,
        task_id: int,
        change: Change,
        event_type: EventType,
        payload: Callable[[Task], dict[str, Any]],
    ) -> Task:
        async with self._lock(owner_id):
            task = await self.repository.get(owner_id, task_id)
            touched = max(self.now(), task.updated_at)
            updates = change(task, touched)
            updated = task.model_copy(update={**updates, "updated_at": touched})
            await self.repository.save(updated)
            self._emit(event_type, updated, touched, **payload(updated))

        logger.debug("%s owner=%s task=%s", event_type.value, owner_id, task_id)
        return updated

    # ---- mutations ----

    async def create_task(
        self,
        owner_id: str,
        content: str,
        deadline: int = 0,
        priority: int = Priority.NONE,
        category: str = "",
    ) -> int:
        """Create a new task and return its id.

        Raises:
            ValidationError: empty content, priority outside 0-3, deadline out of range
        """
        task_data = TaskCreate(
            content=validate_content(content),
            deadline=validate_deadline(deadline),
            priority=validate_priority(priority),
            category=validate_category(category),
        )

        async with self._lock(owner_id):
            now = self.now()
            task = await self.repository.create(owner_id, task_data, now)

            self._emit(EventType.TASK_CREATED, task, now, content=task.content)
            if task.deadline:
                self._emit(EventType.DEADLINE_SET, task, now, deadline=task.deadline)
            if task.priority != Priority.NONE:
                self._emit(EventType.PRIORITY_SET, task, now, priority=int(task.priority))
            if task.category:
                self._emit(EventType.CATEGORY_SET, task, now, category=task.category)

        logger.info("Task created owner=%s id=%s", owner_id, task.id)
        return task.id

    async def update_task_content(self, owner_id: str, task_id: int, content: str) -> Task:
        validate_content(content)
        return await self._mutate(
            owner_id,
            task_id,
            lambda task, now: {"content": content},
            EventType.TASK_UPDATED,
            lambda task: {"content": task.content},
        )

    async def complete_task(self, owner_id: str, task_id: int) -> Task:
        def change(task: Task, now: int) -> dict[str, Any]:
            if task.is_completed:
                raise InvalidStateError(f"Task {task_id} is already completed")
            return {"is_completed": True, "completed_at": now}

        return await self._mutate(
            owner_id,
            task_id,
            change,
            EventType.TASK_COMPLETED,
            lambda task: {"completed_at": task.completed_at},
        )

    async def uncomplete_task(self, owner_id: str, task_id: int) -> Task:
        def change(task: Task, now: int) -> dict[str, Any]:
            if not task.is_completed:
                raise InvalidStateError(f"Task {task_id} is not completed")
            return {"is_completed": False, "completed_at": 0}

        return await self._mutate(
            owner_id,
            task_id,
            change,
            EventType.TASK_UNCOMPLETED,
            lambda task: {},
        )

    async def delete_task(self, owner_id: str, task_id: int) -> None:
        """Soft-delete a task. Its id is never handed out again."""
        async with self._lock(owner_id):
            task = await self.repository.get(owner_id, task_id)
            await self.repository.delete(owner_id, task_id)
            self._emit(EventType.TASK_DELETED, task, self.now())

        logger.info("Task deleted owner=%s id=%s", owner_id, task_id)

    async def set_deadline(self, owner_id: str, task_id: int, deadline: int) -> Task:
        validate_deadline(deadline)
        return await self._mutate(
            owner_id,
            task_id,
            lambda task, now: {"deadline": deadline},
            EventType.DEADLINE_SET,
            lambda task: {"deadline": task.deadline},
        )

    async def set_priority(self, owner_id: str, task_id: int, priority: int) -> Task:
        level = validate_priority(priority)
        return await self._mutate(
            owner_id,
            task_id,
            lambda task, now: {"priority": level},
            EventType.PRIORITY_SET,
            lambda task: {"priority": int(task.priority)},
        )

    async def set_category(self, owner_id: str, task_id: int, category: str) -> Task:
        validate_category(category)
        return await self._mutate(
            owner_id,
            task_id,
            lambda task, now: {"category": category},
            EventType.CATEGORY_SET,
            lambda task: {"category": task.category},
        )

    # ---- reads ----

    async def get_task(self, owner_id: str, task_id: int) -> Task:
        """Get a live task.

        Raises:
            NotFoundError: absent, deleted, or never created for this owner
        """
        return await self.repository.get(owner_id, task_id)

    async def get_all_tasks(self, owner_id: str) -> list[Task]:
        """Every live task of the owner, in live-index order."""
        return await self.repository.list_all(owner_id)
