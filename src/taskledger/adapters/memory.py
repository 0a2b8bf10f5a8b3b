"""In-memory implementation of TaskRepository.

Each owner gets an independent arena: a growable list of task slots indexed by
task id, an existence flag per slot, and a side index of live ids. Removing an
id from the live index is a swap-with-last, so enumeration order after a
deletion is not insertion order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from taskledger.models import NotFoundError, Task, TaskCreate
from taskledger.repositories import TaskRepository

logger = logging.getLogger(__name__)


@dataclass
class OwnerPartition:
    """Arena holding every task ever allocated for one owner."""

    slots: list[Task] = field(default_factory=list)
    exists: list[bool] = field(default_factory=list)
    live_ids: list[int] = field(default_factory=list)
    positions: dict[int, int] = field(default_factory=dict)
    next_id: int = 0

    def is_live(self, task_id: int) -> bool:
        return 0 <= task_id < len(self.slots) and self.exists[task_id]

    def append_live(self, task_id: int) -> None:
        self.positions[task_id] = len(self.live_ids)
        self.live_ids.append(task_id)

    def remove_live(self, task_id: int) -> None:
        pos = self.positions.pop(task_id)
        last = self.live_ids.pop()
        if last != task_id:
            self.live_ids[pos] = last
            self.positions[last] = pos


class InMemoryTaskRepository(TaskRepository):
    """Task repository keeping every owner's partition in process memory.

    Records are immutable pydantic models, so handing them out to readers
    never exposes a half-applied mutation.
    """

    def __init__(self):
        self._partitions: dict[str, OwnerPartition] = {}

    def _partition(self, owner_id: str) -> OwnerPartition:
        partition = self._partitions.get(owner_id)
        if partition is None:
            partition = OwnerPartition()
            self._partitions[owner_id] = partition
        return partition

    def _live_partition(self, owner_id: str, task_id: int) -> OwnerPartition:
        partition = self._partitions.get(owner_id)
        if partition is None or not partition.is_live(task_id):
            raise NotFoundError(owner_id, task_id)
        return partition

    async def create(self, owner_id: str, task_data: TaskCreate, now: int) -> Task:
        partition = self._partition(owner_id)
        task_id = partition.next_id

        task = Task(
            id=task_id,
            owner_id=owner_id,
            content=task_data.content,
            created_at=now,
            updated_at=now,
            deadline=task_data.deadline,
            priority=task_data.priority,
            category=task_data.category,
        )

        partition.slots.append(task)
        partition.exists.append(True)
        partition.append_live(task_id)
        partition.next_id += 1
        return task

    async def get(self, owner_id: str, task_id: int) -> Task:
        partition = self._live_partition(owner_id, task_id)
        return partition.slots[task_id]

    async def save(self, task: Task) -> Task:
        partition = self._live_partition(task.owner_id, task.id)
        partition.slots[task.id] = task
        return task

    async def delete(self, owner_id: str, task_id: int) -> None:
        partition = self._live_partition(owner_id, task_id)
        partition.exists[task_id] = False
        partition.remove_live(task_id)
        logger.debug(
            "Removed task %s from live index of owner=%s (%d live)",
            task_id,
            owner_id,
            len(partition.live_ids),
        )

    async def list_all(self, owner_id: str) -> list[Task]:
        partition = self._partitions.get(owner_id)
        if partition is None:
            return []
        return [partition.slots[task_id] for task_id in partition.live_ids]
