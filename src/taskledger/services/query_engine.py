"""Query engine - read-only views and statistics over one owner's tasks.

Every query fetches the owner's live set from the task store and runs one
pass over it. Results keep the store's order; nothing is re-sorted and
nothing is mutated. "Now" is read once per query.

Deadline boundaries:
- overdue:   0 < deadline < now
- upcoming:  now < deadline <= now + within
A deadline exactly equal to now is in neither set.
"""

from __future__ import annotations

from taskledger.models import Task, TaskStats, ValidationError
from taskledger.services.task_store import TaskStore, validate_priority
from taskledger.utils.clock import Clock


def is_overdue(task: Task, now: int) -> bool:
    return not task.is_completed and task.deadline > 0 and task.deadline < now


def is_upcoming(task: Task, now: int, within_seconds: int) -> bool:
    return (
        not task.is_completed
        and task.deadline > 0
        and task.deadline > now
        and task.deadline <= now + within_seconds
    )


class TaskQueryEngine:
    """Filtered views and aggregates derived from a TaskStore."""

    def __init__(self, store: TaskStore, clock: Clock | None = None):
        """Initialize the query engine.

        Args:
            store: Task store providing the live task sets
            clock: Time source; defaults to the store's clock
        """
        self.store = store
        self._clock = clock

    def now(self) -> int:
        if self._clock is None:
            return self.store.now()
        return int(self._clock())

    async def get_active_tasks(self, owner_id: str) -> list[Task]:
        return [t for t in await self.store.get_all_tasks(owner_id) if not t.is_completed]

    async def get_completed_tasks(self, owner_id: str) -> list[Task]:
        return [t for t in await self.store.get_all_tasks(owner_id) if t.is_completed]

    async def get_tasks_by_category(self, owner_id: str, category: str) -> list[Task]:
        """Tasks whose category equals ``category`` exactly (case-sensitive).

        An empty string selects uncategorized tasks.
        """
        return [t for t in await self.store.get_all_tasks(owner_id) if t.category == category]

    async def get_tasks_by_priority(self, owner_id: str, priority: int) -> list[Task]:
        """Tasks with exactly the given priority.

        Raises:
            ValidationError: priority outside 0-3
        """
        level = validate_priority(priority)
        return [t for t in await self.store.get_all_tasks(owner_id) if t.priority == level]

    async def get_upcoming_deadlines(self, owner_id: str, within_seconds: int) -> list[Task]:
        """Open tasks due after now and no later than now + within_seconds."""
        if isinstance(within_seconds, bool) or not isinstance(within_seconds, int) or within_seconds < 0:
            raise ValidationError("Window must be a non-negative number of seconds")
        tasks = await self.store.get_all_tasks(owner_id)
        now = self.now()
        return [t for t in tasks if is_upcoming(t, now, within_seconds)]

    async def get_overdue_tasks(self, owner_id: str) -> list[Task]:
        """Open tasks whose deadline has passed."""
        tasks = await self.store.get_all_tasks(owner_id)
        now = self.now()
        return [t for t in tasks if is_overdue(t, now)]

    async def get_task_stats(self, owner_id: str) -> TaskStats:
        """Counters computed in a single pass over the live set.

        ``overdue`` only ever counts active tasks.
        """
        tasks = await self.store.get_all_tasks(owner_id)
        now = self.now()

        completed = 0
        overdue = 0
        for task in tasks:
            if task.is_completed:
                completed += 1
            elif is_overdue(task, now):
                overdue += 1

        return TaskStats(
            total=len(tasks),
            active=len(tasks) - completed,
            completed=completed,
            overdue=overdue,
        )
