"""Task domain models."""

from __future__ import annotations

from enum import IntEnum, StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Priority(IntEnum):
    """Task priority levels (0 = no priority, 3 = highest)."""

    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3


MAX_PRIORITY = int(Priority.HIGH)

# Largest id or timestamp a ledger can store (signed 64-bit).
MAX_STORABLE_INT = 2**63 - 1


class Task(BaseModel):
    """Task model representing one unit of work owned by exactly one owner.

    Instances are immutable; every mutation produces a new record via
    ``model_copy(update=...)`` so readers always hold a consistent snapshot.

    Attributes:
        id: Sequential identifier, unique within the owner's namespace only
        owner_id: Identity partition the task belongs to
        content: Main task text (never empty)
        is_completed: Completion status
        created_at: Creation timestamp (epoch seconds)
        updated_at: Last mutation timestamp (epoch seconds)
        completed_at: Completion timestamp, 0 while the task is open
        deadline: Deadline timestamp, 0 means no deadline
        priority: Priority level (0-3)
        category: Free-form label, empty string means uncategorized
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0)
    owner_id: str
    content: str = Field(min_length=1)
    is_completed: bool = False
    created_at: int = Field(ge=0)
    updated_at: int = Field(ge=0)
    completed_at: int = Field(default=0, ge=0)
    deadline: int = Field(default=0, ge=0)
    priority: Priority = Priority.NONE
    category: str = ""

    @property
    def has_deadline(self) -> bool:
        return self.deadline > 0


class TaskCreate(BaseModel):
    """Model for creating a new task.

    Attributes:
        content: Main task text (required)
        deadline: Optional deadline timestamp, 0 for none
        priority: Priority level (0-3)
        category: Optional category label
    """

    content: str = Field(min_length=1)
    deadline: int = Field(default=0, ge=0)
    priority: Priority = Priority.NONE
    category: str = ""


class TaskStats(BaseModel):
    """Aggregate counters over one owner's live tasks."""

    total: int = 0
    active: int = 0
    completed: int = 0
    overdue: int = 0


class EventType(StrEnum):
    """Kinds of task change notifications."""

    TASK_CREATED = "TaskCreated"
    TASK_UPDATED = "TaskUpdated"
    TASK_COMPLETED = "TaskCompleted"
    TASK_UNCOMPLETED = "TaskUncompleted"
    TASK_DELETED = "TaskDeleted"
    DEADLINE_SET = "DeadlineSet"
    PRIORITY_SET = "PrioritySet"
    CATEGORY_SET = "CategorySet"


class TaskEvent(BaseModel):
    """Fire-and-forget notification describing one state change.

    Attributes:
        type: Kind of change
        owner_id: Owner whose partition changed
        task_id: Affected task
        payload: Values relevant to the change (e.g. the new deadline)
        emitted_at: Timestamp of the mutation (epoch seconds)
    """

    model_config = ConfigDict(frozen=True)

    type: EventType
    owner_id: str
    task_id: int
    payload: dict[str, Any] = Field(default_factory=dict)
    emitted_at: int = 0
