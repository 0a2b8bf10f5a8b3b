"""Service layer: task store, query engine, notifications and configuration."""

from .events import EventBus, EventPublisher, EventRecorder, NullPublisher
from .query_engine import TaskQueryEngine
from .task_store import TaskStore

__all__ = [
    "TaskStore",
    "TaskQueryEngine",
    "EventBus",
    "EventPublisher",
    "EventRecorder",
    "NullPublisher",
]
