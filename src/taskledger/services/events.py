"""Task change notifications.

The task store emits one ``TaskEvent`` per state change through an
``EventPublisher``. Delivery to UIs or other subscribers is outside the core;
``EventBus`` is the in-process publisher used by default.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable

from taskledger.models import TaskEvent

logger = logging.getLogger(__name__)

Subscriber = Callable[[TaskEvent], None]


class EventPublisher(ABC):
    """Port through which the task store emits notifications."""

    @abstractmethod
    def publish(self, event: TaskEvent) -> None:
        """Hand a notification to the delivery side. Must not raise."""


class NullPublisher(EventPublisher):
    """Publisher that drops every event."""

    def publish(self, event: TaskEvent) -> None:
        return None


class EventBus(EventPublisher):
    """Synchronous in-process fan-out to registered subscribers.

    Events are delivered in publish order. A subscriber that raises is logged
    and skipped; the remaining subscribers still receive the event and the
    mutation that produced it is unaffected.
    """

    def __init__(self):
        self._subscribers: list[Subscriber] = []

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register a subscriber.

        Returns:
            A callable that removes the subscription
        """
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    def publish(self, event: TaskEvent) -> None:
        for subscriber in list(self._subscribers):
            try:
                subscriber(event)
            except Exception:
                logger.exception(
                    "Subscriber %r failed on %s owner=%s task=%s",
                    subscriber,
                    event.type.value,
                    event.owner_id,
                    event.task_id,
                )


class EventRecorder:
    """Subscriber that keeps every event it receives, in order."""

    def __init__(self):
        self.events: list[TaskEvent] = []

    def __call__(self, event: TaskEvent) -> None:
        self.events.append(event)

    def for_owner(self, owner_id: str) -> list[TaskEvent]:
        return [e for e in self.events if e.owner_id == owner_id]


def log_event(event: TaskEvent) -> None:
    """Subscriber writing every notification to the application log."""
    logger.info(
        "%s owner=%s task=%s payload=%s",
        event.type.value,
        event.owner_id,
        event.task_id,
        event.payload,
    )
