"""Bootstrap of storage and services from the configuration.

Key Functions:
- get_strategy_context(): storage strategy for the configured backend
- get_event_bus(): process-wide notification bus
- get_task_store() / get_query_engine(): services wired to both

Usage Pattern:
    from taskledger.services.context_manager import get_task_store

    store = get_task_store()
    task_id = await store.create_task(owner, "Buy milk")
"""

from __future__ import annotations

import logging
from functools import lru_cache

from taskledger.models.strategy import LocalStrategy, MemoryStrategy, StrategyContext
from taskledger.services.config_service import get_config_service
from taskledger.services.events import EventBus, log_event
from taskledger.services.query_engine import TaskQueryEngine
from taskledger.services.task_store import TaskStore

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_strategy_context() -> StrategyContext:
    """Get a cached StrategyContext for the configured storage backend."""
    config_svc = get_config_service()
    storage = config_svc.config.storage

    if storage.backend == "memory":
        strategy = MemoryStrategy()
    else:
        strategy = LocalStrategy(db_path=config_svc.get_db_path())

    logger.debug("Storage strategy: %s", strategy.storage_type)
    return StrategyContext(strategy)


@lru_cache(maxsize=1)
def get_event_bus() -> EventBus:
    """Get the process-wide event bus; every notification is also logged."""
    bus = EventBus()
    bus.subscribe(log_event)
    return bus


@lru_cache(maxsize=1)
def get_task_store() -> TaskStore:
    """Get the task store bound to the configured storage."""
    return TaskStore(get_strategy_context().task_repository, publisher=get_event_bus())


@lru_cache(maxsize=1)
def get_query_engine() -> TaskQueryEngine:
    """Get the query engine reading from the shared task store."""
    return TaskQueryEngine(get_task_store())


def reset_services() -> None:
    """Drop cached services (after a config change or between tests)."""
    get_query_engine.cache_clear()
    get_task_store.cache_clear()
    get_event_bus.cache_clear()
    get_strategy_context.cache_clear()
