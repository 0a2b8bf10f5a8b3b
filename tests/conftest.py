"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state and
ready-made stores wired to a controllable clock.
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from taskledger.adapters.memory import InMemoryTaskRepository
from taskledger.adapters.sqlite import SqliteTaskRepository, open_connection
from taskledger.adapters.sqlite.connection import DatabaseConnection
from taskledger.services import EventBus, EventRecorder, TaskQueryEngine, TaskStore
from taskledger.utils.clock import FixedClock

T0 = 1_700_000_000


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolate_log_dir(tmp_path):
    """Send the application log into tmp_path and reset the logger singleton."""
    import taskledger.utils.logger as logger_mod

    def _reset():
        app_logger = logging.getLogger("taskledger")
        for handler in list(app_logger.handlers):
            handler.close()
            app_logger.removeHandler(handler)
        app_logger.propagate = True
        logger_mod._logger = None

    _reset()
    with patch("taskledger.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield
    _reset()


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only.
    Also clears the lru_caches so each test gets fresh services.
    """
    from taskledger.services.config_service import ConfigService, get_config_service
    from taskledger.services.context_manager import reset_services

    tmpdir = str(tmp_path)
    get_config_service.cache_clear()
    reset_services()
    with patch("taskledger.services.config_service.user_config_dir", return_value=tmpdir):
        with patch("taskledger.services.config_service.user_data_dir", return_value=tmpdir):
            yield ConfigService()
    get_config_service.cache_clear()
    reset_services()
    DatabaseConnection.close_connection()


# ---------------------------------------------------------------------------
# Core services
# ---------------------------------------------------------------------------


@pytest.fixture()
def clock():
    return FixedClock(T0)


@pytest.fixture()
def recorder():
    return EventRecorder()


@pytest.fixture()
def bus(recorder):
    event_bus = EventBus()
    event_bus.subscribe(recorder)
    return event_bus


@pytest.fixture()
def memory_repo():
    return InMemoryTaskRepository()


@pytest.fixture()
def sqlite_repo(tmp_path):
    connection = open_connection(tmp_path / "ledger.db")
    yield SqliteTaskRepository(connection=connection)
    connection.close()


@pytest.fixture(params=["memory", "sqlite"])
def repository(request):
    """Each backend in turn; the store contract must hold for both."""
    return request.getfixturevalue(f"{request.param}_repo")


@pytest.fixture()
def store(repository, bus, clock):
    return TaskStore(repository, publisher=bus, clock=clock)


@pytest.fixture()
def engine(store):
    return TaskQueryEngine(store)
