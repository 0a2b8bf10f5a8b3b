"""Unit tests for services/config_service.py.

Uses a real ConfigService pointed at a tmp_path directory.
"""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from taskledger.models import AppConfig, ValidationError
from taskledger.models.strategy import LocalStrategy, MemoryStrategy
from taskledger.services.config_service import get_config_service
from taskledger.services.context_manager import (
    get_event_bus,
    get_query_engine,
    get_strategy_context,
    get_task_store,
    reset_services,
)


class TestConfigServiceInit:
    def test_dirs_created(self, tmp_config):
        assert tmp_config.config_dir.is_dir()
        assert tmp_config.data_dir.is_dir()

    def test_first_load_writes_default(self, tmp_config, tmp_path):
        config = tmp_config.config

        assert tmp_config.config_path.exists()
        assert (tmp_config.config_path.stat().st_mode & 0o777) == 0o600
        assert config.default_owner == "local"
        assert config.storage.backend == "sqlite"
        assert config.storage.db_path == str(tmp_path / "ledger.db")

    def test_load_existing_file(self, tmp_config):
        tmp_config.config_path.write_text(
            json.dumps({"default_owner": "alice", "storage": {"backend": "memory"}})
        )

        config = tmp_config.load_config()

        assert config.default_owner == "alice"
        assert config.storage.backend == "memory"

    def test_corrupt_file_raises_runtime_error(self, tmp_config):
        tmp_config.config_path.write_text("{not json")
        with pytest.raises(RuntimeError, match="Failed to load config"):
            tmp_config.load_config()

    def test_save_without_config_raises(self, tmp_config):
        with pytest.raises(RuntimeError):
            tmp_config.save_config()


class TestSetValue:
    def test_set_top_level_key(self, tmp_config):
        tmp_config.set_value("default_owner", "bob")

        saved = AppConfig.model_validate_json(tmp_config.config_path.read_text())
        assert saved.default_owner == "bob"

    def test_set_nested_key(self, tmp_config):
        tmp_config.set_value("storage.backend", "memory")
        tmp_config.set_value("output.upcoming_window", 3600)

        assert tmp_config.config.storage.backend == "memory"
        assert tmp_config.config.output.upcoming_window == 3600

    def test_log_level_normalised(self, tmp_config):
        assert tmp_config.set_value("log_level", "debug").log_level == "DEBUG"

    def test_unknown_key(self, tmp_config):
        with pytest.raises(ValidationError, match="Unknown config key"):
            tmp_config.set_value("storage.colour", "blue")

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("storage.backend", "postgres"),
            ("output.format", "xml"),
            ("output.upcoming_window", -1),
            ("default_owner", "   "),
        ],
    )
    def test_invalid_values_rejected(self, tmp_config, key, value):
        before = tmp_config.config
        with pytest.raises(ValidationError, match=f"Invalid value for {key}"):
            tmp_config.set_value(key, value)
        assert tmp_config.config == before

    def test_reset_restores_defaults(self, tmp_config):
        tmp_config.set_value("default_owner", "bob")
        config = tmp_config.reset_config()
        assert config.default_owner == "local"


class TestGetDbPath:
    def test_explicit_path(self, tmp_config, tmp_path):
        tmp_config.set_value("storage.db_path", str(tmp_path / "other.db"))
        assert tmp_config.get_db_path() == str(tmp_path / "other.db")

    def test_fallback_to_data_dir(self, tmp_config, tmp_path):
        tmp_config.set_value("storage.db_path", None)
        assert tmp_config.get_db_path() == str(tmp_path / "ledger.db")


class TestServiceFactories:
    def test_get_config_service_cached(self, tmp_config):
        assert get_config_service() is get_config_service()

    def test_memory_backend_strategy(self, tmp_config):
        get_config_service().set_value("storage.backend", "memory")
        reset_services()

        context = get_strategy_context()
        assert isinstance(context.strategy, MemoryStrategy)
        assert context.storage_type == "memory"

    def test_sqlite_backend_strategy(self, tmp_config, tmp_path):
        context = get_strategy_context()
        assert isinstance(context.strategy, LocalStrategy)
        assert context.strategy.db_path == str(tmp_path / "ledger.db")

    def test_store_and_engine_share_wiring(self, tmp_config):
        store = get_task_store()
        assert get_query_engine().store is store
        assert store.publisher is get_event_bus()
        assert store.repository is get_strategy_context().task_repository

    def test_reset_services_rebuilds(self, tmp_config):
        store = get_task_store()
        reset_services()
        assert get_task_store() is not store

    @pytest.mark.asyncio
    async def test_event_bus_logs_mutations(self, tmp_config):
        get_config_service().set_value("storage.backend", "memory")
        reset_services()

        with patch("taskledger.services.events.logger") as mock_logger:
            await get_task_store().create_task("alice", "logged")

        mock_logger.info.assert_called_once()
        assert mock_logger.info.call_args.args[1] == "TaskCreated"
