"""
Unit tests for environment-driven configuration and logging setup.
"""

import logging

import json_log_formatter
import pytest

from sqlplay.config import ObservabilityConfig, ServerConfig, StorageConfig
from sqlplay.observability import setup_logging


class TestServerConfig:
    """Tests for ServerConfig.from_env."""

    def test_defaults(self, monkeypatch):
        for var in (
            "SQLPLAY_DB_PATH",
            "SQLPLAY_SQLITE_WAL_MODE",
            "SQLPLAY_SQLITE_BUSY_TIMEOUT_MS",
            "LOG_LEVEL",
            "LOG_FORMAT",
        ):
            monkeypatch.delenv(var, raising=False)

        config = ServerConfig.from_env()

        assert config.storage == StorageConfig()
        assert config.storage.db_path == "sql_editor.db"
        assert config.observability == ObservabilityConfig()

    def test_from_env(self, monkeypatch, data_dir):
        monkeypatch.setenv("SQLPLAY_DB_PATH", f"{data_dir}/x.db")
        monkeypatch.setenv("SQLPLAY_SQLITE_WAL_MODE", "false")
        monkeypatch.setenv("SQLPLAY_SQLITE_BUSY_TIMEOUT_MS", "250")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("LOG_FORMAT", "JSON")

        config = ServerConfig.from_env()

        assert config.storage.db_path == f"{data_dir}/x.db"
        assert config.storage.wal_mode is False
        assert config.storage.busy_timeout_ms == 250
        assert config.observability.log_level == "DEBUG"
        assert config.observability.log_format == "json"

    def test_invalid_log_format(self, monkeypatch):
        monkeypatch.setenv("LOG_FORMAT", "xml")
        with pytest.raises(ValueError, match="LOG_FORMAT"):
            ServerConfig.from_env()

    def test_empty_db_path(self):
        with pytest.raises(ValueError, match="SQLPLAY_DB_PATH"):
            ServerConfig(storage=StorageConfig(db_path="")).validate()

    def test_negative_busy_timeout(self):
        with pytest.raises(ValueError):
            ServerConfig(storage=StorageConfig(busy_timeout_ms=-1)).validate()


class TestSetupLogging:
    """Tests for observability.setup_logging."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers = handlers
        root.setLevel(level)

    def test_text_format(self):
        setup_logging(ObservabilityConfig(log_level="debug", log_format="text"))
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        [handler] = root.handlers
        assert not isinstance(handler.formatter, json_log_formatter.JSONFormatter)

    def test_json_format(self):
        setup_logging(ObservabilityConfig(log_level="WARNING", log_format="json"))
        root = logging.getLogger()
        assert root.level == logging.WARNING
        [handler] = root.handlers
        assert isinstance(handler.formatter, json_log_formatter.JSONFormatter)

    def test_unknown_level_falls_back_to_info(self):
        setup_logging(ObservabilityConfig(log_level="chatty"))
        assert logging.getLogger().level == logging.INFO
