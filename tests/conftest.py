"""
Shared fixtures: a fresh SQLite file per test.
"""

import tempfile

import pytest

from sqlplay.config import ServerConfig, StorageConfig
from sqlplay.engine import Playground
from sqlplay.storage import Database, SchemaManager


@pytest.fixture
def data_dir():
    """Create temporary data directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def storage_config(data_dir):
    return StorageConfig(db_path=f"{data_dir}/playground.db", wal_mode=False)


@pytest.fixture
def server_config(storage_config):
    return ServerConfig(storage=storage_config)


@pytest.fixture
def db(storage_config):
    """Connected database, closed after the test."""
    database = Database(storage_config)
    database.connect()
    yield database
    database.close()


@pytest.fixture
def schema(db):
    return SchemaManager(db)


@pytest.fixture
def playground(db):
    """Playground core over the connected database."""
    return Playground(db)
