"""
Schema manager for the playground metadata tables.

Table schema:
    playgrounds:
        - id INTEGER PRIMARY KEY AUTOINCREMENT (never reused)
        - title TEXT
        - created_at INTEGER (Unix ms)
        - last_modified INTEGER (Unix ms)

    query_history:
        - id INTEGER PRIMARY KEY AUTOINCREMENT
        - playground_id INTEGER -> playgrounds(id) ON DELETE CASCADE
        - query TEXT (verbatim, including rejected text)
        - executed_at INTEGER (Unix ms)
        - success INTEGER (0/1)
        - error TEXT (NULL on success)
"""

from __future__ import annotations

import asyncio
import logging

from .database import Database

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

SCHEMA_SQL = """
    -- Schema version tracking
    CREATE TABLE IF NOT EXISTS schema_version (
        version INTEGER PRIMARY KEY,
        applied_at INTEGER NOT NULL
    );

    -- Workspaces
    CREATE TABLE IF NOT EXISTS playgrounds (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL,
        created_at INTEGER NOT NULL,
        last_modified INTEGER NOT NULL
    );

    CREATE INDEX IF NOT EXISTS idx_playgrounds_modified
        ON playgrounds(last_modified DESC);

    -- Execution history
    CREATE TABLE IF NOT EXISTS query_history (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        playground_id INTEGER NOT NULL,
        query TEXT NOT NULL,
        executed_at INTEGER NOT NULL,
        success INTEGER NOT NULL DEFAULT 0,
        error TEXT,
        FOREIGN KEY (playground_id) REFERENCES playgrounds (id) ON DELETE CASCADE
    );

    CREATE INDEX IF NOT EXISTS idx_history_playground
        ON query_history(playground_id, executed_at DESC);

    -- Record schema version
    INSERT OR IGNORE INTO schema_version (version, applied_at)
    VALUES (1, strftime('%s', 'now') * 1000);
"""


class SchemaManager:
    """Creates the metadata tables once per process.

    ensure_schema() is cheap after the first successful call and is
    awaited at the top of every store operation.
    """

    def __init__(self, db: Database) -> None:
        self.db = db
        self._initialized = False
        self._lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def ensure_schema(self) -> None:
        """Create the workspace and history tables if absent.

        Raises:
            StorageError: If the database is not connected or the DDL fails
        """
        if self._initialized:
            return

        async with self._lock:
            if self._initialized:
                return
            with self.db.storage_errors("initialize schema") as conn:
                conn.executescript(SCHEMA_SQL)
            self._initialized = True
            logger.info(
                "Database schema initialized",
                extra={"db_path": self.db.path, "schema_version": SCHEMA_VERSION},
            )
