"""
Owned SQLite connection for SQL Playground.

One Database instance is created per process and handed to every
component that touches the store. It owns the single sqlite3 connection
shared by workspace metadata, execution history and user SQL.

Invariants:
    - Exactly one connection per Database; connect() is idempotent
    - Foreign keys are enforced on the connection (history cascade)
    - Autocommit mode: every statement commits on its own
    - sqlite3 exceptions are converted to StorageError at this boundary

How to change safely:
    - Connection pragmas apply to user SQL too; keep them conservative
    - Never expose the raw connection outside the storage/engine packages
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from ..config import StorageConfig
from ..errors import StorageError

logger = logging.getLogger(__name__)

MEMORY_PATH = ":memory:"


class Database:
    """Single shared SQLite connection with an explicit lifecycle.

    Thread safety:
        The connection is opened with check_same_thread=False so an
        ASGI server may call it from its worker thread. Calls are
        serialized by SQLite itself; no additional locking is done here.

    Example:
        >>> db = Database(StorageConfig(db_path="/tmp/play.db"))
        >>> db.connect()
        >>> db.connection.execute("SELECT 1").fetchone()[0]
        1
        >>> db.close()
    """

    def __init__(self, config: StorageConfig | None = None) -> None:
        """Initialize the database handle (does not open it).

        Args:
            config: Storage configuration
        """
        self.config = config or StorageConfig()
        self.path = self.config.db_path
        self._conn: sqlite3.Connection | None = None

    @property
    def is_connected(self) -> bool:
        return self._conn is not None

    @property
    def connection(self) -> sqlite3.Connection:
        """The open connection.

        Raises:
            StorageError: If connect() has not been called
        """
        if self._conn is None:
            raise StorageError("Database is not connected", path=self.path)
        return self._conn

    def connect(self) -> None:
        """Open the database file, creating it if needed.

        Raises:
            StorageError: If the file cannot be opened or configured
        """
        if self._conn is not None:
            return

        try:
            if self.path != MEMORY_PATH:
                Path(self.path).parent.mkdir(parents=True, exist_ok=True)

            conn = sqlite3.connect(
                self.path,
                timeout=self.config.busy_timeout_ms / 1000.0,
                isolation_level=None,  # Autocommit
                check_same_thread=False,
            )
            conn.row_factory = sqlite3.Row

            conn.execute(f"PRAGMA busy_timeout = {self.config.busy_timeout_ms}")
            if self.config.wal_mode and self.path != MEMORY_PATH:
                conn.execute("PRAGMA journal_mode = WAL")
            conn.execute("PRAGMA foreign_keys = ON")
        except (OSError, sqlite3.Error) as e:
            logger.error(f"Error opening database {self.path}: {e}")
            raise StorageError("Cannot open database", path=self.path, cause=str(e)) from e

        self._conn = conn
        logger.info("Connected to the SQLite database", extra={"db_path": self.path})

    def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        if self._conn is None:
            return
        try:
            self._conn.close()
        except sqlite3.Error as e:
            logger.error(f"Error closing database: {e}")
        finally:
            self._conn = None
        logger.info("Closed the database connection", extra={"db_path": self.path})

    @contextmanager
    def storage_errors(self, operation: str) -> Iterator[sqlite3.Connection]:
        """Yield the connection, converting sqlite3 failures to StorageError.

        Args:
            operation: Short description used in the error message

        Yields:
            SQLite connection
        """
        conn = self.connection
        try:
            yield conn
        except sqlite3.Error as e:
            logger.error(f"Storage failure during {operation}: {e}")
            raise StorageError(f"Failed to {operation}", path=self.path, cause=str(e)) from e

    @contextmanager
    def transaction(self, operation: str) -> Iterator[sqlite3.Connection]:
        """Run a block inside BEGIN IMMEDIATE ... COMMIT.

        Args:
            operation: Short description used in the error message

        Yields:
            SQLite connection
        """
        with self.storage_errors(operation) as conn:
            conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
                conn.execute("COMMIT")
            except Exception:
                conn.execute("ROLLBACK")
                raise
