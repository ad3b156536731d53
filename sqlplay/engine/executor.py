"""
Query executor: runs one permitted statement and normalizes its result.

A statement is treated as row-returning only when its text starts with
SELECT (case-insensitive, leading whitespace ignored). Anything else,
including INSERT ... RETURNING and WITH ... SELECT, is run for its side
effects and yields the empty result shape.

Invariants:
    - Every returned row has exactly len(columns) values; NULL is None
    - No rows always means columns == [] and row_count == 0
    - to_dict() is JSON-safe: BLOB values are rendered as hex
    - sqlite3 failures surface as QueryError carrying SQLite's message
    - A statement never leaves a transaction open on the shared connection
"""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass, field
from typing import Any

from ..errors import QueryError
from ..storage.database import Database

logger = logging.getLogger(__name__)


@dataclass
class ExecutionResult:
    """Uniform result of an executed statement.

    Attributes:
        columns: Column names, in the order SQLite produced them
        rows: One positional list per row, aligned with columns
        row_count: Number of rows returned
    """

    columns: list[str] = field(default_factory=list)
    rows: list[list[Any]] = field(default_factory=list)
    row_count: int = 0

    @classmethod
    def empty(cls) -> ExecutionResult:
        return cls(columns=[], rows=[], row_count=0)

    @classmethod
    def from_rows(cls, rows: list[sqlite3.Row]) -> ExecutionResult:
        if not rows:
            return cls.empty()
        columns = list(rows[0].keys())
        return cls(
            columns=columns,
            rows=[list(row) for row in rows],
            row_count=len(rows),
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe form; BLOB values become lowercase hex strings."""
        return {
            "columns": self.columns,
            "rows": [[json_value(value) for value in row] for row in self.rows],
            "rowCount": self.row_count,
        }


def json_value(value: Any) -> Any:
    if isinstance(value, bytes):
        return value.hex()
    return value


def is_row_returning(sql_text: str) -> bool:
    """Leading-keyword heuristic for statements that produce rows."""
    return sql_text.upper().strip().startswith("SELECT")


class QueryExecutor:
    """Runs user SQL on the shared connection."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def execute(self, sql_text: str) -> ExecutionResult:
        """Execute a single statement.

        Args:
            sql_text: SQL already cleared by the safety gate

        Returns:
            ExecutionResult for the statement

        Raises:
            QueryError: If SQLite rejects or fails the statement
            StorageError: If the database is not connected
        """
        conn = self.db.connection
        row_returning = is_row_returning(sql_text)

        try:
            cursor = conn.execute(sql_text)
            rows = cursor.fetchall() if row_returning else []
            cursor.close()
            self._close_open_transaction(conn)
        except (sqlite3.Error, sqlite3.Warning) as e:
            logger.info(f"User query failed: {e}")
            raise QueryError(str(e) or "Query execution failed") from e

        return ExecutionResult.from_rows(rows)

    def _close_open_transaction(self, conn: sqlite3.Connection) -> None:
        # A bare BEGIN would otherwise capture the metadata writes that follow.
        if not conn.in_transaction:
            return
        logger.debug("Committing transaction left open by user statement")
        try:
            conn.execute("COMMIT")
        except sqlite3.Error:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise
