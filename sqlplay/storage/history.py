"""
History recorder: append-only audit of execution attempts.

Invariants:
    - Records are never updated; they disappear only with their workspace
    - record() never raises; a failed append is logged and reported as None
    - get_history() returns at most HISTORY_LIMIT records, newest first
"""

from __future__ import annotations

import logging
import sqlite3
import time
from dataclasses import dataclass
from typing import Any

from ..errors import PlaygroundError
from .database import Database
from .schema import SchemaManager

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 50


@dataclass(frozen=True)
class HistoryRecord:
    """One execution attempt.

    Attributes:
        id: Record identifier
        workspace_id: Owning workspace
        query: SQL text exactly as submitted
        executed_at: Attempt timestamp (Unix ms)
        success: Whether the statement ran
        error: Failure message, None on success
    """

    id: int
    workspace_id: int
    query: str
    executed_at: int
    success: bool
    error: str | None = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> HistoryRecord:
        return cls(
            id=row["id"],
            workspace_id=row["playground_id"],
            query=row["query"],
            executed_at=row["executed_at"],
            success=bool(row["success"]),
            error=row["error"],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "workspaceId": self.workspace_id,
            "query": self.query,
            "executedAt": self.executed_at,
            "success": self.success,
            "error": self.error,
        }


class HistoryRecorder:
    """Reads and appends rows of the query_history table."""

    def __init__(self, db: Database, schema: SchemaManager) -> None:
        self.db = db
        self.schema = schema

    async def record(
        self,
        workspace_id: int,
        query: str,
        success: bool,
        error: str | None = None,
    ) -> HistoryRecord | None:
        """Append a history record.

        Args:
            workspace_id: Workspace the attempt ran against
            query: SQL text as submitted
            success: Outcome of the attempt
            error: Failure message (ignored when success is True)

        Returns:
            The stored record, or None if the append failed
        """
        error = None if success else (error or "Query execution failed")
        now = int(time.time() * 1000)

        try:
            await self.schema.ensure_schema()
            with self.db.storage_errors("record query history") as conn:
                cursor = conn.execute(
                    """
                    INSERT INTO query_history (playground_id, query, executed_at, success, error)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (workspace_id, query, now, 1 if success else 0, error),
                )
                record_id = cursor.lastrowid
        except PlaygroundError:
            logger.exception(
                "Failed to record query history",
                extra={"playground_id": workspace_id, "success": success},
            )
            return None

        return HistoryRecord(
            id=record_id,
            workspace_id=workspace_id,
            query=query,
            executed_at=now,
            success=success,
            error=error,
        )

    async def get_history(self, workspace_id: int) -> list[HistoryRecord]:
        """Return the most recent records for a workspace, newest first.

        A missing workspace simply has no history.
        """
        await self.schema.ensure_schema()
        with self.db.storage_errors("get query history") as conn:
            cursor = conn.execute(
                """
                SELECT id, playground_id, query, executed_at, success, error
                FROM query_history
                WHERE playground_id = ?
                ORDER BY executed_at DESC, id DESC
                LIMIT ?
                """,
                (workspace_id, HISTORY_LIMIT),
            )
            return [HistoryRecord.from_row(row) for row in cursor.fetchall()]
