"""
Playground facade - the operations the request layer calls.

run_guarded_query() is the single entry point for user-submitted SQL:

    validate -> workspace exists? -> safety gate -> executor -> history

Invariants:
    - Every attempt that reaches an existing workspace is recorded,
      whether the gate rejected it, SQLite failed it or it succeeded
    - The history append happens before the result or error is returned
    - A failed history append never replaces the primary outcome

How to change safely:
    - Keep the gate before the executor; never add a bypass path
    - New operations go here so HTTP and CLI stay thin
"""

from __future__ import annotations

import logging
from typing import Any

from ..config import ServerConfig, StorageConfig
from ..errors import NotFoundError, QueryError, RejectedQueryError, ValidationError
from ..storage import (
    Database,
    HistoryRecord,
    HistoryRecorder,
    SchemaManager,
    Workspace,
    WorkspaceStore,
)
from ..storage.workspaces import validate_workspace_id
from .executor import ExecutionResult, QueryExecutor
from .safety import REJECTION_MESSAGE, SafetyGate

logger = logging.getLogger(__name__)


class Playground:
    """Core of SQL Playground, wired around one Database.

    Attributes:
        db: Owned SQLite connection
        schema: Schema manager
        workspaces: Workspace store
        history: History recorder
        gate: Safety gate
        executor: Query executor

    Example:
        >>> async with Playground.from_config(config) as playground:
        ...     ws = await playground.create_workspace("demo")
        ...     result = await playground.run_guarded_query(ws.id, "SELECT 1 as x")
        ...     result.to_dict()
        {'columns': ['x'], 'rows': [[1]], 'rowCount': 1}
    """

    def __init__(self, db: Database, gate: SafetyGate | None = None) -> None:
        self.db = db
        self.schema = SchemaManager(db)
        self.workspaces = WorkspaceStore(db, self.schema)
        self.history = HistoryRecorder(db, self.schema)
        self.gate = gate or SafetyGate()
        self.executor = QueryExecutor(db)

    @classmethod
    def from_config(cls, config: ServerConfig | StorageConfig) -> Playground:
        storage = config.storage if isinstance(config, ServerConfig) else config
        return cls(Database(storage))

    async def open(self) -> None:
        """Connect to the store and create the schema once.

        Raises:
            StorageError: If the store cannot be opened or initialized
        """
        self.db.connect()
        await self.schema.ensure_schema()

    async def close(self) -> None:
        self.db.close()

    async def __aenter__(self) -> Playground:
        await self.open()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    # =========================================================================
    # Schema & workspaces
    # =========================================================================

    async def ensure_schema(self) -> None:
        await self.schema.ensure_schema()

    async def list_workspaces(self) -> list[Workspace]:
        return await self.workspaces.list_workspaces()

    async def create_workspace(self, title: Any) -> Workspace:
        return await self.workspaces.create_workspace(title)

    async def get_workspace(self, workspace_id: Any) -> Workspace | None:
        return await self.workspaces.get_workspace(workspace_id)

    async def rename_workspace(self, workspace_id: Any, title: Any) -> Workspace:
        return await self.workspaces.rename_workspace(workspace_id, title)

    async def delete_workspace(self, workspace_id: Any) -> None:
        await self.workspaces.delete_workspace(workspace_id)

    # =========================================================================
    # Queries & history
    # =========================================================================

    async def run_guarded_query(self, workspace_id: Any, sql_text: Any) -> ExecutionResult:
        """Check, run and record one user statement.

        Args:
            workspace_id: Workspace the statement belongs to
            sql_text: Raw SQL text

        Returns:
            ExecutionResult of the statement

        Raises:
            ValidationError: If the query text or id is malformed
            NotFoundError: If the workspace does not exist
            RejectedQueryError: If the safety gate denied the statement
            QueryError: If SQLite failed the statement
        """
        if not isinstance(sql_text, str) or not sql_text:
            raise ValidationError("Query is required and must be a string", field_name="query")
        workspace_id = validate_workspace_id(workspace_id)

        if await self.workspaces.get_workspace(workspace_id) is None:
            raise NotFoundError("Playground not found", "playground", workspace_id)

        classification = self.gate.classify(sql_text)
        if not classification.permitted:
            logger.warning(
                "Rejected query",
                extra={"playground_id": workspace_id, "keywords": list(classification.matched)},
            )
            await self.history.record(workspace_id, sql_text, False, REJECTION_MESSAGE)
            raise RejectedQueryError(REJECTION_MESSAGE, keywords=list(classification.matched))

        try:
            result = await self.executor.execute(sql_text)
        except QueryError as e:
            await self.history.record(workspace_id, sql_text, False, e.message)
            raise

        await self.history.record(workspace_id, sql_text, True)
        logger.debug(
            "Executed query",
            extra={"playground_id": workspace_id, "row_count": result.row_count},
        )
        return result

    async def get_history(self, workspace_id: Any) -> list[HistoryRecord]:
        if isinstance(workspace_id, bool) or not isinstance(workspace_id, int):
            return []
        return await self.history.get_history(workspace_id)
