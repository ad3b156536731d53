"""
Workspace store: CRUD over playground metadata.

Invariants:
    - created_at is set once and never changes
    - last_modified never moves backwards
    - Deleting a workspace cascades to its history in SQLite itself
    - get_workspace() never raises for a missing id
"""

from __future__ import annotations

import logging
import sqlite3
import time
from dataclasses import dataclass
from typing import Any

from ..errors import NotFoundError, ValidationError
from .database import Database
from .schema import SchemaManager

logger = logging.getLogger(__name__)


@dataclass
class Workspace:
    """A named SQL playground.

    Attributes:
        id: Store-assigned identifier (monotonic, never reused)
        title: Display title
        created_at: Creation timestamp (Unix ms)
        last_modified: Last rename timestamp (Unix ms)
    """

    id: int
    title: str
    created_at: int
    last_modified: int

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> Workspace:
        return cls(
            id=row["id"],
            title=row["title"],
            created_at=row["created_at"],
            last_modified=row["last_modified"],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "createdAt": self.created_at,
            "lastModified": self.last_modified,
        }


def validate_title(title: Any) -> str:
    """Check a workspace title.

    Raises:
        ValidationError: If title is not a non-empty string
    """
    if not isinstance(title, str) or not title:
        raise ValidationError("Title is required and must be a string", field_name="title")
    return title


def validate_workspace_id(workspace_id: Any) -> int:
    """Check a workspace id.

    Raises:
        ValidationError: If the id is not an integer
    """
    # bool is an int subclass
    if isinstance(workspace_id, bool) or not isinstance(workspace_id, int):
        raise ValidationError(
            "Playground ID is required and must be a number", field_name="playground_id"
        )
    return workspace_id


class WorkspaceStore:
    """CRUD operations on the playgrounds table.

    Example:
        >>> store = WorkspaceStore(db, schema)
        >>> ws = await store.create_workspace("demo")
        >>> (await store.get_workspace(ws.id)).title
        'demo'
    """

    _COLUMNS = "id, title, created_at, last_modified"

    def __init__(self, db: Database, schema: SchemaManager) -> None:
        self.db = db
        self.schema = schema

    async def list_workspaces(self) -> list[Workspace]:
        """Return all workspaces, most recently modified first."""
        await self.schema.ensure_schema()
        with self.db.storage_errors("list playgrounds") as conn:
            cursor = conn.execute(
                f"""
                SELECT {self._COLUMNS} FROM playgrounds
                ORDER BY last_modified DESC, id DESC
                """
            )
            return [Workspace.from_row(row) for row in cursor.fetchall()]

    async def create_workspace(self, title: Any) -> Workspace:
        """Create a new workspace.

        Args:
            title: Non-empty title

        Returns:
            Created Workspace with created_at == last_modified

        Raises:
            ValidationError: If title is empty or not a string
        """
        title = validate_title(title)
        await self.schema.ensure_schema()

        now = int(time.time() * 1000)
        with self.db.storage_errors("create playground") as conn:
            cursor = conn.execute(
                "INSERT INTO playgrounds (title, created_at, last_modified) VALUES (?, ?, ?)",
                (title, now, now),
            )
            workspace_id = cursor.lastrowid

        logger.info("Created playground", extra={"playground_id": workspace_id})
        return Workspace(id=workspace_id, title=title, created_at=now, last_modified=now)

    async def get_workspace(self, workspace_id: Any) -> Workspace | None:
        """Fetch a workspace by id.

        Returns:
            The Workspace, or None if it does not exist
        """
        if isinstance(workspace_id, bool) or not isinstance(workspace_id, int):
            return None
        await self.schema.ensure_schema()
        with self.db.storage_errors("get playground") as conn:
            row = conn.execute(
                f"SELECT {self._COLUMNS} FROM playgrounds WHERE id = ?",
                (workspace_id,),
            ).fetchone()
        return Workspace.from_row(row) if row else None

    async def rename_workspace(self, workspace_id: Any, title: Any) -> Workspace:
        """Change a workspace title and bump last_modified.

        Raises:
            ValidationError: If the id or title is malformed
            NotFoundError: If the workspace does not exist
        """
        workspace_id = validate_workspace_id(workspace_id)
        title = validate_title(title)
        await self.schema.ensure_schema()

        now = int(time.time() * 1000)
        with self.db.transaction("rename playground") as conn:
            conn.execute(
                """
                UPDATE playgrounds SET title = ?, last_modified = MAX(last_modified, ?)
                WHERE id = ?
                """,
                (title, now, workspace_id),
            )
            row = conn.execute(
                f"SELECT {self._COLUMNS} FROM playgrounds WHERE id = ?",
                (workspace_id,),
            ).fetchone()

        if row is None:
            raise NotFoundError("Playground not found", "playground", workspace_id)

        logger.info("Renamed playground", extra={"playground_id": workspace_id})
        return Workspace.from_row(row)

    async def delete_workspace(self, workspace_id: Any) -> None:
        """Delete a workspace and, by cascade, its history.

        Raises:
            ValidationError: If the id is malformed
            NotFoundError: If the workspace does not exist
        """
        workspace_id = validate_workspace_id(workspace_id)
        await self.schema.ensure_schema()

        with self.db.storage_errors("delete playground") as conn:
            cursor = conn.execute("DELETE FROM playgrounds WHERE id = ?", (workspace_id,))
            deleted = cursor.rowcount

        if deleted == 0:
            raise NotFoundError("Playground not found", "playground", workspace_id)

        logger.info("Deleted playground", extra={"playground_id": workspace_id})
