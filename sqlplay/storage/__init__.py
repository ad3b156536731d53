"""
Storage module for SQL Playground - the SQLite side of the core.

This module handles:
- The single owned SQLite connection (Database)
- Idempotent creation of the metadata tables (SchemaManager)
- Workspace CRUD (WorkspaceStore)
- Append-only execution history (HistoryRecorder)

Invariants:
    - All components share one Database passed in by the caller
    - Foreign keys are on; history rows cascade with their workspace
"""

from .database import Database
from .history import HISTORY_LIMIT, HistoryRecord, HistoryRecorder
from .schema import SchemaManager
from .workspaces import Workspace, WorkspaceStore

__all__ = [
    "Database",
    "SchemaManager",
    "Workspace",
    "WorkspaceStore",
    "HistoryRecord",
    "HistoryRecorder",
    "HISTORY_LIMIT",
]
