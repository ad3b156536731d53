"""
SQL Playground - named SQL workspaces over a shared SQLite store.

This package implements the query execution and persistence engine:
- Workspaces ("playgrounds") with titles and modification timestamps
- A keyword safety gate in front of user-submitted SQL
- A query executor that normalizes results into columns/rows/rowCount
- An append-only execution history per workspace

Architecture:
    ┌─────────────┐     ┌─────────────┐     ┌─────────────┐
    │  HTTP / CLI │────▶│ Playground  │────▶│ Safety Gate │
    └─────────────┘     └──────┬──────┘     └─────────────┘
                               │
              ┌────────────────┼────────────────┐
              ▼                ▼                ▼
        ┌───────────┐   ┌────────────┐   ┌────────────┐
        │ Workspace │   │   Query    │   │  History   │
        │   Store   │   │  Executor  │   │  Recorder  │
        └─────┬─────┘   └─────┬──────┘   └─────┬──────┘
              └───────────────┼────────────────┘
                              ▼
                       ┌────────────┐
                       │  SQLite    │
                       │ (Database) │
                       └────────────┘

Invariants:
    - Every execution attempt against a workspace leaves one history record
    - Deleting a workspace removes its history (ON DELETE CASCADE)
    - Row-returning results always have len(row) == len(columns)

How to change safely:
    - Keep the safety gate in front of every user statement
    - Add columns to the metadata tables with defaults only
    - Keep the HTTP and CLI layers free of business rules
"""

from ._version import __version__

__all__ = ["__version__"]
