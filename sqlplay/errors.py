"""
Error types for SQL Playground.

This module defines all exception types raised by the core:
- PlaygroundError: Base exception
- ValidationError: Malformed input (empty title, wrong value type)
- NotFoundError: Referenced workspace does not exist
- RejectedQueryError: Safety gate denied the statement
- QueryError: SQLite failed to execute a permitted statement
- StorageError: Connection or schema level failure

Invariants:
    - All errors inherit from PlaygroundError
    - Messages are safe to show to the user (no tracebacks, no internals)
    - Raw sqlite3 exceptions never escape the core; they are chained instead
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class PlaygroundError(Exception):
    """Base exception for all SQL Playground errors.

    Attributes:
        message: Error message
        code: Error code for programmatic handling
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or "PLAYGROUND_ERROR"
        self.details = details or {}


class ValidationError(PlaygroundError):
    """Input validation failed.

    Raised when:
    - Title is missing, empty or not a string
    - Query text is missing or not a string
    - Workspace id is not an integer
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            code="VALIDATION_ERROR",
            details={"field": field_name},
        )
        self.field_name = field_name


class NotFoundError(PlaygroundError):
    """Resource not found."""

    def __init__(
        self,
        message: str,
        resource_type: str,
        resource_id: Any,
    ) -> None:
        super().__init__(
            message,
            code="NOT_FOUND",
            details={
                "resource_type": resource_type,
                "resource_id": resource_id,
            },
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class RejectedQueryError(PlaygroundError):
    """Statement denied by the safety gate before execution.

    Attributes:
        keywords: Denied keywords found in the statement
    """

    def __init__(
        self,
        message: str,
        keywords: Optional[List[str]] = None,
    ) -> None:
        super().__init__(
            message,
            code="QUERY_REJECTED",
            details={"keywords": keywords or []},
        )
        self.keywords = keywords or []


class QueryError(PlaygroundError):
    """A permitted statement failed inside SQLite.

    Covers syntax errors, constraint violations, type mismatches and
    a locked database. The message is the store's own message.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, code="QUERY_ERROR")


class StorageError(PlaygroundError):
    """The store could not be opened, initialized or queried.

    The message is fixed per operation. The underlying sqlite3 text is
    kept in details["cause"] and the log, never in the message.
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        cause: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            code="STORAGE_ERROR",
            details={"path": path, "cause": cause},
        )
        self.path = path
        self.cause = cause
