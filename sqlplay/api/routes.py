"""
SQL Playground API routes.

Thin adapter over the Playground facade. Request bodies are accepted
loosely and validated by the core so the error messages stay the same
for HTTP and CLI callers.

Error mapping:
    ValidationError, RejectedQueryError, QueryError -> 400
    NotFoundError                                   -> 404
    StorageError                                    -> 500
"""

import logging
import time
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..engine import Playground
from ..errors import NotFoundError, PlaygroundError, StorageError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Playground"])


# =============================================================================
# Request/Response Models
# =============================================================================


class TitleRequest(BaseModel):
    """Create or rename a playground."""
    title: Any = Field(None, description="Playground title")


class ExecuteRequest(BaseModel):
    """Run a SQL statement in a playground."""
    query: Any = Field(None, description="SQL text")
    playgroundId: Any = Field(None, description="Target playground ID")


class WorkspaceResponse(BaseModel):
    id: int
    title: str
    createdAt: int
    lastModified: int


class HistoryResponse(BaseModel):
    id: int
    workspaceId: int
    query: str
    executedAt: int
    success: bool
    error: str | None = None


class ExecuteResponse(BaseModel):
    columns: list[str]
    rows: list[list[Any]]
    rowCount: int
    executionTime: int = Field(..., description="Wall time in milliseconds")


class MessageResponse(BaseModel):
    message: str


# =============================================================================
# Dependencies & helpers
# =============================================================================


def get_playground(request: Request) -> Playground:
    """Get the Playground core from app state."""
    return request.app.state.playground


def parse_playground_id(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValidationError("Invalid playground ID", field_name="playground_id") from None


def error_status(error: PlaygroundError) -> int:
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, StorageError):
        return 500
    return 400


async def playground_error_handler(request: Request, exc: PlaygroundError) -> JSONResponse:
    status = error_status(exc)
    if status >= 500:
        logger.error(f"Storage failure on {request.url.path}: {exc.message} ({exc.details.get('cause')})")
    return JSONResponse({"error": exc.message, "code": exc.code}, status_code=status)


# =============================================================================
# Playground Endpoints
# =============================================================================


@router.get("/playgrounds", response_model=list[WorkspaceResponse])
async def list_playgrounds(playground: Playground = Depends(get_playground)):
    workspaces = await playground.list_workspaces()
    return [ws.to_dict() for ws in workspaces]


@router.post("/playgrounds", response_model=WorkspaceResponse, status_code=201)
async def create_playground(
    request: TitleRequest,
    playground: Playground = Depends(get_playground),
):
    workspace = await playground.create_workspace(request.title)
    return workspace.to_dict()


@router.get("/playgrounds/{playground_id}", response_model=WorkspaceResponse)
async def get_playground_by_id(
    playground_id: str,
    playground: Playground = Depends(get_playground),
):
    workspace_id = parse_playground_id(playground_id)
    workspace = await playground.get_workspace(workspace_id)
    if workspace is None:
        raise NotFoundError("Playground not found", "playground", workspace_id)
    return workspace.to_dict()


@router.put("/playgrounds/{playground_id}", response_model=MessageResponse)
async def update_playground(
    playground_id: str,
    request: TitleRequest,
    playground: Playground = Depends(get_playground),
):
    workspace_id = parse_playground_id(playground_id)
    await playground.rename_workspace(workspace_id, request.title)
    return {"message": "Playground updated successfully"}


@router.delete("/playgrounds/{playground_id}", response_model=MessageResponse)
async def delete_playground(
    playground_id: str,
    playground: Playground = Depends(get_playground),
):
    workspace_id = parse_playground_id(playground_id)
    await playground.delete_workspace(workspace_id)
    return {"message": "Playground deleted successfully"}


@router.get("/playgrounds/{playground_id}/history", response_model=list[HistoryResponse])
async def get_playground_history(
    playground_id: str,
    playground: Playground = Depends(get_playground),
):
    workspace_id = parse_playground_id(playground_id)
    if await playground.get_workspace(workspace_id) is None:
        raise NotFoundError("Playground not found", "playground", workspace_id)
    records = await playground.get_history(workspace_id)
    return [record.to_dict() for record in records]


# =============================================================================
# Query Execution
# =============================================================================


@router.post("/execute", response_model=ExecuteResponse)
async def execute_query(
    request: ExecuteRequest,
    playground: Playground = Depends(get_playground),
):
    """
    Run one SQL statement against the shared store.

    Statements containing DROP, DELETE, TRUNCATE, ALTER, PRAGMA, ATTACH or
    DETACH are rejected. Every attempt is added to the playground history.
    """
    start = time.monotonic()
    result = await playground.run_guarded_query(request.playgroundId, request.query)
    execution_time = int((time.monotonic() - start) * 1000)
    return {**result.to_dict(), "executionTime": execution_time}
