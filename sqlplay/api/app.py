"""
SQL Playground HTTP API.

Exposes the Playground core over REST:
- CRUD for playgrounds
- Guarded SQL execution
- Per-playground execution history

Usage:
    uvicorn sqlplay.api.app:app --port 8000

Or via the console script:
    sqlplay-server
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .._version import __version__
from ..config import ServerConfig
from ..engine import Playground
from ..errors import PlaygroundError
from .config import Settings
from .routes import playground_error_handler, router


def create_app(config: ServerConfig | None = None, settings: Settings | None = None) -> FastAPI:
    """Create the SQL Playground FastAPI app.

    Args:
        config: Core configuration (loaded from env at startup if not provided)
        settings: HTTP settings (loaded from env if not provided)
    """
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Own the Playground (and its database connection) for the app lifetime."""
        server_config = config or ServerConfig.from_env()
        server_config.log_config()

        playground = Playground.from_config(server_config)
        await playground.open()

        app.state.playground = playground
        app.state.settings = settings

        yield

        await playground.close()

    app = FastAPI(
        title="SQL Playground",
        description=(
            "Named SQL workspaces over a shared SQLite store. "
            "Destructive statements are rejected and every attempt is kept in history."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(PlaygroundError, playground_error_handler)

    # API routes
    app.include_router(router, prefix="/api")

    @app.get("/health")
    async def health():
        return {"status": "healthy", "service": "sql-playground"}

    return app


app = create_app()
