"""
SQL Playground server - main entry point.

Usage:
    sqlplay-server
    python -m sqlplay.main

Configuration is entirely via environment variables.
See config.py and api/config.py for all available settings.
"""

from __future__ import annotations

import logging
import sys

import uvicorn

from .api.app import create_app
from .api.config import Settings
from .config import ServerConfig
from .observability import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point."""
    try:
        config = ServerConfig.from_env()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(config.observability)

    settings = Settings()
    app = create_app(config, settings)

    logger.info(f"Starting SQL Playground on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
