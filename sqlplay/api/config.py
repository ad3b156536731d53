"""
Configuration for the SQL Playground HTTP API.

Storage and logging settings live in sqlplay.config; this only covers
the web process itself.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """HTTP API configuration."""

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # CORS
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
    )

    model_config = {"env_prefix": "SQLPLAY_"}
