"""
Notes API - Application Configuration
======================================

What:  Centralized configuration management using Pydantic Settings.
       Values are validated once, on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the database layer, the app factory and the health route.

Environment variables:
    SQLITE_DB   Path of the SQLite database file (default: ./database/myapp.db)
    HOST        Bind address for uvicorn (default: 0.0.0.0)
    PORT        Bind port for uvicorn (default: 5001)
    LOG_LEVEL   DEBUG, INFO, WARNING, ERROR or CRITICAL (default: INFO)
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

DEFAULT_DB_PATH = Path("database") / "myapp.db"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local development, so the
    service starts with no environment at all.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Relative paths are resolved against the working directory at load time
    # so /health always reports an absolute location.
    sqlite_db: str = Field(
        default=str(DEFAULT_DB_PATH),
        validate_default=True,
        description="Path of the SQLite database file",
    )

    @field_validator("sqlite_db")
    @classmethod
    def resolve_sqlite_db(cls, v: str) -> str:
        """Expands ~ and makes the database path absolute."""
        if not v.strip():
            raise ValueError("SQLITE_DB must not be empty")
        return str(Path(v.strip()).expanduser().resolve())

    @property
    def database_url(self) -> str:
        """Async SQLAlchemy URL for the configured database file."""
        return f"sqlite+aiosqlite:///{self.sqlite_db}"

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5001, ge=1, le=65535)

    # ── Logging ───────────────────────────────────────────────────────────
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # SQLITE_DB and sqlite_db both work
        "extra": "ignore",
    }


# Singleton instance, imported throughout the application
settings = Settings()
