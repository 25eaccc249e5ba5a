"""
Notes API - Database Session Management
========================================

What:  Async SQLAlchemy engine, session factory, FastAPI dependency and
       schema bootstrap for the SQLite store.
How:   One engine is created at module import and shared by every request
       for the life of the process. Each request checks out its own session;
       the session dependency rolls back on error.
Who:   Used by route handlers via FastAPI's dependency injection system and by
       the application lifespan (bootstrap and disposal).

Architecture Decision:
    We use async SQLAlchemy with the aiosqlite driver so that a statement in
    flight suspends only the request that issued it, not the event loop.
    SQLite itself serializes conflicting writes; no locking happens here.
"""

import logging
from pathlib import Path
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from notes_api.config import settings

logger = logging.getLogger(__name__)


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(
    settings.database_url,
    # Echo SQL queries in DEBUG mode for development visibility
    echo=settings.log_level == "DEBUG",
)


@event.listens_for(engine.sync_engine, "connect")
def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    """Turns on SQLite foreign key enforcement for every new connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: rows read back after a commit stay usable
# outside the session without triggering another query.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Its metadata is what `init_schema()` creates at startup.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits anything the handler left pending
        4. On error: rolls back and re-raises for the global error handlers
        5. Always: closes the session (returns the connection to the pool)

    NoteService commits its own writes before reading them back, so the
    commit here is normally a no-op.

    Example usage in a route:
        @router.get("/notes")
        async def list_notes(db: AsyncSession = Depends(get_db_session)):
            return await note_service.list_notes(db)
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def init_schema() -> None:
    """
    Create the notes table and its index if they do not exist yet.

    When:  Once, during application startup (lifespan handler).
    How:   Ensures the database directory exists, then runs
           `Base.metadata.create_all`, which issues CREATE ... IF NOT EXISTS
           semantics (existing tables are left untouched).
    """
    # Register the models on Base.metadata before creating tables
    from notes_api.models.note import Note  # noqa: F401

    Path(settings.sqlite_db).parent.mkdir(parents=True, exist_ok=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Schema ready in SQLite DB at: %s", settings.sqlite_db)


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
