"""
Database Session Management with Connection Pooling

This module owns the async engine and session factory.

Key Features:
- Database abstraction: SQLite or PostgreSQL picked from the URL
- Connection pooling: Configured per database type by the adapter
- One Database object per process, created at startup and kept on
  app.state; components receive it explicitly
- Error handling: Automatic rollback on exceptions
"""

from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from link_analytics.db.adapters import get_database_adapter
from link_analytics.db.interface import DatabaseAdapter


class Database:
    """
    Engine plus session factory for one database.

    Request handlers get sessions through get_session(); background click
    recording opens its own sessions from the same pool because the request
    session is closed once the response is sent.
    """

    def __init__(self, database_url: str, adapter: Optional[DatabaseAdapter] = None, **engine_kwargs):
        self.database_url = database_url
        self.adapter = adapter or get_database_adapter(database_url)
        self.engine = self.adapter.create_engine(database_url, **engine_kwargs)
        self.session_maker = async_sessionmaker(
            self.engine,
            class_=SQLModelAsyncSession,
            expire_on_commit=False,  # Loaded rows stay usable after commit
            autoflush=False,
        )

    def session(self) -> AsyncSession:
        """Open a new session; use as ``async with database.session() as session``."""
        return self.session_maker()

    async def create_all(self) -> None:
        """Create missing tables (development and tests; production uses Alembic)."""
        # Registers the table classes on SQLModel.metadata
        from link_analytics.db import models  # noqa: F401

        async with self.engine.begin() as connection:
            await connection.run_sync(SQLModel.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency function for FastAPI to get database session.

    This function:
    - Creates a new async session from the application's pool
    - Yields it to the endpoint
    - Commits on success, rolls back on exception
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
