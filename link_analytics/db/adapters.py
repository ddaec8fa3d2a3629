"""
Database Adapters

Implementations of the DatabaseAdapter interface for SQLite (local
development and tests) and PostgreSQL (production).

SQLite:
- File-based, single writer at a time
- Foreign keys and WAL journaling switched on per connection
- Busy timeout so concurrent click inserts wait instead of failing

PostgreSQL:
- asyncpg driver with a sized QueuePool
- Per-statement timeout so a stuck query cannot pin a background task
"""

from typing import Any, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.pool import NullPool, Pool

from link_analytics.core.setting import settings
from link_analytics.db.interface import DatabaseAdapter


class SQLiteAdapter(DatabaseAdapter):
    """
    SQLite database adapter implementation.

    SQLite uses file-based storage and has different characteristics than
    server-based databases like PostgreSQL.
    """

    def __init__(self, busy_timeout: float = 30.0):
        self.busy_timeout = busy_timeout

    def configure_engine(self, engine: AsyncEngine) -> None:
        @event.listens_for(engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

    def get_pool_class(self) -> type[NullPool]:
        """
        SQLite uses NullPool: a file-based database doesn't benefit from
        connection pooling and handles one writer at a time.
        """
        return NullPool

    def get_connect_args(self) -> dict[str, Any]:
        return {
            "check_same_thread": False,
            "timeout": self.busy_timeout,
        }

    def get_engine_kwargs(self) -> dict[str, Any]:
        return {
            "echo": False  # Set to True only for SQL debugging in development
        }

    def get_dialect_name(self) -> str:
        return "sqlite"


class PostgreSQLAdapter(DatabaseAdapter):
    """
    PostgreSQL database adapter implementation (asyncpg driver).

    The pool is sized once from settings and shared by request handlers and
    background click recording.
    """

    def __init__(
        self,
        pool_size: int = settings.DB_POOL_SIZE,
        max_overflow: int = settings.DB_MAX_OVERFLOW,
        pool_timeout: float = settings.DB_POOL_TIMEOUT,
        command_timeout: float = settings.DB_COMMAND_TIMEOUT,
    ):
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.pool_timeout = pool_timeout
        self.command_timeout = command_timeout

    def get_pool_class(self) -> Optional[type[Pool]]:
        # Dialect default (AsyncAdaptedQueuePool)
        return None

    def get_connect_args(self) -> dict[str, Any]:
        return {
            "timeout": self.pool_timeout,
            "command_timeout": self.command_timeout,
        }

    def get_engine_kwargs(self) -> dict[str, Any]:
        return {
            "echo": False,
            "pool_size": self.pool_size,
            "max_overflow": self.max_overflow,
            "pool_timeout": self.pool_timeout,
            "pool_pre_ping": True,
        }

    def get_dialect_name(self) -> str:
        return "postgresql"


def get_database_adapter(database_url: str) -> DatabaseAdapter:
    """
    Factory function to get the database adapter for a connection string.

    Returns:
        DatabaseAdapter instance

    Raises:
        ValueError: If the URL scheme is not supported
    """
    scheme = database_url.split(":", 1)[0]
    if scheme.startswith("sqlite"):
        return SQLiteAdapter()
    if scheme.startswith("postgresql"):
        return PostgreSQLAdapter()
    raise ValueError(f"Unsupported database URL scheme: {scheme}")
