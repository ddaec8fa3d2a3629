"""
Database module with abstraction layer.

This module provides:
- DatabaseAdapter interface with SQLite and PostgreSQL implementations
- Database: engine and session factory owned by the application
- get_session: FastAPI dependency yielding a request-scoped session
"""

from link_analytics.db.interface import DatabaseAdapter
from link_analytics.db.session import Database, get_session

__all__ = [
    "Database",
    "DatabaseAdapter",
    "get_session",
]
