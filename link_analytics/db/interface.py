"""
Database Adapter Interface

One adapter per backend. The adapter decides pooling, driver connect
arguments and per-connection setup; Database and the services never branch
on the backend themselves.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import Pool


class DatabaseAdapter(ABC):
    """
    Builds the async engine for one database backend.

    Subclasses describe the backend through the getters below;
    create_engine() combines them. Backends that need per-connection
    setup override configure_engine().
    """

    def create_engine(self, database_url: str, **kwargs) -> AsyncEngine:
        """
        Create the async engine for ``database_url``.

        Keyword arguments override the adapter's engine defaults.
        """
        engine_kwargs = self.get_engine_kwargs()
        engine_kwargs.update(kwargs)

        pool_class = self.get_pool_class()
        if pool_class is not None:
            engine_kwargs["poolclass"] = pool_class

        engine = create_async_engine(
            database_url,
            connect_args=self.get_connect_args(),
            **engine_kwargs
        )
        self.configure_engine(engine)
        return engine

    def configure_engine(self, engine: AsyncEngine) -> None:
        """Hook for event listeners on a freshly created engine."""

    @abstractmethod
    def get_pool_class(self) -> Optional[type[Pool]]:
        """Pool class, or None for the dialect default."""

    @abstractmethod
    def get_connect_args(self) -> dict[str, Any]:
        """Arguments passed to the DBAPI connect() call."""

    @abstractmethod
    def get_engine_kwargs(self) -> dict[str, Any]:
        """Default create_async_engine() options."""

    @abstractmethod
    def get_dialect_name(self) -> str:
        """Dialect name, e.g. 'sqlite' or 'postgresql'."""
