"""
Application Resources

Builds the process-wide resources on startup and releases them on
shutdown:
- Database: engine with its connection pool, sized once from settings
- GeoResolver: the opened GeoIP database
- ClickRecorder: shared by every background click task

Resources live on ``app.state``; nothing here is a module-level global.
"""

import logging
from typing import Optional

from fastapi import FastAPI

from link_analytics.core.setting import settings
from link_analytics.db.session import Database
from link_analytics.services.click_recorder import ClickRecorder
from link_analytics.services.geo_resolver import GeoResolver

logger = logging.getLogger(__name__)


def install_resources(app: FastAPI, database: Database, geo_resolver: GeoResolver) -> None:
    """Attach already-built resources to ``app``."""
    app.state.database = database
    app.state.geo_resolver = geo_resolver
    app.state.click_recorder = ClickRecorder(database, geo_resolver)


async def initialize_resources(
    app: FastAPI,
    database: Optional[Database] = None,
    geo_resolver: Optional[GeoResolver] = None,
) -> None:
    """
    Create the database, geo resolver and click recorder for ``app``.

    Resources that are already installed are kept.
    """
    if getattr(app.state, "database", None) is not None:
        logger.warning("Application resources already initialized")
        return

    database = database or Database(settings.DATABASE_URL)
    geo_resolver = geo_resolver or GeoResolver.from_path(
        settings.GEOIP_DATABASE_PATH,
        timeout=settings.GEO_LOOKUP_TIMEOUT,
    )

    if settings.DATABASE_AUTO_CREATE:
        await database.create_all()

    install_resources(app, database, geo_resolver)
    logger.info(f"Resources initialized: database={database.adapter.get_dialect_name()}")


async def shutdown_resources(app: FastAPI) -> None:
    """Close the GeoIP reader and dispose the connection pool."""
    geo_resolver: Optional[GeoResolver] = getattr(app.state, "geo_resolver", None)
    if geo_resolver is not None:
        geo_resolver.close()

    database: Optional[Database] = getattr(app.state, "database", None)
    if database is not None:
        try:
            await database.dispose()
        except Exception as e:
            logger.warning(f"Failed to dispose database engine: {e}")

    app.state.database = None
    app.state.geo_resolver = None
    app.state.click_recorder = None
    logger.info("Resources released")
