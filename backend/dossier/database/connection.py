"""
Database engine lifecycle and health checks.

This module provides:
- Engine and session factory initialization
- Health check utilities
"""

import logging
from typing import Optional

from sqlalchemy import Engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from dossier.config import Settings, get_settings
from dossier.database.base import create_engine_from_settings, create_session_factory
from dossier.errors import DatabaseNotInitializedError

logger = logging.getLogger(__name__)

# Global engine and session factory, created by init_db()
_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None
_settings: Optional[Settings] = None


def init_db(settings: Optional[Settings] = None) -> Engine:
    """
    Initialize the engine and session factory.

    Calling it again while initialized returns the existing engine.
    """
    global _engine, _session_factory, _settings

    if _engine is not None:
        return _engine

    _settings = settings or get_settings()
    _engine = create_engine_from_settings(_settings)
    _session_factory = create_session_factory(_engine)

    logger.info(f"Database engine created for {_sanitize_database_url(_settings.database_url)}")
    return _engine


def close_db() -> None:
    """
    Dispose of the engine and forget the session factory.
    """
    global _engine, _session_factory, _settings
    if _engine is not None:
        _engine.dispose()
        logger.info("Database engine disposed")
    _engine = None
    _session_factory = None
    _settings = None


def get_engine() -> Engine:
    """
    Get the engine instance.
    """
    if _engine is None:
        raise DatabaseNotInitializedError()
    return _engine


def get_session_factory() -> sessionmaker:
    """
    Get the session factory.
    """
    if _session_factory is None:
        raise DatabaseNotInitializedError()
    return _session_factory


def check_db_connection() -> bool:
    """
    Check if the database connection is healthy.
    """
    if _engine is None:
        return False

    try:
        with _engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.warning(f"Database health check failed: {e}")
        return False


def get_db_info() -> dict:
    """
    Get database connection information and status.
    """
    settings = _settings or get_settings()
    # Sanitize URL to hide credentials
    sanitized_url = _sanitize_database_url(settings.database_url)

    return {
        "status": "connected" if _engine is not None else "disconnected",
        "url": sanitized_url,
        "database": _database_name(settings.database_url),
        "environment": settings.environment,
    }


def _sanitize_database_url(url: str) -> str:
    """
    Hide password in a database URL for safe logging.
    """
    try:
        return make_url(url).render_as_string(hide_password=True)
    except ArgumentError:
        # Unparseable URLs may still carry credentials
        return "***"


def _database_name(url: str) -> Optional[str]:
    """
    Database name (or SQLite file path) from a database URL.
    """
    try:
        return make_url(url).database
    except ArgumentError:
        return None
