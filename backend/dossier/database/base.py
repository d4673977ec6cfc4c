"""
Declarative base and engine construction.

This module provides:
- Base: declarative base shared by all mapped classes
- create_engine_from_settings(): engine factory honouring pool settings
- create_session_factory(): sessionmaker bound to an engine
"""

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker

from dossier.config import Settings

Base = declarative_base()


def create_engine_from_settings(settings: Settings) -> Engine:
    """Create a SQLAlchemy engine for the configured database."""
    url = make_url(settings.database_url)

    if url.get_backend_name() == "sqlite":
        # File or memory databases have no server-side pool to size
        engine = create_engine(
            url,
            echo=settings.db_echo,
            connect_args={"check_same_thread": False},
        )
        enable_sqlite_foreign_keys(engine)
        return engine

    return create_engine(
        url,
        echo=settings.db_echo,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        pool_recycle=3600,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create the session factory used by repositories and scopes."""
    return sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """Turn on foreign key enforcement for every new SQLite connection."""

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
