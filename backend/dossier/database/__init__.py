"""
Database module initialization.
Exports database components for use throughout the application.
"""

from dossier.database.base import Base
from dossier.database.connection import (
    init_db,
    close_db,
    get_engine,
    get_session_factory,
    check_db_connection,
    get_db_info,
)
from dossier.database.schema import create_schema, drop_schema
from dossier.database.session import (
    current_session,
    get_db_context,
    require_active_session,
    transactional,
)

__all__ = [
    # Connection management
    "init_db",
    "close_db",
    "get_engine",
    "get_session_factory",
    # Sessions and scopes
    "get_db_context",
    "transactional",
    "current_session",
    "require_active_session",
    # Schema
    "Base",
    "create_schema",
    "drop_schema",
    # Utilities
    "check_db_connection",
    "get_db_info",
]
