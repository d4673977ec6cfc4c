"""
Database session context managers.

Two lifetimes are supported:
- get_db_context(): a plain session for scripts, closed on exit
- transactional(): a caller-bounded scope whose session is shared by every
  repository call made inside it, so lazy associations stay loadable
  until the scope exits
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Generator, Optional

from sqlalchemy.orm import Session, sessionmaker

from dossier.database.connection import get_session_factory
from dossier.errors import InactiveSessionError

logger = logging.getLogger(__name__)

_current_session: ContextVar[Optional[Session]] = ContextVar(
    "dossier_current_session", default=None
)


@contextmanager
def get_db_context(
    session_factory: Optional[sessionmaker] = None,
) -> Generator[Session, None, None]:
    """
    Context manager for database sessions in scripts.

    Usage:
        with get_db_context() as db:
            person = db.get(Person, 1)
            person.name = "Jane Doe"
            db.commit()

    Yields:
        Session: SQLAlchemy database session

    Ensures:
        - Session is properly closed even on exceptions
        - Connection is returned to pool
        - Rollback on error
    """
    factory = session_factory or get_session_factory()
    db = factory()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def transactional(
    session_factory: Optional[sessionmaker] = None,
    rollback_only: bool = False,
) -> Generator[Session, None, None]:
    """
    Open a transactional scope bound to the current context.

    Repository calls made inside the block share its session. The session
    commits on normal exit (or rolls back when rollback_only is set), rolls
    back on exception, and is closed on every path. A nested call joins the
    outer scope instead of opening a second one.

    Usage:
        with transactional():
            person = persons.find_by_id(person_id)
            codes = {d.code for d in person.documents}
    """
    existing = _current_session.get()
    if existing is not None:
        yield existing
        return

    factory = session_factory or get_session_factory()
    session = factory()
    token = _current_session.set(session)
    try:
        yield session
        if rollback_only:
            session.rollback()
        else:
            session.commit()
    except Exception:
        logger.debug("Rolling back transactional scope after error")
        session.rollback()
        raise
    finally:
        _current_session.reset(token)
        session.close()


def current_session() -> Optional[Session]:
    """Return the session of the active transactional scope, if any."""
    return _current_session.get()


def require_active_session() -> Session:
    """Return the active scope's session or fail fast without one."""
    session = _current_session.get()
    if session is None:
        raise InactiveSessionError(
            "No active transactional scope; wrap the call in transactional()"
        )
    return session
