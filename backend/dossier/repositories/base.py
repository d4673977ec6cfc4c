"""
BaseRepository

Common CRUD operations for a mapped class.

Methods:
- save(entity) -> entity: Insert or update, id populated on return
- save_all(entities) -> list: Save every entity in one unit of work
- find_by_id(id) -> Optional[entity]
- find_all() / find_all_by_id(ids) -> list
- exists_by_id(id) -> bool, count() -> int
- delete(entity), delete_by_id(id)

Every call runs in the active transactional() scope when there is one,
otherwise in its own session that is committed and closed before the call
returns. SQLAlchemy errors are translated into dossier.errors exceptions.
Subclasses set `model` and add specialized queries.
"""

import logging
from contextlib import contextmanager
from typing import Any, Generator, Generic, Iterable, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from dossier.database.session import current_session, get_db_context
from dossier.errors import DataAccessError, DataIntegrityError, EntityNotFoundError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """Generic repository bound to one mapped class."""

    model: Type[T]

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        """
        Args:
            session_factory: Factory for per-call sessions. Defaults to the
                factory created by init_db().
        """
        self._session_factory = session_factory

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    @contextmanager
    def _session(self) -> Generator[Session, None, None]:
        """Yield the scope's session, or a per-call session committed on exit."""
        try:
            session = current_session()
            if session is not None:
                yield session
                return

            with get_db_context(self._session_factory) as session:
                yield session
                session.commit()
        except IntegrityError as e:
            logger.warning(f"{self.entity_name} constraint violation: {e.orig}")
            raise DataIntegrityError(str(e.orig), entity=self.entity_name) from e
        except DataAccessError:
            raise
        except SQLAlchemyError as e:
            logger.error(f"{self.entity_name} data access failed: {e}")
            raise DataAccessError(str(e), entity=self.entity_name) from e

    def save(self, entity: T) -> T:
        """Persist the entity and return it with its generated id."""
        with self._session() as session:
            session.add(entity)
            session.flush()
        logger.debug(f"Saved {entity!r}")
        return entity

    def save_all(self, entities: Iterable[T]) -> list[T]:
        """Persist all entities, or none of them if any write fails."""
        entities = list(entities)
        with self._session() as session:
            session.add_all(entities)
            session.flush()
        logger.debug(f"Saved {len(entities)} {self.entity_name} rows")
        return entities

    def find_by_id(self, entity_id: Any) -> Optional[T]:
        """Return the entity with this primary key, or None."""
        with self._session() as session:
            return session.get(self.model, entity_id)

    def find_all(self) -> list[T]:
        with self._session() as session:
            result = session.execute(select(self.model).order_by(self.model.id))
            return list(result.scalars().all())

    def find_all_by_id(self, ids: Iterable[Any]) -> list[T]:
        """Return the entities found for the given ids; unknown ids are skipped."""
        ids = list(ids)
        if not ids:
            return []
        with self._session() as session:
            result = session.execute(
                select(self.model)
                .where(self.model.id.in_(ids))
                .order_by(self.model.id)
            )
            return list(result.scalars().all())

    def exists_by_id(self, entity_id: Any) -> bool:
        with self._session() as session:
            result = session.execute(
                select(self.model.id).where(self.model.id == entity_id)
            )
            return result.first() is not None

    def count(self) -> int:
        with self._session() as session:
            return session.execute(
                select(func.count()).select_from(self.model)
            ).scalar_one()

    def delete(self, entity: T) -> None:
        """Delete a persisted entity. Entities without a stored row are ignored."""
        if entity.id is None:
            return
        with self._session() as session:
            stored = session.get(self.model, entity.id)
            if stored is None:
                return
            session.delete(stored)
            session.flush()
        logger.info(f"Deleted {entity!r}")

    def delete_by_id(self, entity_id: Any) -> None:
        """Delete the entity with this id, failing if it does not exist."""
        with self._session() as session:
            entity = session.get(self.model, entity_id)
            if entity is None:
                raise EntityNotFoundError(self.entity_name, entity_id)
            session.delete(entity)
            session.flush()
        logger.info(f"Deleted {self.entity_name} {entity_id}")
