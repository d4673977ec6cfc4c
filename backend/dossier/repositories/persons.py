"""
PersonRepository

Operations for the 'persons' table.

Specialized Methods:
- find_all_by_name(name): Persons with an exact name
- load_documents(person): Resolve the lazy documents collection inside
  the active transactional scope
"""

import logging

from sqlalchemy import inspect, select
from sqlalchemy.orm.attributes import set_committed_value

from dossier.database.session import require_active_session
from dossier.errors import EntityNotFoundError
from dossier.models import Document, Person
from dossier.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class PersonRepository(BaseRepository[Person]):
    model = Person

    def find_all_by_name(self, name: str) -> list[Person]:
        """Get all persons with exactly this name."""
        with self._session() as session:
            result = session.execute(
                select(Person).where(Person.name == name).order_by(Person.id)
            )
            return list(result.scalars().all())

    def load_documents(self, person: Person) -> set[Document]:
        """
        Return the person's documents, loading them if needed.

        Requires an open transactional() scope; raises InactiveSessionError
        otherwise instead of deferring the failure to attribute access.
        """
        session = require_active_session()
        with self._session():
            if person.id is not None and person not in session:
                stored = session.get(Person, person.id)
                if stored is None:
                    raise EntityNotFoundError(self.entity_name, person.id)
                person = stored
            documents = set(person.documents)
            # The collection load may skip the many-to-one side; fill it in
            for document in documents:
                if "person" in inspect(document).unloaded:
                    set_committed_value(document, "person", person)
        logger.debug(f"Loaded {len(documents)} documents for {person!r}")
        return documents
