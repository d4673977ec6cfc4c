"""
DocumentRepository

Operations for the 'documents' table.

Specialized Methods:
- find_all_by_person_id(person_id): All documents held by a person
- find_all_by_code(code): Documents carrying a code
"""

from sqlalchemy import select

from dossier.models import Document
from dossier.repositories.base import BaseRepository


class DocumentRepository(BaseRepository[Document]):
    model = Document

    def find_all_by_person_id(self, person_id: int) -> set[Document]:
        """Get every document whose person foreign key matches."""
        with self._session() as session:
            result = session.execute(
                select(Document).where(Document.person_id == person_id)
            )
            return set(result.scalars().all())

    def find_all_by_code(self, code: str) -> list[Document]:
        with self._session() as session:
            result = session.execute(
                select(Document).where(Document.code == code).order_by(Document.id)
            )
            return list(result.scalars().all())
