"""
Repository Pattern

Database abstraction layer providing:
- Testability with a swappable session factory
- Centralized query logic
- Transaction management in one place

Repositories:
- BaseRepository: Common CRUD operations
- PersonRepository: Person queries and lazy document resolution
- DocumentRepository: Document queries by owning person
"""

from dossier.repositories.base import BaseRepository
from dossier.repositories.documents import DocumentRepository
from dossier.repositories.persons import PersonRepository

__all__ = [
    "BaseRepository",
    "DocumentRepository",
    "PersonRepository",
]
