"""Database models module."""

from dossier.models.document import Document
from dossier.models.person import Person

__all__ = [
    "Document",
    "Person",
]
