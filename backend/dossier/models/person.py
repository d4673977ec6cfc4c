"""Person database model."""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from dossier.database.base import Base
from dossier.models.base import EntityMixin


class Person(Base, EntityMixin):
    """A person owning zero or more documents."""

    __tablename__ = "persons"

    name = Column(String(255), nullable=False)

    # Inverse side, loaded on first access while the session is open
    documents = relationship(
        "Document",
        back_populates="person",
        collection_class=set,
        lazy="select",
    )

    def __init__(self, **kwargs):
        kwargs.setdefault("documents", set())
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return f"<Person {self.id} {self.name!r}>"
