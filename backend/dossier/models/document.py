"""Document database model."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from dossier.database.base import Base
from dossier.models.base import EntityMixin


class Document(Base, EntityMixin):
    """Identity document, optionally held by a person."""

    __tablename__ = "documents"

    code = Column(String(64), nullable=False)

    # Owning side of the person relationship
    person_id = Column(
        Integer,
        ForeignKey("persons.id"),
        nullable=True,
        index=True,
    )

    # Loaded together with the document row
    person = relationship(
        "Person",
        back_populates="documents",
        lazy="joined",
    )

    def __init__(self, **kwargs):
        if "person_id" not in kwargs:
            kwargs.setdefault("person", None)
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return f"<Document {self.id} {self.code!r}>"
