"""Base model utilities for SQLAlchemy."""

from sqlalchemy import Column, Integer


class IdentityMixin:
    """Mixin that adds a database-generated integer primary key."""

    id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Surrogate key assigned by the database on first flush"
    )


class EntityMixin(IdentityMixin):
    """
    Identity-based equality for mapped entities.

    Two instances are equal when they are of the same class and share a
    generated id. Instances without an id are only equal to themselves.
    The hash depends on the class alone so it stays stable when the id is
    assigned while the instance already sits in a set. The cost is that all
    instances of a class share one hash bucket, so set membership checks
    are linear in the set size. Fine for a person's handful of documents,
    not for sets of thousands of rows.
    """

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if type(other) is not type(self):
            return NotImplemented
        return self.id is not None and self.id == other.id

    def __hash__(self) -> int:
        return hash(type(self).__name__)
