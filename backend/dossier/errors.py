"""Exceptions raised by the persistence layer."""


class DatabaseNotInitializedError(RuntimeError):
    """Engine or session factory requested before init_db()."""

    def __init__(self) -> None:
        super().__init__("Database not initialized. Call init_db() first.")


class DataAccessError(Exception):
    """Base exception for failed repository operations."""

    def __init__(self, message: str, entity: str | None = None):
        super().__init__(message)
        self.entity = entity


class DataIntegrityError(DataAccessError):
    """A storage constraint rejected the write."""

    pass


class InactiveSessionError(DataAccessError):
    """Operation needs an open transactional scope and none is active."""

    pass


class EntityNotFoundError(DataAccessError):
    """No row exists for the requested primary key."""

    def __init__(self, entity: str, entity_id: object):
        super().__init__(f"{entity} with id {entity_id!r} not found", entity=entity)
        self.entity_id = entity_id
