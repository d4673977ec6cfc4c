"""
Schema creation with optional uniqueness constraints.

Tables:
- persons: id, name
- documents: id, code, person_id (nullable FK to persons.id, indexed)

Unique indexes (off by default, enabled through SchemaConfig):
- uq_persons_name on persons.name
- uq_documents_code on documents.code

The unique indexes are built on detached copies of the tables instead of
Base.metadata, so enabling them for one engine never leaks into another.
"""

import logging
from typing import Optional

from sqlalchemy import Engine, Index, MetaData

from dossier.config import SchemaConfig
from dossier.database.base import Base

logger = logging.getLogger(__name__)

UNIQUE_INDEXES = {
    "unique_person_name": ("uq_persons_name", "persons", "name"),
    "unique_document_code": ("uq_documents_code", "documents", "code"),
}


def _unique_index(index_name: str, table_name: str, column_name: str) -> Index:
    """Unique index bound to a throwaway copy of a mapped table."""
    table = Base.metadata.tables[table_name].to_metadata(MetaData())
    return Index(index_name, table.c[column_name], unique=True)


def create_schema(engine: Engine, schema_config: Optional[SchemaConfig] = None) -> None:
    """Create all tables, then any configured unique indexes."""
    schema_config = schema_config or SchemaConfig()

    # Registers the mapped tables on Base.metadata
    import dossier.models  # noqa: F401

    Base.metadata.create_all(engine)

    for flag, (index_name, table_name, column_name) in UNIQUE_INDEXES.items():
        if not getattr(schema_config, flag):
            continue
        _unique_index(index_name, table_name, column_name).create(engine, checkfirst=True)
        logger.info(f"Created unique index {index_name}")

    logger.info(f"Schema ready: {', '.join(sorted(Base.metadata.tables))}")


def drop_schema(engine: Engine) -> None:
    """Drop every mapped table along with its indexes."""
    import dossier.models  # noqa: F401

    Base.metadata.drop_all(engine)
    logger.info("Schema dropped")
