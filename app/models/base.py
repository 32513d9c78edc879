"""
Base configurations and mixins for database models.

Provides the declarative base, UUID primary keys, automatic timestamps and
schema-aware foreign key targets so the same models run on PostgreSQL
(optionally inside a dedicated schema) and SQLite.
"""

import uuid

from sqlalchemy import Column, DateTime, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql.functions import now as db_now

from app.config import settings

# Create the base class for all models
Base = declarative_base()


class TimestampMixin:
    """
    Adds database-managed created_at/updated_at columns.
    """

    created_at = Column(
        DateTime(timezone=True),
        server_default=db_now(),
        nullable=False,
        comment="Timestamp when the record was created",
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=db_now(),
        onupdate=db_now(),
        nullable=False,
        comment="Timestamp when the record was last updated",
    )


class UUIDMixin:
    """
    Adds a UUID4 primary key, native UUID on PostgreSQL and CHAR(32) elsewhere.
    """

    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        index=True,
        comment="Primary key using UUID4 format",
    )


SCHEMA_NAME = settings.schema_name


def table_args(*args) -> tuple:
    """Build __table_args__ with the configured schema appended."""
    return (*args, {"schema": SCHEMA_NAME})


def fk_target(table_and_column: str) -> str:
    """Qualify a 'table.column' foreign key target with the configured schema."""
    if SCHEMA_NAME:
        return f"{SCHEMA_NAME}.{table_and_column}"
    return table_and_column


__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "SCHEMA_NAME",
    "table_args",
    "fk_target",
]
