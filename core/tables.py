"""SQLAlchemy Core table definitions for the database schema."""

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
    false,
    func,
)
from sqlalchemy.types import TypeDecorator

from .enums import DEFAULT_CADENCE, cadence_enum


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware timestamp that always round-trips as UTC.

    PostgreSQL keeps the offset natively; SQLite stores naive text, so values
    are normalized to UTC on the way in and tagged as UTC on the way out.
    Range predicates then compare like with like on both backends.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError("Naive datetimes are not accepted, pass an aware datetime")
        value = value.astimezone(timezone.utc)
        if dialect.name == "sqlite":
            return value.replace(tzinfo=None)
        return value

    def process_result_value(self, value: datetime | None, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


# Naming convention for constraints (helps Alembic generate better names)
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}
metadata = MetaData(naming_convention=convention)


# =====================================================
# USERS
# =====================================================
users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("external_id", Text, nullable=False, unique=True),
    Column("destination_id", Text, nullable=False),
    Column(
        "cadence",
        cadence_enum,
        nullable=False,
        server_default=DEFAULT_CADENCE.value,
    ),
    Column("next_due_at", UTCDateTime()),
    Column("is_paused", Boolean, nullable=False, server_default=false()),
    Column("created_at", UTCDateTime(), server_default=func.now()),
    Column("updated_at", UTCDateTime(), server_default=func.now()),
    Index("idx_users_next_due_at", "next_due_at"),
    Index("idx_users_external_id", "external_id"),
)
