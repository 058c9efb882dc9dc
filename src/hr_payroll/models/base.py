"""Declarative base and column types shared by the payroll tables."""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import DateTime, MetaData, Numeric, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Currency amounts, stored to the cent
Money = Numeric(14, 2)

NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)
    type_annotation_map = {
        UUID: Uuid(as_uuid=True),
        datetime: DateTime(timezone=True),
    }


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    """Row creation time.

    Stamped per row at insert rather than by ``now()``, which PostgreSQL
    freezes at transaction start; rows added in one transaction still order
    by insertion.
    """

    created_at: Mapped[datetime] = mapped_column(default=utc_now, server_default=func.now())
