"""SQLAlchemy table metadata for the customer population."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    TypeDecorator,
    Uuid,
)

from customerhub.domain.model import CustomerType

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

# parent_id is deliberately not a foreign key: imported children may reference a
# parent that is not stored.
customer_table = Table(
    "customer",
    metadata,
    Column("id", UUIDColumnType, primary_key=True),
    Column("position", Integer, nullable=False),
    Column("type", Enum(CustomerType, native_enum=False), nullable=False),
    Column("name", String, nullable=False),
    Column("account_number", String, nullable=False, index=True),
    Column("is_vip", Boolean, nullable=False, default=False),
    Column("parent_id", UUIDColumnType, nullable=True, index=True),
    Column("created_at", UTCDateTime(), nullable=False),
)

address_table = Table(
    "customer_address",
    metadata,
    Column("id", UUIDColumnType, primary_key=True),
    Column(
        "customer_id",
        UUIDColumnType,
        ForeignKey("customer.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("position", Integer, nullable=False),
    Column("street", String, nullable=True),
    Column("latitude", String, nullable=True),
    Column("longitude", String, nullable=True),
    Column("city", String, nullable=False),
    Column("state", String, nullable=False),
    Column("zip_code", String, nullable=False),
    Column("is_primary", Boolean, nullable=False),
    Column("is_billing", Boolean, nullable=False),
    Column("is_gate_property", Boolean, nullable=False),
)

contact_table = Table(
    "customer_contact",
    metadata,
    Column("id", UUIDColumnType, primary_key=True),
    Column(
        "customer_id",
        UUIDColumnType,
        ForeignKey("customer.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("position", Integer, nullable=False),
    Column("name", String, nullable=False),
    Column("email", String, nullable=False),
    Column("phone", String, nullable=False),
    Column("is_primary", Boolean, nullable=False),
)

# One row, written by every save; its absence means nothing was ever stored.
store_state_table = Table(
    "store_state",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("saved_at", UTCDateTime(), nullable=False),
)


def create_all_tables(engine: Engine) -> None:
    metadata.create_all(engine)
