"""SQLAlchemy-backed customer store with whole-population save semantics."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Any, TypeVar

from sqlalchemy import create_engine, delete, insert, select

from customerhub.adapters.sqlalchemy.mappings import (
    address_table,
    contact_table,
    create_all_tables,
    customer_table,
    store_state_table,
)
from customerhub.config import get_database_config
from customerhub.domain.model import Address, Contact, Customer, CustomerType, utcnow
from customerhub.domain.population import Population

if TYPE_CHECKING:
    from collections.abc import Callable
    from uuid import UUID

    from sqlalchemy import Table
    from sqlalchemy.engine import Connection, Engine, RowMapping


log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the SQLAlchemy store is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    engine: Engine | None = None


_STATE = _AdapterState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> Engine:
    """Initialise the SQLAlchemy engine and create the tables."""

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )

    resolved_engine = engine or create_engine(
        database_uri or get_database_config().uri, future=True
    )
    create_all_tables(resolved_engine)
    _STATE.engine = resolved_engine
    return resolved_engine


def configured_engine() -> Engine | None:
    """Return the engine currently managed by the adapter (if any)."""

    return _STATE.engine


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None


class SqlAlchemyCustomerStore:
    """Persist the population as three tables, replacing every row on save."""

    def __init__(self, engine: Engine | None = None) -> None:
        resolved = engine or _STATE.engine
        if resolved is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised. Call customerhub.adapters.sqlalchemy."
                "store.startup() or pass an engine."
            )
        self.engine = resolved

    def load(self, default: Population | None = None) -> Population:
        with self.engine.connect() as connection:
            customer_rows = connection.execute(
                select(customer_table).order_by(customer_table.c.position)
            ).mappings().all()
            if not customer_rows and not _has_been_saved(connection):
                return default if default is not None else Population()
            addresses = _children_by_customer(connection, address_table, _address_from_row)
            contacts = _children_by_customer(connection, contact_table, _contact_from_row)

        customers = [
            Customer(
                id=row["id"],
                created_at=row["created_at"],
                type=CustomerType(row["type"]),
                name=row["name"],
                account_number=row["account_number"],
                is_vip=row["is_vip"],
                addresses=tuple(addresses.get(row["id"], ())),
                parent_id=row["parent_id"],
                contacts=tuple(contacts.get(row["id"], ())),
            )
            for row in customer_rows
        ]
        log.debug("Loaded %d customers", len(customers))
        return Population.of(customers)

    def save(self, population: Population) -> None:
        customer_values: list[dict[str, Any]] = []
        address_values: list[dict[str, Any]] = []
        contact_values: list[dict[str, Any]] = []
        for position, customer in enumerate(population):
            customer_values.append(
                {
                    "id": customer.id,
                    "position": position,
                    "type": customer.type,
                    "name": customer.name,
                    "account_number": customer.account_number,
                    "is_vip": customer.is_vip,
                    "parent_id": customer.parent_id,
                    "created_at": customer.created_at,
                }
            )
            address_values.extend(
                {
                    "id": address.id,
                    "customer_id": customer.id,
                    "position": index,
                    "street": address.street,
                    "latitude": address.latitude,
                    "longitude": address.longitude,
                    "city": address.city,
                    "state": address.state,
                    "zip_code": address.zip_code,
                    "is_primary": address.is_primary,
                    "is_billing": address.is_billing,
                    "is_gate_property": address.is_gate_property,
                }
                for index, address in enumerate(customer.addresses)
            )
            contact_values.extend(
                {
                    "id": contact.id,
                    "customer_id": customer.id,
                    "position": index,
                    "name": contact.name,
                    "email": contact.email,
                    "phone": contact.phone,
                    "is_primary": contact.is_primary,
                }
                for index, contact in enumerate(customer.contacts)
            )

        with self.engine.begin() as connection:
            connection.execute(delete(contact_table))
            connection.execute(delete(address_table))
            connection.execute(delete(customer_table))
            connection.execute(delete(store_state_table))
            connection.execute(insert(store_state_table), [{"id": 1, "saved_at": utcnow()}])
            if customer_values:
                connection.execute(insert(customer_table), customer_values)
            if address_values:
                connection.execute(insert(address_table), address_values)
            if contact_values:
                connection.execute(insert(contact_table), contact_values)
        log.debug("Saved %d customers", len(customer_values))


def _has_been_saved(connection: Connection) -> bool:
    return connection.execute(select(store_state_table.c.id)).first() is not None


T = TypeVar("T")


def _children_by_customer(
    connection: Connection,
    table: Table,
    build: Callable[[RowMapping], T],
) -> dict[UUID, list[T]]:
    grouped: defaultdict[UUID, list[T]] = defaultdict(list)
    rows = connection.execute(
        select(table).order_by(table.c.customer_id, table.c.position)
    ).mappings()
    for row in rows:
        grouped[row["customer_id"]].append(build(row))
    return grouped


def _address_from_row(row: RowMapping) -> Address:
    return Address(
        id=row["id"],
        street=row["street"],
        latitude=row["latitude"],
        longitude=row["longitude"],
        city=row["city"],
        state=row["state"],
        zip_code=row["zip_code"],
        is_primary=row["is_primary"],
        is_billing=row["is_billing"],
        is_gate_property=row["is_gate_property"],
    )


def _contact_from_row(row: RowMapping) -> Contact:
    return Contact(
        id=row["id"],
        name=row["name"],
        email=row["email"],
        phone=row["phone"],
        is_primary=row["is_primary"],
    )
