"""SQLAlchemy adapter package for customerhub."""

from __future__ import annotations

from .mappings import (
    address_table,
    contact_table,
    create_all_tables,
    customer_table,
    metadata,
    store_state_table,
)
from .store import (
    SqlAlchemyCustomerStore,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyCustomerStore",
    "StartupError",
    "address_table",
    "configured_engine",
    "contact_table",
    "create_all_tables",
    "customer_table",
    "is_started",
    "metadata",
    "shutdown",
    "startup",
    "store_state_table",
]
