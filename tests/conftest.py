from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002

from customerhub.adapters.sqlalchemy import create_all_tables, shutdown, startup
from customerhub.adapters.sqlalchemy.store import SqlAlchemyCustomerStore

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_store(sqlite_engine: Engine) -> Iterator[SqlAlchemyCustomerStore]:
    startup(engine=sqlite_engine, force=True)
    try:
        yield SqlAlchemyCustomerStore()
    finally:
        shutdown()
