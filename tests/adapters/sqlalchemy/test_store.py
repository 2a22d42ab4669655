from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine, func, select

from customerhub.adapters.sqlalchemy import (
    SqlAlchemyCustomerStore,
    StartupError,
    configured_engine,
    contact_table,
    is_started,
    shutdown,
    startup,
)
from customerhub.app import CustomerService
from customerhub.config import ImportConfig
from customerhub.domain.model import CustomerType
from customerhub.domain.population import Population
from customerhub.domain.ports import CustomerStore
from tests.helpers.customers import (
    make_address,
    make_contact,
    make_customer,
    make_draft,
    make_population,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def reset_store_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_store_requires_startup() -> None:
    with pytest.raises(StartupError):
        SqlAlchemyCustomerStore()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:", future=True)
    engine_b = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine_a, force=True)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b
    assert is_started()


def test_store_satisfies_port(sqlite_engine: Engine) -> None:
    assert isinstance(SqlAlchemyCustomerStore(sqlite_engine), CustomerStore)


def test_empty_database_returns_default(sqlite_engine: Engine) -> None:
    store = SqlAlchemyCustomerStore(sqlite_engine)
    default = make_population(make_customer())

    assert store.load(default) is default
    assert len(store.load()) == 0


def test_round_trip_preserves_records_and_order(sqlite_engine: Engine) -> None:
    store = SqlAlchemyCustomerStore(sqlite_engine)
    parent = make_draft(
        "Zeta HQ",
        "ACC-2",
        addresses=(
            make_address(street=None, latitude="13.7", longitude="100.5", billing=False),
            make_address(street="9 Bill Rd", primary=False, is_gate_property=True),
        ),
        contacts=(make_contact("Ann Lee", primary=False), make_contact("Bob Ray")),
    ).build()
    child = make_customer("Alpha Branch", "ACC-1", parent=parent)
    population = make_population(parent, child)

    store.save(population)
    loaded = store.load()

    assert list(loaded) == list(population)
    assert loaded.get(child.id).parent_id == parent.id  # type: ignore[union-attr]
    assert loaded.get(child.id).type is CustomerType.DIRECT  # type: ignore[union-attr]
    assert loaded.get(parent.id).created_at == parent.created_at  # type: ignore[union-attr]


def test_save_replaces_previous_contents(sqlite_engine: Engine) -> None:
    store = SqlAlchemyCustomerStore(sqlite_engine)
    first = make_customer("Acme HQ", "ACC-1")
    second = make_customer("Globex", "ACC-2")

    store.save(make_population(first, second))
    store.save(make_population(second))

    assert [c.id for c in store.load()] == [second.id]
    with sqlite_engine.connect() as connection:
        contacts = connection.execute(select(func.count()).select_from(contact_table)).scalar()
    assert contacts == 1


def test_dangling_parent_reference_is_stored(sqlite_engine: Engine) -> None:
    store = SqlAlchemyCustomerStore(sqlite_engine)
    missing_parent = make_customer("Gone", "ACC-0")
    orphan = make_customer("Orphan", "ACC-1", parent=missing_parent)

    store.save(make_population(orphan))

    [loaded] = store.load()
    assert loaded.parent_id == missing_parent.id


def test_started_store_uses_managed_engine(sqlite_store: SqlAlchemyCustomerStore) -> None:
    assert sqlite_store.engine is configured_engine()


def test_saving_an_empty_population_is_not_replaced_by_default(sqlite_engine: Engine) -> None:
    store = SqlAlchemyCustomerStore(sqlite_engine)
    store.save(make_population(make_customer()))

    store.save(Population())

    assert len(SqlAlchemyCustomerStore(sqlite_engine).load(make_population(make_customer()))) == 0


def test_deleted_last_customer_stays_deleted_after_restart(sqlite_engine: Engine) -> None:
    seed = make_customer("Seed", "ACC-1")
    service = CustomerService(
        SqlAlchemyCustomerStore(sqlite_engine),
        default=make_population(seed),
        import_config=ImportConfig(),
    )
    service.delete(seed.id)

    restarted = CustomerService(
        SqlAlchemyCustomerStore(sqlite_engine),
        default=make_population(seed),
        import_config=ImportConfig(),
    )

    assert len(restarted.population) == 0
