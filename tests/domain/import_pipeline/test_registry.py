from __future__ import annotations

from uuid import UUID

from customerhub.domain.import_pipeline import group_rows, register_parent_names
from tests.helpers.customers import make_customer, make_row


def _ids(*values: int):
    iterator = iter(UUID(int=value) for value in values)
    return lambda: next(iterator)


def test_registry_contains_existing_and_in_batch_parents() -> None:
    stored_parent = make_customer("Stored Parent", "ACC-0")
    stored_child = make_customer("Stored Child", "ACC-9", parent=stored_parent)
    groups = group_rows(
        [
            make_row(2, "Branch", "ACC-2", parent="Acme HQ"),
            make_row(3, "Acme HQ", "ACC-1"),
        ]
    )

    registry = register_parent_names(
        groups, [stored_parent, stored_child], id_factory=_ids(101)
    )

    assert registry.resolve("stored parent") == stored_parent.id
    assert registry.resolve("ACME HQ") == UUID(int=101)
    assert registry.resolve("Stored Child") is None
    assert registry.id_for(groups[1]) == UUID(int=101)
    assert registry.id_for(groups[0]) is None
    assert registry.is_batch_parent(UUID(int=101))


def test_in_batch_parent_shadows_existing_name() -> None:
    stored_parent = make_customer("Acme HQ", "ACC-0")
    groups = group_rows([make_row(2, "acme hq", "ACC-1")])

    registry = register_parent_names(groups, [stored_parent], id_factory=_ids(7))

    assert registry.resolve("Acme HQ") == UUID(int=7)


def test_parent_without_name_gets_an_id_but_no_name() -> None:
    groups = group_rows([make_row(2, "", "ACC-1")])

    registry = register_parent_names(groups, [], id_factory=_ids(5))

    assert registry.id_for(groups[0]) == UUID(int=5)
    assert dict(registry.names) == {}
