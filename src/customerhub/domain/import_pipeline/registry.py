"""Parent name registration, the first phase of import resolution.

Every PARENT group receives its id before any parent reference is resolved, so a
DIRECT row may name a parent that appears later in the same file.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from customerhub.domain.model import CustomerType, new_id

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from uuid import UUID

    from customerhub.domain.import_pipeline.rows import RowGroup
    from customerhub.domain.model import Customer


def _name_key(name: str) -> str:
    return name.strip().lower()


@dataclass(frozen=True, slots=True)
class ParentRegistry:
    """Frozen lookup tables produced by ``register_parent_names``.

    ``names`` maps lowercased parent names to ids (existing parents first, then
    in-batch parents, a later registration of the same name winning).
    ``batch_ids`` maps the account number of every in-batch PARENT group to the
    id synthesized for it. ``stored_names`` holds only the existing parents, the
    fallback for a name whose in-batch parent is later rejected.
    """

    names: Mapping[str, UUID] = field(default_factory=lambda: MappingProxyType({}))
    batch_ids: Mapping[str, UUID] = field(default_factory=lambda: MappingProxyType({}))
    stored_names: Mapping[str, UUID] = field(default_factory=lambda: MappingProxyType({}))

    def resolve(self, parent_name: str) -> UUID | None:
        return self.names.get(_name_key(parent_name))

    def resolve_stored(self, parent_name: str) -> UUID | None:
        return self.stored_names.get(_name_key(parent_name))

    def id_for(self, group: RowGroup) -> UUID | None:
        return self.batch_ids.get(group.account_number)

    def is_batch_parent(self, customer_id: UUID) -> bool:
        return customer_id in self.batch_ids.values()


def register_parent_names(
    groups: Iterable[RowGroup],
    existing: Iterable[Customer],
    *,
    id_factory: Callable[[], UUID] | None = None,
) -> ParentRegistry:
    """Seed names from existing parents and pre-register every in-batch parent.

    Registration happens regardless of whether the group later passes
    validation; dependents of rejected parents are handled afterwards.
    """

    make_id = id_factory or new_id
    stored_names: dict[str, UUID] = {
        _name_key(customer.name): customer.id
        for customer in existing
        if customer.type is CustomerType.PARENT
    }
    names = dict(stored_names)
    batch_ids: dict[str, UUID] = {}
    for group in groups:
        if group.customer_type is not CustomerType.PARENT:
            continue
        customer_id = make_id()
        batch_ids[group.account_number] = customer_id
        if group.first.customer_name.strip():
            names[_name_key(group.first.customer_name)] = customer_id
    return ParentRegistry(
        names=MappingProxyType(names),
        batch_ids=MappingProxyType(batch_ids),
        stored_names=MappingProxyType(stored_names),
    )
