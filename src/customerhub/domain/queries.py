"""Read-only views over a population: search, sorting and the hierarchy tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from customerhub.domain.hierarchy import children_of, is_parent_of_someone
from customerhub.domain.model import CustomerType, SortDirection, SortField

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from customerhub.domain.model import Customer


@dataclass(frozen=True, slots=True)
class HierarchyNode:
    customer: Customer
    children: tuple[Customer, ...] = ()


def _matches(customer: Customer, term: str) -> bool:
    needle = term.lower()
    return needle in customer.name.lower() or needle in customer.account_number.lower()


def search(
    customers: Iterable[Customer],
    term: str = "",
    *,
    type_filter: CustomerType | None = None,
) -> list[Customer]:
    """Case-insensitive match on name or account number, optionally by type."""

    result = [c for c in customers if not term or _matches(c, term)]
    if type_filter is not None:
        result = [c for c in result if c.type is type_filter]
    return result


def sort_customers(
    customers: Iterable[Customer],
    field: SortField = SortField.NAME,
    direction: SortDirection = SortDirection.ASC,
) -> list[Customer]:
    def key(customer: Customer) -> str:
        return str(getattr(customer, field.value)).lower()

    return sorted(customers, key=key, reverse=direction is SortDirection.DESC)


def linkable_children(
    customers: Iterable[Customer],
    for_id: UUID | None = None,
    term: str = "",
    *,
    exclude_ids: Iterable[UUID] = (),
) -> list[Customer]:
    """Customers that may be linked beneath ``for_id``.

    Excludes the customer itself, anything already selected in ``exclude_ids`` and
    every customer that is already a parent of someone (depth stays at two).
    """

    population = list(customers)
    skipped = set(exclude_ids)
    return [
        c
        for c in population
        if c.id != for_id
        and c.id not in skipped
        and not is_parent_of_someone(population, c.id)
        and (not term or _matches(c, term))
    ]


def hierarchy_view(
    customers: Iterable[Customer],
    field: SortField = SortField.NAME,
    direction: SortDirection = SortDirection.ASC,
) -> list[HierarchyNode]:
    """Roots with their sorted children.

    A customer whose parent is not present is shown as a root so that no record
    disappears from the tree.
    """

    population = list(customers)
    known = {c.id for c in population}
    roots = [c for c in population if c.parent_id is None or c.parent_id not in known]
    return [
        HierarchyNode(
            customer=root,
            children=tuple(sort_customers(children_of(population, root.id), field, direction)),
        )
        for root in sort_customers(roots, field, direction)
    ]
