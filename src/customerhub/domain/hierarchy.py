"""Hierarchy mutation engine.

Each operation takes the current ``Population`` and returns the next one together
with what changed. Nothing is validated here: callers run
``customerhub.domain.validation`` first and only call into the engine when the
candidate passed.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from customerhub.domain.model import Customer, CustomerType, new_id, utcnow

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable
    from datetime import datetime
    from uuid import UUID

    from customerhub.domain.model import CustomerFields
    from customerhub.domain.population import Population


log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Deletion:
    """Outcome of ``delete_customer``."""

    removed: Customer | None
    detached_ids: tuple[UUID, ...] = ()


def create_customer(
    population: Population,
    candidate: CustomerFields,
    child_ids: Collection[UUID] = (),
    *,
    customer_id: UUID | None = None,
    created_at: datetime | None = None,
) -> tuple[Population, Customer]:
    """Insert ``candidate`` under a fresh id, linking ``child_ids`` when it is a parent."""

    customer = Customer(
        id=customer_id or new_id(),
        created_at=created_at or utcnow(),
    ).apply(candidate)
    if customer.type is not CustomerType.DIRECT and customer.parent_id is not None:
        customer = customer.detach()

    changed: list[Customer] = [customer]
    if customer.type is CustomerType.PARENT:
        changed.extend(_link_children(population, customer.id, child_ids))

    log.debug("Created customer %s with %d linked children", customer.id, len(changed) - 1)
    return population.replacing(changed), customer


def update_customer(
    population: Population,
    customer_id: UUID,
    candidate: CustomerFields,
    child_ids: Collection[UUID] = (),
) -> tuple[Population, Customer | None]:
    """Replace the stored fields of ``customer_id`` and reconcile its children.

    When the updated record is a parent, children that are not in ``child_ids``
    are detached first and only then are ``child_ids`` linked, so a child moved
    out and another moved in during the same call never collide.
    """

    existing = population.get(customer_id)
    if existing is None:
        return population, None

    updated = existing.apply(candidate)
    if updated.type is CustomerType.PARENT:
        updated = updated.detach()
    next_population = population.replacing([updated])

    if updated.type is CustomerType.PARENT:
        wanted = set(child_ids)
        released = [
            child.detach()
            for child in children_of(next_population, customer_id)
            if child.id not in wanted
        ]
        next_population = next_population.replacing(released)
        next_population = next_population.replacing(
            _link_children(next_population, customer_id, child_ids)
        )
        log.debug(
            "Updated parent %s: detached=%d, linked=%d",
            customer_id,
            len(released),
            len(wanted),
        )

    return next_population, updated


def delete_customer(population: Population, customer_id: UUID) -> tuple[Population, Deletion]:
    """Remove ``customer_id``; its children are detached, never deleted.

    A missing target is a no-op since the desired end state already holds.
    """

    target = population.get(customer_id)
    if target is None:
        return population, Deletion(removed=None)

    detached: list[Customer] = []
    if target.type is CustomerType.PARENT:
        detached = [child.detach() for child in children_of(population, customer_id)]

    next_population = population.replacing(detached).without(customer_id)
    return next_population, Deletion(
        removed=target,
        detached_ids=tuple(child.id for child in detached),
    )


def batch_add(population: Population, customers: Iterable[Customer]) -> Population:
    """Append pre-resolved customers as they are; the import resolver owns their checks."""
    return population.replacing(customers)


def _link_children(
    population: Population,
    parent_id: UUID,
    child_ids: Iterable[UUID],
) -> list[Customer]:
    linked: list[Customer] = []
    for child_id in child_ids:
        child = population.get(child_id)
        if child is None or child_id == parent_id:
            continue
        linked.append(child.attach_to(parent_id))
    return linked


# queries ---------------------------------------------------------------------


def children_of(population: Iterable[Customer], parent_id: UUID) -> list[Customer]:
    return [c for c in population if c.parent_id == parent_id]


def child_count(population: Iterable[Customer], parent_id: UUID) -> int:
    return len(children_of(population, parent_id))


def is_parent_of_someone(population: Iterable[Customer], customer_id: UUID) -> bool:
    return any(c.parent_id == customer_id for c in population)


def parents(population: Iterable[Customer]) -> list[Customer]:
    return [c for c in population if c.type is CustomerType.PARENT]


def direct_customers(population: Iterable[Customer]) -> list[Customer]:
    return [c for c in population if c.type is CustomerType.DIRECT]
