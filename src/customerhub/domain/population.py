"""Immutable customer population keyed by id."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from customerhub.domain.model import Customer


@dataclass(frozen=True, slots=True)
class Population:
    """Snapshot of every stored customer.

    A population is never modified; operations return a new snapshot so the
    owner can swap it in one step. Iteration follows insertion order.
    """

    _customers: Mapping[UUID, Customer] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def of(cls, customers: Iterable[Customer]) -> Population:
        return cls(MappingProxyType({customer.id: customer for customer in customers}))

    def __iter__(self) -> Iterator[Customer]:
        return iter(self._customers.values())

    def __len__(self) -> int:
        return len(self._customers)

    def __contains__(self, customer_id: object) -> bool:
        return customer_id in self._customers

    def get(self, customer_id: UUID) -> Customer | None:
        return self._customers.get(customer_id)

    def replacing(self, customers: Iterable[Customer]) -> Population:
        """Return a snapshot where each given customer replaces (or appends) by id."""
        updated = dict(self._customers)
        for customer in customers:
            updated[customer.id] = customer
        return Population(MappingProxyType(updated))

    def without(self, customer_id: UUID) -> Population:
        updated = {key: value for key, value in self._customers.items() if key != customer_id}
        return Population(MappingProxyType(updated))
