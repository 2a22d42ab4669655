"""Ports for persisting the customer population."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from customerhub.domain.population import Population


@runtime_checkable
class CustomerStore(Protocol):
    """Holds the whole population; the engine never sees how it is persisted.

    ``load`` is called once when a service starts and returns ``default`` when
    nothing has been stored yet. ``save`` is called after every successful
    mutation with the complete next population.
    """

    def load(self, default: Population | None = None) -> Population: ...

    def save(self, population: Population) -> None: ...
