"""In-process customer store."""

from __future__ import annotations

from customerhub.domain.population import Population


class InMemoryCustomerStore:
    """Keeps the last saved population; nothing survives the process."""

    def __init__(self, initial: Population | None = None) -> None:
        self._population = initial
        self.saves = 0

    def load(self, default: Population | None = None) -> Population:
        if self._population is not None:
            return self._population
        return default if default is not None else Population()

    def save(self, population: Population) -> None:
        self._population = population
        self.saves += 1
