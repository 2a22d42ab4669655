"""Application entry points binding the customer engine to a store."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from customerhub.adapters.csv_import import parse_import_rows
from customerhub.config import get_import_config
from customerhub.domain.hierarchy import (
    Deletion,
    batch_add,
    create_customer,
    delete_customer,
    update_customer,
)
from customerhub.domain.import_pipeline import ImportBatch, resolve_import_batch
from customerhub.domain.validation import validate_child_links, validate_customer

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable
    from uuid import UUID

    from customerhub.config import ImportConfig
    from customerhub.domain.import_pipeline import ImportRow
    from customerhub.domain.model import Customer, CustomerFields
    from customerhub.domain.population import Population
    from customerhub.domain.ports import CustomerStore


log = getLogger(__name__)


class CustomerNotFoundError(LookupError):
    """Raised by explicit lookups of a customer id that is not stored."""


@dataclass(frozen=True, slots=True)
class MutationResult:
    """Outcome of ``create``/``update``: the stored record or the violations."""

    customer: Customer | None = None
    errors: tuple[str, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.customer is not None and not self.errors


class CustomerService:
    """Owns the current population and swaps it as a whole on every change.

    The population is loaded once from ``store`` and saved after each
    successful mutation. Business-rule failures come back as data.
    """

    def __init__(
        self,
        store: CustomerStore,
        *,
        default: Population | None = None,
        import_config: ImportConfig | None = None,
    ) -> None:
        self.store = store
        self.import_config = import_config or get_import_config()
        self._population = store.load(default)

    @property
    def population(self) -> Population:
        return self._population

    def customers(self) -> list[Customer]:
        return list(self._population)

    def get(self, customer_id: UUID) -> Customer:
        customer = self._population.get(customer_id)
        if customer is None:
            raise CustomerNotFoundError(f"Customer {customer_id} not found")
        return customer

    def _commit(self, population: Population) -> None:
        self._population = population
        self.store.save(population)

    # single-record operations ------------------------------------------------

    def validate(
        self,
        candidate: CustomerFields,
        exclude_id: UUID | None = None,
        child_ids: Collection[UUID] = (),
    ) -> list[str]:
        errors = validate_customer(candidate, self._population, exclude_id)
        if child_ids:
            errors.extend(validate_child_links(child_ids, self._population, exclude_id))
        return errors

    def create(
        self,
        candidate: CustomerFields,
        child_ids: Collection[UUID] = (),
    ) -> MutationResult:
        errors = self.validate(candidate, child_ids=child_ids)
        if errors:
            log.info("Rejected new customer %r: %d violation(s)", candidate.name, len(errors))
            return MutationResult(errors=tuple(errors))

        population, customer = create_customer(self._population, candidate, child_ids)
        self._commit(population)
        log.info("Created %s customer %s (%s)", customer.type, customer.id, customer.account_number)
        return MutationResult(customer=customer)

    def update(
        self,
        customer_id: UUID,
        candidate: CustomerFields,
        child_ids: Collection[UUID] = (),
    ) -> MutationResult:
        if customer_id not in self._population:
            return MutationResult(errors=(f"Customer {customer_id} does not exist.",))

        errors = self.validate(candidate, exclude_id=customer_id, child_ids=child_ids)
        if errors:
            log.info("Rejected update of %s: %d violation(s)", customer_id, len(errors))
            return MutationResult(errors=tuple(errors))

        population, customer = update_customer(
            self._population, customer_id, candidate, child_ids
        )
        self._commit(population)
        log.info("Updated customer %s", customer_id)
        return MutationResult(customer=customer)

    def delete(self, customer_id: UUID) -> Deletion:
        population, deletion = delete_customer(self._population, customer_id)
        if deletion.removed is None:
            log.debug("Delete of unknown customer %s ignored", customer_id)
            return deletion

        self._commit(population)
        log.info(
            "Deleted customer %s; detached %d child customer(s)",
            customer_id,
            len(deletion.detached_ids),
        )
        return deletion

    # batch import ------------------------------------------------------------

    def resolve_import_batch(self, rows: Iterable[ImportRow]) -> ImportBatch:
        return resolve_import_batch(
            rows,
            self._population,
            defaults=self.import_config.defaults(),
        )

    def resolve_import_text(self, text: str) -> ImportBatch:
        return self.resolve_import_batch(parse_import_rows(text))

    def commit_batch(self, batch: ImportBatch | Iterable[Customer]) -> int:
        customers = list(batch.accepted if isinstance(batch, ImportBatch) else batch)
        if not customers:
            return 0
        self._commit(batch_add(self._population, customers))
        log.info("Committed %d imported customer(s)", len(customers))
        return len(customers)
