"""Batch import resolution: group, register parents, resolve, then drop orphans.

The resolver only classifies rows. Accepted customers reach the population
through ``customerhub.domain.hierarchy.batch_add`` as a separate, explicit step.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, TypeAlias

from customerhub.domain.import_pipeline.batch import GroupRejection, ImportBatch
from customerhub.domain.import_pipeline.registry import register_parent_names
from customerhub.domain.import_pipeline.resolution import resolve_group
from customerhub.domain.import_pipeline.rows import group_rows
from customerhub.domain.model import Customer

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence
    from datetime import datetime
    from uuid import UUID

    from customerhub.domain.import_pipeline.batch import ImportDefaults
    from customerhub.domain.import_pipeline.registry import ParentRegistry
    from customerhub.domain.import_pipeline.rows import ImportRow, RowGroup


log = getLogger(__name__)

GroupOutcome: TypeAlias = "tuple[RowGroup, Customer | GroupRejection]"


def resolve_import_batch(
    rows: Iterable[ImportRow],
    existing: Iterable[Customer],
    *,
    defaults: ImportDefaults | None = None,
    now: datetime | None = None,
    id_factory: Callable[[], UUID] | None = None,
) -> ImportBatch:
    """Classify ``rows`` into accepted customers and per-row rejections."""

    population = list(existing)
    groups = group_rows(rows)
    registry = register_parent_names(groups, population, id_factory=id_factory)
    account_numbers = {customer.account_number for customer in population}

    outcomes: list[GroupOutcome] = [
        (group, resolve_group(group, registry, account_numbers, defaults=defaults, now=now))
        for group in groups
    ]
    outcomes = reject_orphaned_children(outcomes, registry)

    accepted = tuple(result for _, result in outcomes if isinstance(result, Customer))
    rejections = sorted(
        (
            entry
            for _, result in outcomes
            if isinstance(result, GroupRejection)
            for entry in result.entries()
        ),
        key=lambda entry: entry.row_number,
    )
    for rejection in rejections:
        log.debug("Import row %s rejected: %s", rejection.row_number, rejection.reason)
    log.info(
        "Resolved import batch: groups=%d, accepted=%d, rejected_rows=%d",
        len(groups),
        len(accepted),
        len(rejections),
    )
    return ImportBatch(accepted=accepted, rejections=tuple(rejections))


def reject_orphaned_children(
    outcomes: Sequence[GroupOutcome],
    registry: ParentRegistry,
) -> list[GroupOutcome]:
    """Re-point or reject DIRECT customers whose in-file parent was itself rejected.

    Parent names are registered before validation, so without this pass such a
    child would be accepted pointing at an id that never reaches the population.
    A stored parent of the same name takes over; otherwise the child is rejected.
    """

    rejected_parents: dict[UUID, str] = {}
    for group, result in outcomes:
        parent_id = registry.id_for(group)
        if parent_id is not None and isinstance(result, GroupRejection):
            rejected_parents[parent_id] = group.first.customer_name

    if not rejected_parents:
        return list(outcomes)

    cleaned: list[GroupOutcome] = []
    for group, result in outcomes:
        if (
            isinstance(result, Customer)
            and result.parent_id is not None
            and result.parent_id in rejected_parents
        ):
            parent_name = group.first.parent_customer_name
            stored_parent_id = registry.resolve_stored(parent_name)
            if stored_parent_id is not None:
                cleaned.append((group, result.attach_to(stored_parent_id)))
                continue
            reason = f"Parent Customer '{parent_name}' was rejected in this file."
            cleaned.append((group, GroupRejection(reason, group.row_numbers)))
            continue
        cleaned.append((group, result))
    return cleaned

