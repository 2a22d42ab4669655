"""Validation rules for candidate customer records.

``validate_customer`` never raises for bad data and never short-circuits: every
violation found is returned so a caller can show all of them at once. An empty
list means the candidate may be written.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from customerhub.domain.model import CustomerType

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from customerhub.domain.model import Address, Contact, Customer, CustomerFields


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def is_account_number_unique(
    account_number: str,
    all_customers: Iterable[Customer],
    exclude_id: UUID | None = None,
) -> bool:
    """Exact, case-sensitive match against every customer except ``exclude_id``."""
    return not any(
        c.account_number == account_number and c.id != exclude_id for c in all_customers
    )


def validate_customer(
    candidate: CustomerFields,
    all_customers: Iterable[Customer],
    exclude_id: UUID | None = None,
) -> list[str]:
    """Return every violation of ``candidate`` against the customer rules and population."""

    population = list(all_customers)
    errors: list[str] = []

    if _blank(candidate.name):
        errors.append("Customer Name is required.")
    if _blank(candidate.account_number):
        errors.append("Account Number is required.")

    if not is_account_number_unique(candidate.account_number, population, exclude_id):
        errors.append(f"Account Number '{candidate.account_number}' is already in use.")

    errors.extend(_address_errors(candidate.addresses))
    errors.extend(_contact_errors(candidate.contacts))

    if candidate.type is CustomerType.PARENT and candidate.parent_id:
        errors.append("A Parent Customer cannot have a Parent.")

    errors.extend(_hierarchy_errors(candidate, population, exclude_id))
    return errors


def _address_errors(addresses: tuple[Address, ...]) -> list[str]:
    if not addresses:
        return ["At least one address is required."]

    errors: list[str] = []
    primary_count = sum(1 for a in addresses if a.is_primary)
    if primary_count == 0:
        errors.append("You must designate exactly one Primary Location address.")
    if primary_count > 1:
        errors.append("Only one address can be marked as the Primary Location.")

    billing_count = sum(1 for a in addresses if a.is_billing)
    if billing_count == 0:
        errors.append("You must designate exactly one Billing Address.")
    if billing_count > 1:
        errors.append("Only one address can be marked as the Billing Address.")

    for position, address in enumerate(addresses, start=1):
        has_street = not _blank(address.street)
        has_coordinates = not _blank(address.latitude) and not _blank(address.longitude)
        if not has_street and not has_coordinates:
            errors.append(
                f"Address #{position}: Must provide either Street Address OR Latitude + Longitude."
            )
        if _blank(address.city):
            errors.append(f"Address #{position}: City is required.")
        if _blank(address.state):
            errors.append(f"Address #{position}: State is required.")
        if _blank(address.zip_code):
            errors.append(f"Address #{position}: Zip Code is required.")
    return errors


def _contact_errors(contacts: tuple[Contact, ...]) -> list[str]:
    if not contacts:
        return ["At least one contact person is required."]

    errors: list[str] = []
    primary_count = sum(1 for c in contacts if c.is_primary)
    if primary_count == 0:
        errors.append("You must designate exactly one Primary Contact.")
    if primary_count > 1:
        errors.append("Only one contact can be marked as Primary.")

    for position, contact in enumerate(contacts, start=1):
        if _blank(contact.name):
            errors.append(f"Contact #{position}: Name is required.")
        if _blank(contact.email):
            errors.append(f"Contact #{position}: Email is required.")
        if _blank(contact.phone):
            errors.append(f"Contact #{position}: Phone is required.")
    return errors


def _hierarchy_errors(
    candidate: CustomerFields,
    population: list[Customer],
    exclude_id: UUID | None,
) -> list[str]:
    """A parent must be a top-level PARENT and a customer with children stays one."""

    errors: list[str] = []
    has_children = exclude_id is not None and any(c.parent_id == exclude_id for c in population)

    if candidate.type is CustomerType.DIRECT and candidate.parent_id is not None:
        parent = next((c for c in population if c.id == candidate.parent_id), None)
        if parent is None or parent.id == exclude_id:
            errors.append("Selected Parent Customer does not exist.")
        elif parent.type is not CustomerType.PARENT or parent.parent_id is not None:
            errors.append(f"'{parent.name}' is not a Parent Customer.")

    if has_children and candidate.type is CustomerType.DIRECT:
        errors.append("A customer with linked Direct customers must remain a Parent Customer.")
    return errors


def validate_child_links(
    child_ids: Iterable[UUID],
    all_customers: Iterable[Customer],
    parent_id: UUID | None = None,
) -> list[str]:
    """Check that every id in ``child_ids`` may be linked beneath ``parent_id``.

    ``parent_id`` is ``None`` while the parent is still being created. Unknown ids
    are ignored, matching the mutation engine which skips them.
    """

    population = {c.id: c for c in all_customers}
    errors: list[str] = []
    for child_id in child_ids:
        child = population.get(child_id)
        if child is None:
            continue
        if child_id == parent_id:
            errors.append(f"'{child.name}' cannot be linked to itself.")
        elif any(c.parent_id == child_id for c in population.values()):
            errors.append(
                f"'{child.name}' has linked Direct customers and cannot become a child."
            )
    return errors
