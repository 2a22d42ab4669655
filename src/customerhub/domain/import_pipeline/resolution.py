"""Group validation and customer construction, the second phase of import resolution."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from customerhub.domain.import_pipeline.batch import GroupRejection, ImportDefaults
from customerhub.domain.model import Address, Contact, Customer, CustomerType, new_id, utcnow

if TYPE_CHECKING:
    from collections.abc import Collection
    from datetime import datetime
    from uuid import UUID

    from customerhub.domain.import_pipeline.registry import ParentRegistry
    from customerhub.domain.import_pipeline.rows import RowGroup


MISSING_CUSTOMER_NAME = "Missing Customer Name"
MISSING_ACCOUNT_NUMBER = "Missing Account Number"
MISSING_CONTACT_FIELDS = "Missing Contact Name or Email."
NO_PRIMARY_CONTACT = "Multiple contacts found but none marked as Primary."
MULTIPLE_PRIMARY_CONTACTS = "Multiple contacts marked as Primary. Only one allowed."


def resolve_group(
    group: RowGroup,
    registry: ParentRegistry,
    existing_account_numbers: Collection[str],
    *,
    defaults: ImportDefaults | None = None,
    now: datetime | None = None,
) -> Customer | GroupRejection:
    """Validate one account group and build its customer.

    Groups are independent: the outcome depends only on the group itself, the
    frozen ``registry`` and the account numbers already stored.
    """

    first = group.first

    def reject(reason: str) -> GroupRejection:
        return GroupRejection(reason, group.row_numbers)

    if not first.customer_name.strip():
        return reject(MISSING_CUSTOMER_NAME)
    if not group.account_number.strip():
        return reject(MISSING_ACCOUNT_NUMBER)
    if len({row.customer_name for row in group.rows}) > 1:
        return reject(
            f"Duplicate Account Number '{group.account_number}' used for different customer names."
        )
    if group.account_number in existing_account_numbers:
        return reject(f"Account Number '{group.account_number}' already exists in the system.")

    if any(not row.contact_name.strip() or not row.contact_email.strip() for row in group.rows):
        return reject(MISSING_CONTACT_FIELDS)
    contacts = _contacts_for(group)
    if isinstance(contacts, str):
        return reject(contacts)

    parent_id: UUID | None = None
    if group.customer_type is CustomerType.DIRECT:
        parent_id = registry.resolve(first.parent_customer_name)
        if parent_id is None:
            return reject(
                f"Parent Customer '{first.parent_customer_name}' not found (in system or file)."
            )

    placeholders = defaults or ImportDefaults()
    address = Address(
        street=first.address or None,
        city=placeholders.city,
        state=placeholders.state,
        zip_code=first.zip_code,
        is_primary=True,
        is_billing=True,
    )
    return Customer(
        id=registry.id_for(group) or new_id(),
        created_at=now or utcnow(),
        type=group.customer_type,
        name=first.customer_name,
        account_number=group.account_number,
        is_vip=False,
        addresses=(address,),
        parent_id=parent_id,
        contacts=contacts,
    )


def _contacts_for(group: RowGroup) -> tuple[Contact, ...] | str:
    """One contact per row with exactly one primary, or the rejection reason."""

    contacts = tuple(
        Contact(
            name=row.contact_name,
            email=row.contact_email,
            phone=row.contact_phone,
            is_primary=row.is_primary_contact,
        )
        for row in group.rows
    )
    if len(contacts) == 1:
        return (replace(contacts[0], is_primary=True),)

    primary_count = sum(1 for contact in contacts if contact.is_primary)
    if primary_count == 0:
        return NO_PRIMARY_CONTACT
    if primary_count > 1:
        return MULTIPLE_PRIMARY_CONTACTS
    return contacts
