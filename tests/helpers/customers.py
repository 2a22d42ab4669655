"""Builders for customer-related test data."""

from __future__ import annotations

from typing import TYPE_CHECKING

from customerhub.domain.import_pipeline import ImportRow
from customerhub.domain.model import Address, Contact, Customer, CustomerDraft, CustomerType
from customerhub.domain.population import Population

if TYPE_CHECKING:
    from uuid import UUID


def _email_for(name: str) -> str:
    return f"{name.split()[0].lower()}@example.com" if name.strip() else ""


def make_address(
    *,
    street: str | None = "1 Main St",
    primary: bool = True,
    billing: bool = True,
    **overrides: object,
) -> Address:
    values: dict[str, object] = {
        "street": street,
        "city": "Springfield",
        "state": "IL",
        "zip_code": "62701",
        "is_primary": primary,
        "is_billing": billing,
    }
    values.update(overrides)
    return Address(**values)  # type: ignore[arg-type]


def make_contact(name: str = "Pat Doe", *, primary: bool = True, **overrides: object) -> Contact:
    values: dict[str, object] = {
        "name": name,
        "email": _email_for(name),
        "phone": "555-0100",
        "is_primary": primary,
    }
    values.update(overrides)
    return Contact(**values)  # type: ignore[arg-type]


def make_draft(
    name: str = "Acme HQ",
    account_number: str = "ACC-1",
    *,
    customer_type: CustomerType = CustomerType.PARENT,
    parent_id: UUID | None = None,
    addresses: tuple[Address, ...] | None = None,
    contacts: tuple[Contact, ...] | None = None,
) -> CustomerDraft:
    return CustomerDraft(
        type=customer_type,
        name=name,
        account_number=account_number,
        addresses=addresses if addresses is not None else (make_address(),),
        parent_id=parent_id,
        contacts=contacts if contacts is not None else (make_contact(),),
    )


def make_customer(
    name: str = "Acme HQ",
    account_number: str = "ACC-1",
    *,
    parent: Customer | None = None,
    customer_type: CustomerType | None = None,
) -> Customer:
    if customer_type is None:
        customer_type = CustomerType.DIRECT if parent is not None else CustomerType.PARENT
    draft = make_draft(
        name,
        account_number,
        customer_type=customer_type,
        parent_id=parent.id if parent is not None else None,
    )
    return draft.build()


def make_population(*customers: Customer) -> Population:
    return Population.of(customers)


def make_row(
    row_number: int,
    customer_name: str,
    account_number: str,
    *,
    parent: str = "",
    contact: str = "Pat Doe",
    email: str | None = None,
    primary: bool = False,
) -> ImportRow:
    return ImportRow(
        row_number=row_number,
        customer_name=customer_name,
        account_number=account_number,
        address="1 Main St",
        zip_code="50000",
        parent_customer_name=parent,
        contact_name=contact,
        contact_email=email if email is not None else _email_for(contact),
        contact_phone="555-0100",
        is_primary_contact=primary,
    )
