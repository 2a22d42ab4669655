"""Customer aggregate: customers with their owned addresses and contacts.

All entities are immutable. Every change produces a new instance through
``dataclasses.replace`` so stored records are never edited in place; callers
swap whole records (and whole populations) instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Self

from customerhub.domain.model.entity import new_id, utcnow
from customerhub.domain.model.enums import CustomerType

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID


@dataclass(frozen=True, slots=True, kw_only=True)
class Address:
    """A location owned by exactly one customer.

    Either ``street`` or both ``latitude`` and ``longitude`` locate the address.
    Coordinates are kept as entered (strings) since they are never computed on.
    """

    id: UUID = field(default_factory=new_id)
    street: str | None = None
    latitude: str | None = None
    longitude: str | None = None
    city: str = ""
    state: str = ""
    zip_code: str = ""
    is_primary: bool = False
    is_billing: bool = False
    is_gate_property: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class Contact:
    """A contact person owned by exactly one customer."""

    id: UUID = field(default_factory=new_id)
    name: str = ""
    email: str = ""
    phone: str = ""
    is_primary: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class CustomerFields:
    """Fields shared by stored customers and candidate drafts, plus typed edits."""

    type: CustomerType = CustomerType.PARENT
    name: str = ""
    account_number: str = ""
    is_vip: bool = False
    addresses: tuple[Address, ...] = ()
    parent_id: UUID | None = None
    contacts: tuple[Contact, ...] = ()

    # details -----------------------------------------------------------------

    def with_details(
        self,
        *,
        name: str | None = None,
        account_number: str | None = None,
        is_vip: bool | None = None,
    ) -> Self:
        return replace(
            self,
            name=self.name if name is None else name,
            account_number=self.account_number if account_number is None else account_number,
            is_vip=self.is_vip if is_vip is None else is_vip,
        )

    # hierarchy ---------------------------------------------------------------

    def attach_to(self, parent_id: UUID) -> Self:
        """Attach beneath ``parent_id``; having a parent makes the customer DIRECT."""
        return replace(self, type=CustomerType.DIRECT, parent_id=parent_id)

    def detach(self) -> Self:
        """Drop the parent link and become an independent (PARENT) customer."""
        return replace(self, type=CustomerType.PARENT, parent_id=None)

    # addresses ---------------------------------------------------------------

    @property
    def primary_address(self) -> Address | None:
        return next((a for a in self.addresses if a.is_primary), None)

    @property
    def billing_address(self) -> Address | None:
        return next((a for a in self.addresses if a.is_billing), None)

    def add_address(self, address: Address) -> Self:
        if not self.addresses:
            address = replace(address, is_primary=True, is_billing=True)
        return replace(self, addresses=(*self.addresses, address))

    def update_address(self, address: Address) -> Self:
        return replace(
            self,
            addresses=tuple(address if a.id == address.id else a for a in self.addresses),
        )

    def remove_address(self, address_id: UUID) -> Self:
        return replace(self, addresses=tuple(a for a in self.addresses if a.id != address_id))

    def mark_primary_address(self, address_id: UUID) -> Self:
        return replace(
            self,
            addresses=tuple(replace(a, is_primary=a.id == address_id) for a in self.addresses),
        )

    def mark_billing_address(self, address_id: UUID) -> Self:
        return replace(
            self,
            addresses=tuple(replace(a, is_billing=a.id == address_id) for a in self.addresses),
        )

    # contacts ----------------------------------------------------------------

    @property
    def primary_contact(self) -> Contact | None:
        return next((c for c in self.contacts if c.is_primary), None)

    def add_contact(self, contact: Contact) -> Self:
        if not self.contacts:
            contact = replace(contact, is_primary=True)
        return replace(self, contacts=(*self.contacts, contact))

    def copy_contact_from(self, contact: Contact) -> Self:
        """Add a copy of another customer's contact under a fresh identity."""
        copied = replace(contact, id=new_id(), is_primary=not self.contacts)
        return replace(self, contacts=(*self.contacts, copied))

    def update_contact(self, contact: Contact) -> Self:
        return replace(
            self,
            contacts=tuple(contact if c.id == contact.id else c for c in self.contacts),
        )

    def remove_contact(self, contact_id: UUID) -> Self:
        removed = next((c for c in self.contacts if c.id == contact_id), None)
        remaining = tuple(c for c in self.contacts if c.id != contact_id)
        if removed is not None and removed.is_primary and remaining:
            remaining = (replace(remaining[0], is_primary=True), *remaining[1:])
        return replace(self, contacts=remaining)

    def mark_primary_contact(self, contact_id: UUID) -> Self:
        return replace(
            self,
            contacts=tuple(replace(c, is_primary=c.id == contact_id) for c in self.contacts),
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class CustomerDraft(CustomerFields):
    """Candidate customer data (what a form submits) without identity."""

    def build(
        self,
        *,
        customer_id: UUID | None = None,
        created_at: datetime | None = None,
    ) -> Customer:
        parent_id = self.parent_id if self.type is CustomerType.DIRECT else None
        return Customer(
            id=customer_id or new_id(),
            created_at=created_at or utcnow(),
            type=self.type,
            name=self.name,
            account_number=self.account_number,
            is_vip=self.is_vip,
            addresses=self.addresses,
            parent_id=parent_id,
            contacts=self.contacts,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class Customer(CustomerFields):
    """A stored customer account."""

    id: UUID = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)

    def to_draft(self) -> CustomerDraft:
        return CustomerDraft(
            type=self.type,
            name=self.name,
            account_number=self.account_number,
            is_vip=self.is_vip,
            addresses=self.addresses,
            parent_id=self.parent_id,
            contacts=self.contacts,
        )

    def apply(self, draft: CustomerFields) -> Customer:
        """Replace every editable field with ``draft``'s, keeping identity and timestamp."""
        return replace(
            self,
            type=draft.type,
            name=draft.name,
            account_number=draft.account_number,
            is_vip=draft.is_vip,
            addresses=draft.addresses,
            parent_id=draft.parent_id,
            contacts=draft.contacts,
        )
