"""Public domain model surface."""

from __future__ import annotations

from customerhub.domain.model.customer import (
    Address,
    Contact,
    Customer,
    CustomerDraft,
    CustomerFields,
)
from customerhub.domain.model.entity import new_id, utcnow
from customerhub.domain.model.enums import CustomerType, SortDirection, SortField

__all__ = [  # noqa: RUF022
    # base
    "new_id",
    "utcnow",
    # customers
    "Address",
    "Contact",
    "Customer",
    "CustomerDraft",
    "CustomerFields",
    # enums
    "CustomerType",
    "SortDirection",
    "SortField",
]
