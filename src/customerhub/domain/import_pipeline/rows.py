"""Flat import rows and the per-account groups built from them."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING

from customerhub.domain.model import CustomerType

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True, slots=True, kw_only=True)
class ImportRow:
    """One data line of an import file.

    ``row_number`` is the line number in the source file (the header is line 1).
    A blank ``parent_customer_name`` makes the row's customer a PARENT.
    """

    row_number: int
    customer_name: str
    account_number: str
    address: str = ""
    zip_code: str = ""
    parent_customer_name: str = ""
    contact_name: str = ""
    contact_email: str = ""
    contact_phone: str = ""
    is_primary_contact: bool = False


@dataclass(frozen=True, slots=True)
class RowGroup:
    """Every row sharing one account number: one candidate customer."""

    account_number: str
    rows: tuple[ImportRow, ...]

    @property
    def first(self) -> ImportRow:
        return self.rows[0]

    @property
    def customer_type(self) -> CustomerType:
        if self.first.parent_customer_name.strip():
            return CustomerType.DIRECT
        return CustomerType.PARENT

    @property
    def row_numbers(self) -> tuple[int, ...]:
        return tuple(row.row_number for row in self.rows)


def group_rows(rows: Iterable[ImportRow]) -> list[RowGroup]:
    """Group rows by account number, keeping first-seen order of accounts and rows."""

    grouped: defaultdict[str, list[ImportRow]] = defaultdict(list)
    for row in rows:
        grouped[row.account_number].append(row)
    return [RowGroup(account, tuple(members)) for account, members in grouped.items()]
