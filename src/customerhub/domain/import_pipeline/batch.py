"""Import results: accepted customers and per-row rejections."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from customerhub.domain.model import Customer

DEFAULT_IMPORTED_CITY = "Imported City"
DEFAULT_IMPORTED_STATE = "Imported State"


@dataclass(frozen=True, slots=True)
class ImportDefaults:
    """Values for address fields the flat import format does not carry."""

    city: str = DEFAULT_IMPORTED_CITY
    state: str = DEFAULT_IMPORTED_STATE


@dataclass(frozen=True, slots=True)
class RowRejection:
    row_number: int
    reason: str


@dataclass(frozen=True, slots=True)
class GroupRejection:
    """A whole account group failed; every one of its rows carries ``reason``."""

    reason: str
    row_numbers: tuple[int, ...]

    def entries(self) -> list[RowRejection]:
        return [RowRejection(row_number, self.reason) for row_number in self.row_numbers]


@dataclass(frozen=True, slots=True)
class ParentLink:
    """How an accepted customer is attached, for presenting import results."""

    customer: Customer
    parent_name: str | None = None
    dangling: bool = False


@dataclass(frozen=True, slots=True)
class ImportBatch:
    accepted: tuple[Customer, ...] = ()
    rejections: tuple[RowRejection, ...] = field(default_factory=tuple)

    @property
    def rejected_rows(self) -> int:
        return len(self.rejections)

    def parent_links(self, existing: Iterable[Customer] = ()) -> list[ParentLink]:
        """Resolve each accepted customer's parent against the batch and ``existing``.

        A parent id found in neither is reported as ``dangling``.
        """

        names = {c.id: c.name for c in existing}
        names.update({c.id: c.name for c in self.accepted})
        links: list[ParentLink] = []
        for customer in self.accepted:
            if customer.parent_id is None:
                links.append(ParentLink(customer))
                continue
            parent_name = names.get(customer.parent_id)
            links.append(
                ParentLink(customer, parent_name=parent_name, dangling=parent_name is None)
            )
        return links

    def summary(self) -> dict[str, int]:
        return {
            "accepted": len(self.accepted),
            "rejected_rows": self.rejected_rows,
            "accepted_contacts": sum(len(c.contacts) for c in self.accepted),
        }
