"""Pydantic model describing one row of the customer import file."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from pydantic import BaseModel, ConfigDict, field_validator

from customerhub.domain.import_pipeline import ImportRow

IMPORT_COLUMNS: Final[tuple[str, ...]] = (
    "Customer Name",
    "Account Number",
    "Address",
    "Zip Code",
    "Parent Customer Name",
    "Contact Name",
    "Contact Email",
    "Contact Phone",
    "Is Primary Contact",
)
REQUIRED_COLUMN_COUNT: Final[int] = 7
TRUTHY_VALUES: Final[frozenset[str]] = frozenset({"true", "yes", "1"})

_FIELD_ORDER: Final[tuple[str, ...]] = (
    "customer_name",
    "account_number",
    "address",
    "zip_code",
    "parent_customer_name",
    "contact_name",
    "contact_email",
    "contact_phone",
    "is_primary_contact",
)


class ImportRowPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, str_strip_whitespace=True)

    row_number: int
    customer_name: str
    account_number: str
    address: str
    zip_code: str
    parent_customer_name: str
    contact_name: str
    contact_email: str
    contact_phone: str = ""
    is_primary_contact: bool = False

    @field_validator("is_primary_contact", mode="before")
    @classmethod
    def _parse_flag(cls, value: object) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() in TRUTHY_VALUES
        return False

    @classmethod
    def from_columns(cls, row_number: int, columns: Sequence[str]) -> ImportRowPayload:
        """Map positional columns onto fields; trailing optional columns may be absent."""
        data: dict[str, object] = {"row_number": row_number}
        data.update(zip(_FIELD_ORDER, columns, strict=False))
        return cls.model_validate(data)

    def to_domain(self) -> ImportRow:
        return ImportRow(
            row_number=self.row_number,
            customer_name=self.customer_name,
            account_number=self.account_number,
            address=self.address,
            zip_code=self.zip_code,
            parent_customer_name=self.parent_customer_name,
            contact_name=self.contact_name,
            contact_email=self.contact_email,
            contact_phone=self.contact_phone,
            is_primary_contact=self.is_primary_contact,
        )
