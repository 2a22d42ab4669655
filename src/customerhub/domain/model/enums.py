"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class CustomerType(StrEnum):
    """Position of a customer in the two-level hierarchy."""

    PARENT = "PARENT"
    DIRECT = "DIRECT"


class SortField(StrEnum):
    NAME = "name"
    ACCOUNT_NUMBER = "account_number"
    TYPE = "type"


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"
