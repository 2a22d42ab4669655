"""Downloadable template for the customer import format."""

from __future__ import annotations

from typing import Final

from .schema import IMPORT_COLUMNS

TEMPLATE_FILENAME: Final[str] = "customer_import_template.csv"

SAMPLE_ROWS: Final[tuple[tuple[str, ...], ...]] = (
    (
        "M2 Plus Construction Co Ltd.",
        "ACC-9001",
        "123 Build St",
        "50000",
        "",
        "Mike Builder",
        "mike@m2plus.com",
        "555-1234",
        "TRUE",
    ),
    (
        "Punyisa Villa 21",
        "ACC-9002",
        "456 Villa Ln",
        "50000",
        "M2 Plus Construction Co Ltd.",
        "Sarah Villa",
        "sarah@villa.com",
        "555-5678",
        "TRUE",
    ),
)


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def render_import_template() -> str:
    """Header row plus a parent and one of its children, sample values quoted."""

    lines = [",".join(IMPORT_COLUMNS)]
    lines.extend(",".join(_quote(value) for value in row) for row in SAMPLE_ROWS)
    return "\n".join(lines)
