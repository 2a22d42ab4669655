"""Read the comma-separated customer import format into domain rows."""

from __future__ import annotations

import csv
from logging import getLogger
from typing import TYPE_CHECKING

from .schema import REQUIRED_COLUMN_COUNT, ImportRowPayload

if TYPE_CHECKING:
    from pathlib import Path

    from customerhub.domain.import_pipeline import ImportRow


log = getLogger(__name__)


def split_line(line: str) -> list[str]:
    """Split one line on commas outside double quotes, trimming each value."""

    parsed = next(csv.reader([line], skipinitialspace=True), [])
    return [value.strip() for value in parsed]


def parse_import_rows(text: str) -> list[ImportRow]:
    """Parse file contents into rows, skipping the header and blank lines.

    Row numbers are file line numbers, so the first data line is row 2. Lines with
    fewer than seven values are dropped before grouping.
    """

    rows: list[ImportRow] = []
    dropped = 0
    for line_number, line in enumerate(text.splitlines(), start=1):
        if line_number == 1 or not line.strip():
            continue
        columns = split_line(line)
        if len(columns) < REQUIRED_COLUMN_COUNT:
            dropped += 1
            continue
        rows.append(ImportRowPayload.from_columns(line_number, columns).to_domain())

    if dropped:
        log.debug(
            "Dropped %d import line(s) with fewer than %d columns",
            dropped,
            REQUIRED_COLUMN_COUNT,
        )
    return rows


def read_import_file(path: Path, *, encoding: str = "utf-8-sig") -> list[ImportRow]:
    return parse_import_rows(path.read_text(encoding=encoding))
