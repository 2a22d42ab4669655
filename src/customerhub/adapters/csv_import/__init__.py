"""Public interface for the CSV import adapter."""

from __future__ import annotations

from .reader import parse_import_rows, read_import_file, split_line
from .schema import IMPORT_COLUMNS, ImportRowPayload
from .template import TEMPLATE_FILENAME, render_import_template

__all__ = [
    "IMPORT_COLUMNS",
    "TEMPLATE_FILENAME",
    "ImportRowPayload",
    "parse_import_rows",
    "read_import_file",
    "render_import_template",
    "split_line",
]
