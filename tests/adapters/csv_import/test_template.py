from __future__ import annotations

from customerhub.adapters.csv_import import (
    IMPORT_COLUMNS,
    parse_import_rows,
    render_import_template,
)
from customerhub.domain.import_pipeline import resolve_import_batch


def test_template_header_matches_columns() -> None:
    header = render_import_template().splitlines()[0]

    assert header == ",".join(IMPORT_COLUMNS)


def test_template_values_are_quoted() -> None:
    lines = render_import_template().splitlines()

    assert len(lines) == 3
    assert all(line.startswith('"') and line.endswith('"') for line in lines[1:])
    assert not render_import_template().endswith("\n")


def test_template_imports_as_parent_and_child() -> None:
    rows = parse_import_rows(render_import_template())

    batch = resolve_import_batch(rows, [])

    assert batch.rejections == ()
    parent, child = batch.accepted
    assert parent.name == "M2 Plus Construction Co Ltd."
    assert child.parent_id == parent.id
    assert child.primary_contact is not None
    assert child.primary_contact.email == "sarah@villa.com"
