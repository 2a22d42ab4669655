"""Batch import resolver.

Resolution runs as explicit, separately testable phases:

1. ``group_rows`` groups flat rows by account number (one group per customer).
2. ``register_parent_names`` synthesizes ids for every in-file parent and builds a
   frozen name lookup seeded with the stored parents.
3. ``resolve_group`` validates each group on its own and builds its customer.
4. ``reject_orphaned_children`` rejects children of parents rejected in step 3.
"""

from __future__ import annotations

from .batch import (
    ImportBatch,
    ImportDefaults,
    ParentLink,
    RowRejection,
)
from .orchestrator import reject_orphaned_children, resolve_import_batch
from .registry import ParentRegistry, register_parent_names
from .resolution import resolve_group
from .rows import ImportRow, RowGroup, group_rows

__all__ = [
    "ImportBatch",
    "ImportDefaults",
    "ImportRow",
    "ParentLink",
    "ParentRegistry",
    "RowGroup",
    "RowRejection",
    "group_rows",
    "register_parent_names",
    "reject_orphaned_children",
    "resolve_group",
    "resolve_import_batch",
]
