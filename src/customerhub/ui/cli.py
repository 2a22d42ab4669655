from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from customerhub.adapters.csv_import import (
    TEMPLATE_FILENAME,
    read_import_file,
    render_import_template,
)
from customerhub.adapters.memory import InMemoryCustomerStore
from customerhub.adapters.sqlalchemy import SqlAlchemyCustomerStore, startup
from customerhub.app import CustomerService
from customerhub.config import ConfigurationError, configure_logging
from customerhub.domain.model import CustomerType, SortDirection, SortField
from customerhub.domain.queries import hierarchy_view, search, sort_customers

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from customerhub.domain.model import Customer
    from customerhub.domain.ports import CustomerStore

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage Parent and Direct customer accounts")
    parser.add_argument(
        "--database-uri",
        type=str,
        help="SQLAlchemy database URI (defaults to DATABASE_URI or the data directory)",
    )
    parser.add_argument(
        "--memory",
        action="store_true",
        help="Use a throwaway in-memory store instead of the database",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    listing = subparsers.add_parser("list", help="List customers")
    listing.add_argument("--search", type=str, default="", help="Filter by name or account")
    listing.add_argument(
        "--type",
        type=CustomerType,
        choices=list(CustomerType),
        help="Only list customers of this type",
    )
    listing.add_argument(
        "--sort",
        type=SortField,
        choices=list(SortField),
        default=SortField.NAME,
        help="Sort field (default: %(default)s)",
    )
    listing.add_argument(
        "--desc",
        action="store_true",
        help="Sort descending",
    )

    importing = subparsers.add_parser("import", help="Import customers from a CSV file")
    importing.add_argument("file", type=Path, help="CSV file in the import template format")
    importing.add_argument(
        "--commit",
        action="store_true",
        help="Store the accepted customers (default only reports the outcome)",
    )

    template = subparsers.add_parser("template", help="Write the CSV import template")
    template.add_argument(
        "output",
        type=Path,
        nargs="?",
        default=Path(TEMPLATE_FILENAME),
        help="Destination file (default: %(default)s)",
    )

    remove = subparsers.add_parser("delete", help="Delete a customer by id")
    remove.add_argument("customer_id", type=str, help="Customer id")

    return parser.parse_args(list(argv))


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _build_store(args: argparse.Namespace) -> CustomerStore:
    if args.memory:
        return InMemoryCustomerStore()
    return SqlAlchemyCustomerStore(startup(database_uri=args.database_uri, force=True))


def _describe(customer: Customer) -> str:
    return f"{customer.name} [{customer.account_number}] {customer.type} {customer.id}"


def _list_customers(service: CustomerService, args: argparse.Namespace) -> None:
    direction = SortDirection.DESC if args.desc else SortDirection.ASC
    if not args.search and args.type is None:
        for node in hierarchy_view(service.population, args.sort, direction):
            log.info("%s", _describe(node.customer))
            for child in node.children:
                log.info("    %s", _describe(child))
        return

    matches = search(service.population, args.search, type_filter=args.type)
    for customer in sort_customers(matches, args.sort, direction):
        log.info("%s", _describe(customer))


def _import_customers(service: CustomerService, args: argparse.Namespace) -> None:
    batch = service.resolve_import_batch(read_import_file(args.file))
    for link in batch.parent_links(service.population):
        parent = link.parent_name or "-"
        if link.dangling:
            parent = f"MISSING ({link.customer.parent_id})"
        log.info("Accepted %s, parent: %s", _describe(link.customer), parent)
    for rejection in batch.rejections:
        log.warning("Row %s rejected: %s", rejection.row_number, rejection.reason)
    log.info("Import summary: %s", batch.summary())

    if args.commit:
        stored = service.commit_batch(batch)
        log.info("Stored %d customer(s)", stored)


def _delete_customer(service: CustomerService, args: argparse.Namespace) -> None:
    deletion = service.delete(_parse_uuid(args.customer_id))
    if deletion.removed is None:
        log.info("Customer %s not found; nothing to delete", args.customer_id)
        return
    log.info(
        "Deleted %s; %d child customer(s) are now independent",
        _describe(deletion.removed),
        len(deletion.detached_ids),
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        configure_logging()
        parsed_args = _parse_args(args_list)
        if parsed_args.command == "delete":
            _parse_uuid(parsed_args.customer_id)
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "template":
            parsed_args.output.write_text(render_import_template() + "\n", encoding="utf-8")
            log.info("Wrote import template to %s", parsed_args.output)
            return

        service = CustomerService(_build_store(parsed_args))
        if parsed_args.command == "list":
            _list_customers(service, parsed_args)
        elif parsed_args.command == "import":
            _import_customers(service, parsed_args)
        elif parsed_args.command == "delete":
            _delete_customer(service, parsed_args)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
