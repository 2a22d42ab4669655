from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from customerhub.adapters.csv_import import parse_import_rows, render_import_template
from customerhub.adapters.memory import InMemoryCustomerStore
from customerhub.adapters.sqlalchemy import shutdown
from customerhub.ui import cli
from tests.helpers.customers import make_customer, make_population

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def reset_store_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


@pytest.fixture
def store(monkeypatch: pytest.MonkeyPatch) -> InMemoryCustomerStore:
    parent = make_customer("Acme HQ", "ACC-1")
    child = make_customer("Branch", "ACC-2", parent=parent)
    memory = InMemoryCustomerStore(make_population(parent, child, make_customer("Globex", "ACC-3")))
    monkeypatch.setattr(cli, "_build_store", lambda _args: memory)
    return memory


def test_template_command_writes_file(tmp_path: Path) -> None:
    output = tmp_path / "template.csv"

    cli.main(["template", str(output)])

    rows = parse_import_rows(output.read_text(encoding="utf-8"))
    assert len(rows) == 2
    assert output.read_text(encoding="utf-8").startswith(render_import_template())


def test_list_shows_children_under_parents(
    store: InMemoryCustomerStore, caplog: pytest.LogCaptureFixture
) -> None:
    _ = store
    caplog.set_level(logging.INFO, logger="customerhub.ui.cli")

    cli.main(["--memory", "list"])

    messages = [r.getMessage() for r in caplog.records if r.name == "customerhub.ui.cli"]
    assert messages[0].startswith("Acme HQ [ACC-1] PARENT")
    assert messages[1].startswith("    Branch [ACC-2] DIRECT")
    assert messages[2].startswith("Globex [ACC-3] PARENT")


def test_list_with_search_is_flat(
    store: InMemoryCustomerStore, caplog: pytest.LogCaptureFixture
) -> None:
    _ = store
    caplog.set_level(logging.INFO, logger="customerhub.ui.cli")

    cli.main(["--memory", "list", "--search", "acc-", "--type", "DIRECT"])

    messages = [r.getMessage() for r in caplog.records if r.name == "customerhub.ui.cli"]
    assert len(messages) == 1
    assert messages[0].startswith("Branch [ACC-2]")


def test_import_without_commit_reports_only(
    store: InMemoryCustomerStore, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    path = tmp_path / "customers.csv"
    path.write_text(render_import_template(), encoding="utf-8")
    caplog.set_level(logging.INFO, logger="customerhub.ui.cli")

    cli.main(["--memory", "import", str(path)])

    assert store.saves == 0
    assert any("Import summary" in record.getMessage() for record in caplog.records)


def test_import_with_commit_stores_accepted(store: InMemoryCustomerStore, tmp_path: Path) -> None:
    path = tmp_path / "customers.csv"
    path.write_text(render_import_template(), encoding="utf-8")

    cli.main(["--memory", "import", str(path), "--commit"])

    assert store.saves == 1
    assert len(store.load()) == 5


def test_delete_removes_customer(store: InMemoryCustomerStore) -> None:
    parent = next(c for c in store.load() if c.name == "Acme HQ")

    cli.main(["--memory", "delete", str(parent.id)])

    assert parent.id not in store.load()


def test_delete_invalid_uuid_exits_with_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--memory", "delete", "not-a-uuid"])

    assert excinfo.value.code == 2


def test_missing_import_file_is_fatal(store: InMemoryCustomerStore, tmp_path: Path) -> None:
    _ = store

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--memory", "import", str(tmp_path / "missing.csv")])

    assert excinfo.value.code == 1


def test_database_uri_flag_persists_between_runs(tmp_path: Path) -> None:
    uri = f"sqlite+pysqlite:///{tmp_path / 'customers.db'}"
    path = tmp_path / "customers.csv"
    path.write_text(render_import_template(), encoding="utf-8")

    cli.main(["--database-uri", uri, "import", str(path), "--commit"])
    cli.main(["--database-uri", uri, "delete", "00000000-0000-0000-0000-000000000000"])

    assert (tmp_path / "customers.db").exists()
