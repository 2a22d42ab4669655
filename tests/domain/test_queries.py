from __future__ import annotations

from customerhub.domain.model import CustomerType, SortDirection, SortField
from customerhub.domain.queries import hierarchy_view, linkable_children, search, sort_customers
from tests.helpers.customers import make_customer


def test_search_matches_name_or_account_case_insensitively() -> None:
    acme = make_customer("Acme HQ", "ACC-1")
    globex = make_customer("Globex", "GLX-7")

    assert search([acme, globex], "acme") == [acme]
    assert search([acme, globex], "glx") == [globex]
    assert search([acme, globex]) == [acme, globex]


def test_search_filters_by_type() -> None:
    parent = make_customer("Acme HQ", "ACC-1")
    child = make_customer("Acme Branch", "ACC-2", parent=parent)

    assert search([parent, child], "acme", type_filter=CustomerType.DIRECT) == [child]


def test_sort_customers() -> None:
    b = make_customer("beta", "ACC-1")
    a = make_customer("Alpha", "ACC-2")

    assert sort_customers([b, a]) == [a, b]
    assert sort_customers([b, a], SortField.ACCOUNT_NUMBER, SortDirection.DESC) == [a, b]


def test_linkable_children_excludes_self_selected_and_parents_of_others() -> None:
    editing = make_customer("Editing", "ACC-0")
    parent = make_customer("Acme HQ", "ACC-1")
    child = make_customer("Child", "ACC-2", parent=parent)
    picked = make_customer("Picked", "ACC-3")
    free = make_customer("Free", "ACC-4")
    population = [editing, parent, child, picked, free]

    result = linkable_children(population, editing.id, exclude_ids=[picked.id])

    assert result == [child, free]
    assert linkable_children(population, editing.id, "acc-4") == [free]


def test_hierarchy_view_nests_children_under_roots() -> None:
    parent = make_customer("Acme HQ", "ACC-1")
    child_b = make_customer("B Branch", "ACC-3", parent=parent)
    child_a = make_customer("A Branch", "ACC-2", parent=parent)
    loner = make_customer("Zeta", "ACC-9")
    orphan = make_customer("Orphan", "ACC-5", parent=make_customer("Gone", "ACC-6"))

    nodes = hierarchy_view([child_b, parent, loner, child_a, orphan])

    assert [node.customer.name for node in nodes] == ["Acme HQ", "Orphan", "Zeta"]
    assert [c.name for c in nodes[0].children] == ["A Branch", "B Branch"]
