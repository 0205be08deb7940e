##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Tests for the `scope_query_executor.py` module.
"""

from typing import Dict

import pytest

from scopestore.exceptions import MissingScopeError
from scopestore.queries import QueryOrder, between, equal_to, greater_than, in_, less_than, starts_with
from scopestore.store.scope import Scope
from tests.fixture_types import FixtureScopeStore


@pytest.fixture
def numbered_scopes(scope_store: FixtureScopeStore) -> Dict[str, Scope]:
    """
    Create top-level scopes "1" through "4", each with an `owner` and a `size` record:

    | scope | owner | size | tags       |
    |-------|-------|------|------------|
    | 1     | alice | 10   | [a, b]     |
    | 2     | bob   | 20   | [b]        |
    | 3     | alice | 30   | [c]        |
    | 4     | alice | 40   | [a, c]     |

    Args:
        scope_store: An empty `ScopeStore`.

    Returns:
        A dictionary of scope name to the created `Scope`.
    """
    records = {
        "1": {"owner": "alice", "size": "10", "tags": ["a", "b"]},
        "2": {"owner": "bob", "size": "20", "tags": ["b"]},
        "3": {"owner": "alice", "size": "30", "tags": ["c"]},
        "4": {"owner": "alice", "size": "40", "tags": ["a", "c"]},
    }
    scopes = {}
    for name, values in records.items():
        scopes[name] = scope_store.within_root().create_scope(name)
        scope_store.within(scopes[name]).set_records(values)
    return scopes


def names(scopes) -> list:
    """Return the names of `scopes`, in order."""
    return [scope.name for scope in scopes]


def test_no_constraint_returns_every_child(scope_store: FixtureScopeStore, scope_tree: Dict[str, Scope]):
    """
    Test that a query without constraint returns every scope directly under the parent.

    Args:
        scope_store: A `ScopeStore` on a temporary database file.
        scope_tree: The scopes of the test tree, by name.
    """
    assert set(names(scope_store.within_root().query_scope().fetch())) == {"1", "2"}
    assert set(names(scope_store.within("1").query_scope().fetch())) == {"11", "12"}
    assert names(scope_store.within("1/12/121").query_scope().fetch()) == []


def test_between_names(scope_store: FixtureScopeStore, numbered_scopes: Dict[str, Scope]):
    """
    Test a range constraint on names, then with descending order and a limit of one.

    Args:
        scope_store: A `ScopeStore` on a temporary database file.
        numbered_scopes: Top-level scopes "1" through "4".
    """
    query = scope_store.within_root().query_scope().where_scope_name(between("2", "3"))
    assert query.fetch().scope_names == {"2", "3"}

    ordered = query.order_by_scope_name(QueryOrder.DESC).limit(1)
    assert names(ordered.fetch()) == ["3"]


def test_record_constraints_intersect(scope_store: FixtureScopeStore, numbered_scopes: Dict[str, Scope]):
    """
    Test that only scopes satisfying every record key's constraints are returned.

    Args:
        scope_store: A `ScopeStore` on a temporary database file.
        numbered_scopes: Top-level scopes "1" through "4".
    """
    query = (
        scope_store.within_root()
        .query_scope()
        .where_record("owner", equal_to("alice"))
        .where_record("size", greater_than("15"))
        .where_record("size", less_than("35"))
    )
    assert names(query.fetch()) == ["3"]


def test_record_constraint_matches_any_list_element(scope_store: FixtureScopeStore, numbered_scopes: Dict[str, Scope]):
    """
    Test that a constraint on a list record matches scopes having any element satisfying it.

    Args:
        scope_store: A `ScopeStore` on a temporary database file.
        numbered_scopes: Top-level scopes "1" through "4".
    """
    query = scope_store.within_root().query_scope().where_record("tags", equal_to("a")).order_by_scope_id()
    assert names(query.fetch()) == ["1", "4"]


def test_record_constraint_without_match_short_circuits(
    scope_store: FixtureScopeStore, numbered_scopes: Dict[str, Scope]
):
    """
    Test that a key nobody satisfies empties the result, whatever the other keys say.

    Args:
        scope_store: A `ScopeStore` on a temporary database file.
        numbered_scopes: Top-level scopes "1" through "4".
    """
    query = (
        scope_store.within_root()
        .query_scope()
        .where_record("owner", equal_to("carol"))
        .where_record("size", equal_to("10"))
    )
    assert len(query.fetch()) == 0


def test_scope_and_record_constraints_combine(scope_store: FixtureScopeStore, numbered_scopes: Dict[str, Scope]):
    """
    Test that scope identity constraints and record constraints are ANDed.

    Args:
        scope_store: A `ScopeStore` on a temporary database file.
        numbered_scopes: Top-level scopes "1" through "4".
    """
    query = (
        scope_store.within_root()
        .query_scope()
        .where_scope_id(in_([numbered_scopes["1"].id, numbered_scopes["2"].id, numbered_scopes["4"].id]))
        .where_record("owner", equal_to("alice"))
        .order_by_scope_id(QueryOrder.DESC)
    )
    assert names(query.fetch()) == ["4", "1"]


def test_limit_with_offset(scope_store: FixtureScopeStore, numbered_scopes: Dict[str, Scope]):
    """
    Test that the offset skips scopes in the requested order.

    Args:
        scope_store: A `ScopeStore` on a temporary database file.
        numbered_scopes: Top-level scopes "1" through "4".
    """
    query = scope_store.within_root().query_scope().order_by_scope_name().limit(1, 2)
    assert names(query.fetch()) == ["2", "3"]


def test_records_of_other_scopes_are_ignored(scope_store: FixtureScopeStore, scope_tree: Dict[str, Scope]):
    """
    Test that record constraints only consider the candidate scopes' own records.

    Args:
        scope_store: A `ScopeStore` on a temporary database file.
        scope_tree: The scopes of the test tree, by name.
    """
    scope_store.within(scope_tree["11"]).set_record("flag", "on")
    query = scope_store.within_root().query_scope().where_record("flag", equal_to("on"))
    assert len(query.fetch()) == 0
    assert names(scope_store.within("1").query_scope().where_record("flag", equal_to("on")).fetch()) == ["11"]


def test_executor_is_reusable(scope_store: FixtureScopeStore, numbered_scopes: Dict[str, Scope]):
    """
    Test that building on an executor leaves the original untouched.

    Args:
        scope_store: A `ScopeStore` on a temporary database file.
        numbered_scopes: Top-level scopes "1" through "4".
    """
    base_query = scope_store.within_root().query_scope().where_scope_name(starts_with("1"))
    narrowed = base_query.where_record("owner", equal_to("bob"))

    assert names(base_query.fetch()) == ["1"]
    assert names(narrowed.fetch()) == []


def test_missing_parent_raises(scope_store: FixtureScopeStore, scope_tree: Dict[str, Scope]):
    """
    Test that querying below a path that doesn't exist raises `MissingScopeError`.

    Args:
        scope_store: A `ScopeStore` on a temporary database file.
        scope_tree: The scopes of the test tree, by name.
    """
    query = scope_store.within("1/ghost").query_scope().where_scope_name(equal_to("x"))
    with pytest.raises(MissingScopeError, match="1/ghost"):
        query.fetch()
