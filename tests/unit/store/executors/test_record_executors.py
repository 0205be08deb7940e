##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Tests for the `record_executors.py` module.
"""

from datetime import datetime
from typing import Dict

import pytest

from scopestore.exceptions import BulkDeletionNotAllowedError, ReservedKeyError
from scopestore.queries.generic_query import GenericQuery
from scopestore.queries.where_operators import equal_to
from scopestore.store.constants import SCOPE_KEY
from scopestore.store.scope import Scope
from scopestore.store.table import StoreTable
from tests.fixture_types import FixtureCallable, FixtureScopeStore, FixtureTransactor


@pytest.mark.parametrize(
    "value",
    [
        "text",
        None,
        True,
        42,
        3.5,
        datetime(2024, 5, 6, 7, 8, 9),
        {"config": {"retries": 3}},
        ["a", "b", "c"],
        [1, 2, 3],
        [0.5, 1.5],
        [True, False],
        [1, "mixed"],
    ],
)
def test_record_round_trip(scope_store: FixtureScopeStore, scope_tree: Dict[str, Scope], value):
    """
    Test that a value of every supported type reads back unchanged.

    Args:
        scope_store: A `ScopeStore` on a temporary database file.
        scope_tree: The scopes of the test tree, by name.
        value: The value to store.
    """
    context = scope_store.within("1/12")
    context.set_record("key", value)
    assert context.get_record("key") == value


def test_missing_record_is_none(scope_store: FixtureScopeStore, scope_tree: Dict[str, Scope]):
    """
    Test that reading an absent key gives None.

    Args:
        scope_store: A `ScopeStore` on a temporary database file.
        scope_tree: The scopes of the test tree, by name.
    """
    assert scope_store.within("1").get_record("absent") is None


def test_set_record_replaces_every_row(
    scope_store: FixtureScopeStore, scope_tree: Dict[str, Scope], count_rows: FixtureCallable
):
    """
    Test that writing a key replaces all of its previous rows.

    Args:
        scope_store: A `ScopeStore` on a temporary database file.
        scope_tree: The scopes of the test tree, by name.
        count_rows: A function returning the number of rows in the test table.
    """
    context = scope_store.within("2")
    n_rows = count_rows()

    assert context.set_record("tags", ["a", "b", "c"]) == 3
    assert count_rows() == n_rows + 3

    context.set_record("tags", "single")
    assert count_rows() == n_rows + 1
    assert context.get_record("tags") == "single"


def test_set_record_keeps_creation_time(
    sqlite_transactor: FixtureTransactor,
    store_table: StoreTable,
    scope_store: FixtureScopeStore,
    scope_tree: Dict[str, Scope],
):
    """
    Test that overwriting a record keeps its original creation timestamp.

    Args:
        sqlite_transactor: A `SQLiteTransactor` on a temporary database file.
        store_table: The table used by the test store.
        scope_store: A `ScopeStore` on a temporary database file.
        scope_tree: The scopes of the test tree, by name.
    """
    context = scope_store.within(scope_tree["2"])

    def _timestamps(db):
        rows = (
            GenericQuery(store_table.name)
            .where(store_table.scope_column, equal_to(scope_tree["2"].id))
            .where(store_table.key_column, equal_to("k"))
            .fetch(db)
        )
        return rows[0][store_table.created_at_column], rows[0][store_table.updated_at_column]

    context.set_record("k", 1)
    created_at, _ = sqlite_transactor.query_as_transaction(_timestamps)
    context.set_record("k", 2)
    created_again, updated_at = sqlite_transactor.query_as_transaction(_timestamps)

    assert created_again == created_at
    assert updated_at >= created_at


def test_get_records_excludes_child_scopes(scope_store: FixtureScopeStore, scope_tree: Dict[str, Scope]):
    """
    Test that reading every record of a scope ignores the identity rows of its children.

    Args:
        scope_store: A `ScopeStore` on a temporary database file.
        scope_tree: The scopes of the test tree, by name.
    """
    context = scope_store.within("1")
    context.set_records({"owner": "alice", "size": 3})

    assert context.get_records() == {"owner": "alice", "size": 3}
    assert context.get_records("size", "absent") == {"size": 3}


def test_update_executor_last_value_wins(scope_store: FixtureScopeStore, scope_tree: Dict[str, Scope]):
    """
    Test that putting the same key twice in one update keeps the last value.

    Args:
        scope_store: A `ScopeStore` on a temporary database file.
        scope_tree: The scopes of the test tree, by name.
    """
    context = scope_store.within("2/21")
    context.update_records().put("k", "first").put("other", 1).put("k", "second").execute()
    assert context.get_records() == {"k": "second", "other": 1}


@pytest.mark.parametrize("key", [SCOPE_KEY, ""])
def test_reserved_keys_are_rejected(scope_store: FixtureScopeStore, scope_tree: Dict[str, Scope], key: str):
    """
    Test that the reserved scope key can't be written, read or deleted.

    Args:
        scope_store: A `ScopeStore` on a temporary database file.
        scope_tree: The scopes of the test tree, by name.
        key: The invalid key.
    """
    context = scope_store.within("1")
    with pytest.raises(ReservedKeyError):
        context.set_record(key, "x")
    with pytest.raises(ReservedKeyError):
        context.get_record(key)
    with pytest.raises(ReservedKeyError):
        context.delete_records(key)


def test_delete_records(scope_store: FixtureScopeStore, scope_tree: Dict[str, Scope]):
    """
    Test that deleting keys removes only those records and leaves child scopes alone.

    Args:
        scope_store: A `ScopeStore` on a temporary database file.
        scope_tree: The scopes of the test tree, by name.
    """
    context = scope_store.within("1")
    context.set_records({"a": [1, 2], "b": "x", "c": True})

    assert context.delete_records("a", "b").execute() == 3
    assert context.get_records() == {"c": True}
    assert context.query_scope().fetch().scope_names == {"11", "12"}


def test_delete_every_record_needs_bulk(
    scope_store: FixtureScopeStore, scope_tree: Dict[str, Scope], count_scopes: FixtureCallable
):
    """
    Test that deleting every record requires the bulk flag and keeps child scopes.

    Args:
        scope_store: A `ScopeStore` on a temporary database file.
        scope_tree: The scopes of the test tree, by name.
        count_scopes: A function returning the number of scopes in the test store.
    """
    context = scope_store.within("1")
    context.set_records({"a": 1, "b": 2})

    with pytest.raises(BulkDeletionNotAllowedError):
        context.delete_records().execute()

    assert context.delete_records().allow_bulk().execute() == 2
    assert context.get_records() == {}
    assert count_scopes() == 7


def test_root_records(scope_store: FixtureScopeStore, scope_tree: Dict[str, Scope]):
    """
    Test that records can be stored on the root without being mistaken for scopes.

    Args:
        scope_store: A `ScopeStore` on a temporary database file.
        scope_tree: The scopes of the test tree, by name.
    """
    root = scope_store.within_root()
    root.set_record("version", 2)

    assert root.get_records() == {"version": 2}
    assert root.query_scope().fetch().scope_names == {"1", "2"}
