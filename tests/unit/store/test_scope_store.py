##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Tests for the `scope_store.py` module.
"""

import os
from typing import Dict

import pytest

from scopestore.backends.sqlite.sqlite_transactor import SQLiteTransactor
from scopestore.exceptions import MissingScopeError
from scopestore.store.scope import ROOT_SCOPE, ResolvedScope, Scope, UnresolvedScope
from scopestore.store.scope_store import ScopeContext, ScopeStore
from scopestore.store.table import StoreTable
from tests.fixture_types import FixtureModification, FixtureScopeStore


def test_store_creates_table(scope_store: FixtureScopeStore, store_table: StoreTable):
    """
    Test that creating a store creates its table, and that the store starts empty.

    Args:
        scope_store: An empty `ScopeStore`.
        store_table: The table used by the test store.
    """
    assert scope_store.table is store_table
    assert len(scope_store.within_root().query_scope().fetch()) == 0


def test_default_store_uses_config(config: FixtureModification):
    """
    Test that a store built without arguments uses the configured database file and table.

    Args:
        config: A fixture pointing the CONFIG object at a temporary database file.
    """
    store = ScopeStore()
    store.within_root().create_scope("configured")

    assert isinstance(store.transactor, SQLiteTransactor)
    assert os.path.exists(config)
    assert ScopeStore().within("configured").resolve().name == "configured"


def test_reopening_store_keeps_data(sqlite_db_path: str, store_table: StoreTable):
    """
    Test that a second store on the same file sees what the first one wrote.

    Args:
        sqlite_db_path: The path to the test database file.
        store_table: The table used by the test store.
    """
    first = ScopeStore(SQLiteTransactor(sqlite_db_path), store_table)
    first.within_root().create_scopes("a", "b")
    first.within("a/b").set_record("k", [1, 2])

    second = ScopeStore(SQLiteTransactor(sqlite_db_path), store_table)
    assert second.within("a", "b").get_record("k") == [1, 2]


def test_within_root_is_resolved(scope_store: FixtureScopeStore):
    """
    Test that the root context needs no lookup.

    Args:
        scope_store: An empty `ScopeStore`.
    """
    context = scope_store.within_root()
    assert context.reference == ResolvedScope(ROOT_SCOPE)
    assert context.resolve() == ROOT_SCOPE


@pytest.mark.parametrize("path", [None, "", "/"])
def test_within_empty_path_is_root(scope_store: FixtureScopeStore, path: str):
    """
    Test that an empty path points at the root.

    Args:
        scope_store: An empty `ScopeStore`.
        path: A path without any segment.
    """
    assert scope_store.within(path).reference == ResolvedScope(ROOT_SCOPE)


def test_within_path_is_lazy(scope_store: FixtureScopeStore):
    """
    Test that building a context for a missing path doesn't raise until it is used.

    Args:
        scope_store: An empty `ScopeStore`.
    """
    context = scope_store.within("does/not", "exist")
    assert context.reference == UnresolvedScope(("does", "not", "exist"))
    assert "does/not/exist" in str(context)

    with pytest.raises(MissingScopeError):
        context.resolve()


def test_within_scope(scope_store: FixtureScopeStore, scope_tree: Dict[str, Scope]):
    """
    Test contexts built from a `Scope`, alone and followed by further segments.

    Args:
        scope_store: A `ScopeStore` on a temporary database file.
        scope_tree: The scopes of the test tree, by name.
    """
    assert scope_store.within(scope_tree["12"]).reference == ResolvedScope(scope_tree["12"])

    below = scope_store.within(scope_tree["1"], "12/122")
    assert below.reference == UnresolvedScope(("12", "122"), base=scope_tree["1"])
    assert below.resolve() == scope_tree["122"]


def test_context_str(scope_store: FixtureScopeStore, scope_tree: Dict[str, Scope]):
    """
    Test the string form of a resolved context.

    Args:
        scope_store: A `ScopeStore` on a temporary database file.
        scope_tree: The scopes of the test tree, by name.
    """
    assert str(scope_store.within_root()) == "ScopeContext(<root>)"
    assert str(scope_store.within(scope_tree["2"])) == f"ScopeContext(2 (id={scope_tree['2'].id}))"


def test_get_db_version(scope_store: FixtureScopeStore):
    """
    Test that the store reports the version of the SQLite library.

    Args:
        scope_store: An empty `ScopeStore`.
    """
    assert scope_store.get_db_version().count(".") == 2


def test_context_shares_store_objects(scope_store: FixtureScopeStore):
    """
    Test that contexts use the transactor and table of the store that built them.

    Args:
        scope_store: An empty `ScopeStore`.
    """
    context = scope_store.within("x")
    assert isinstance(context, ScopeContext)
    assert context.transactor is scope_store.transactor
    assert context.table is scope_store.table
