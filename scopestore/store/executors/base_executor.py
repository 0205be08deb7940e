##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Shared pieces of every executor: the executor base class, scope path
resolution, and the scope identity query.

Scope path resolution walks the tree one segment at a time. Starting from the
base scope (the root unless stated otherwise), each segment is looked up
among the children of the current scope by the name stored in their identity
rows. The first segment without a match aborts the walk with a
`MissingScopeError` naming the full path.
"""

import logging
import sqlite3
from dataclasses import dataclass
from typing import Optional

from scopestore.backends.transactor import Transactor
from scopestore.exceptions import MissingScopeError
from scopestore.queries.generic_query import GenericQuery
from scopestore.queries.query_order import LimitCriterion
from scopestore.queries.where_operators import equal_to
from scopestore.store.constants import SCOPE_KEY, SCOPE_TYPE
from scopestore.store.scope import ResolvedScope, Scope, ScopeReference
from scopestore.store.table import StoreTable


LOG = logging.getLogger(__name__)


def scope_identity_query(table: StoreTable) -> GenericQuery:
    """
    Start a query selecting the id and name of scope identity rows.

    Args:
        table: The table holding scopes and records.

    Returns:
        A `GenericQuery` restricted to identity rows.
    """
    return (
        GenericQuery(table.name)
        .select(table.id_column, table.value_column)
        .where(table.type_column, equal_to(SCOPE_TYPE))
        .where(table.key_column, equal_to(SCOPE_KEY))
    )


def row_to_scope(table: StoreTable, row: sqlite3.Row) -> Scope:
    """Build a `Scope` from an identity row."""
    return Scope(id=int(row[table.id_column]), name=row[table.value_column])


def find_child_scope(db: sqlite3.Connection, table: StoreTable, parent: Scope, name: str) -> Optional[Scope]:
    """
    Look up the child of `parent` called `name`.

    If several siblings share the name, the one with the lowest id is returned.

    Args:
        db: The connection to query.
        table: The table holding scopes and records.
        parent: The scope whose children are searched.
        name: The name of the child.

    Returns:
        The child scope, or None if there is no such child.
    """
    rows = (
        scope_identity_query(table)
        .where(table.scope_column, equal_to(parent.id))
        .where(table.value_column, equal_to(name))
        .order_by(table.id_column)
        .limit(LimitCriterion(n_results=1))
        .fetch(db)
    )
    return row_to_scope(table, rows[0]) if rows else None


def resolve_scope(db: sqlite3.Connection, table: StoreTable, reference: ScopeReference) -> Scope:
    """
    Turn a scope reference into a concrete scope.

    Args:
        db: The connection to query.
        table: The table holding scopes and records.
        reference: Either a `ResolvedScope` or an `UnresolvedScope`.

    Returns:
        The concrete scope. An unresolved reference with no segments resolves to its base.

    Raises:
        MissingScopeError: If a segment of the path has no matching child scope.
    """
    if isinstance(reference, ResolvedScope):
        return reference.scope

    current = reference.base
    for segment in reference.segments:
        child = find_child_scope(db, table, current, segment)
        if child is None:
            LOG.debug(f"Could not find scope '{segment}' under {current} while resolving '{reference.path}'.")
            raise MissingScopeError(reference.path)
        current = child

    LOG.debug(f"Resolved scope path '{reference.path}' to {current}.")
    return current


@dataclass(frozen=True)
class BaseExecutor:
    """
    Base class for every executor.

    An executor binds a transactor, the store table, and a (possibly unresolved)
    scope. Executors are immutable: builder methods on subclasses return new
    executors, and nothing touches the store until `execute` or `fetch` runs.

    Attributes:
        transactor: Runs the executor's work inside one transaction.
        table: The table holding scopes and records.
        scope: The scope the executor works within.
    """

    transactor: Transactor
    table: StoreTable
    scope: ScopeReference

    def _resolve(self, db: sqlite3.Connection) -> Scope:
        return resolve_scope(db, self.table, self.scope)
