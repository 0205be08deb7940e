##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Querying the scopes directly under a parent scope.

A query runs in three stages inside a single transaction:

1. Scope identity: select the identity rows under the parent that satisfy
   every scope id and scope name constraint.
2. Record constraints: for each constrained key, keep only the candidates
   having a record under that key that satisfies every operator of the key.
   Each key's query runs against the candidates that survived the previous
   key, so the candidate set can only shrink.
3. Ordering and limit: if requested, re-select the surviving identity rows
   with the ordering and limit applied. This is skipped when neither is set.
"""

import logging
import sqlite3
from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Set, Tuple

from scopestore.queries.generic_query import GenericQuery
from scopestore.queries.query_order import LimitCriterion, QueryOrder
from scopestore.queries.where_operators import WhereOperator, equal_to, in_
from scopestore.store.executors.base_executor import BaseExecutor, row_to_scope, scope_identity_query
from scopestore.store.requests import ScopeConstraints, ScopeField, ScopeQueryRequest
from scopestore.store.scope import Scope, ScopeCollection
from scopestore.store.table import StoreTable


LOG = logging.getLogger(__name__)


def scope_field_column(table: StoreTable, scope_field: ScopeField) -> str:
    """Map a scope field to the column of the identity row holding it."""
    return table.id_column if scope_field == ScopeField.ID else table.value_column


def query_by_scope_constraints(
    db: sqlite3.Connection,
    table: StoreTable,
    parent: Scope,
    scope_constraints: Tuple[Tuple[ScopeField, WhereOperator], ...],
) -> ScopeCollection:
    """
    Select the scopes directly under `parent` that satisfy every scope constraint.

    Args:
        db: The connection to query.
        table: The table holding scopes and records.
        parent: The parent scope.
        scope_constraints: (field, operator) pairs to AND together.

    Returns:
        The matching scopes.
    """
    query = scope_identity_query(table).where(table.scope_column, equal_to(parent.id))
    for scope_field, operator in scope_constraints:
        query.where(scope_field_column(table, scope_field), operator)

    return ScopeCollection.of(row_to_scope(table, row) for row in query.fetch(db))


def query_by_record_constraints(
    db: sqlite3.Connection,
    table: StoreTable,
    scopes: ScopeCollection,
    record_constraints: Dict[str, Tuple[WhereOperator, ...]],
) -> ScopeCollection:
    """
    Narrow `scopes` down to those whose records satisfy every record constraint.

    Args:
        db: The connection to query.
        table: The table holding scopes and records.
        scopes: The candidate scopes.
        record_constraints: Operators per record key.

    Returns:
        The candidate scopes that satisfy every key, in their original order.
    """
    if not scopes or not record_constraints:
        return scopes

    scope_ids: Set[int] = scopes.scope_ids
    for key, operators in record_constraints.items():
        query = (
            GenericQuery(table.name)
            .select(table.scope_column)
            .where(table.scope_column, in_(sorted(scope_ids)))
            .where(table.key_column, equal_to(key))
        )
        for operator in operators:
            query.where(table.value_column, operator)

        scope_ids = set(query.fetch_column(db, table.scope_column, cast=int))
        LOG.debug(f"{len(scope_ids)} candidate scope(s) left after constraining record '{key}'.")
        if not scope_ids:
            break

    return scopes.filter_by_ids(scope_ids)


def query_by_order_constraints(
    db: sqlite3.Connection,
    table: StoreTable,
    scopes: ScopeCollection,
    order_criteria: Tuple[Tuple[ScopeField, QueryOrder], ...],
    limit_criterion: Optional[LimitCriterion],
) -> ScopeCollection:
    """
    Re-select `scopes` with ordering and limit applied.

    Args:
        db: The connection to query.
        table: The table holding scopes and records.
        scopes: The surviving candidate scopes.
        order_criteria: (field, order) pairs applied in order.
        limit_criterion: The optional offset/limit pair.

    Returns:
        The ordered and limited scopes, or `scopes` untouched if there's nothing to apply.
    """
    if not scopes or (not order_criteria and limit_criterion is None):
        return scopes

    query = scope_identity_query(table).where(table.id_column, in_(sorted(scopes.scope_ids)))
    for scope_field, order in order_criteria:
        query.order_by(scope_field_column(table, scope_field), order)
    if limit_criterion is not None:
        query.limit(limit_criterion)

    return ScopeCollection.of(row_to_scope(table, row) for row in query.fetch(db))


def query_constrained_scopes(
    db: sqlite3.Connection, table: StoreTable, parent: Scope, constraints: ScopeConstraints
) -> ScopeCollection:
    """
    Run the scope identity and record constraint stages.

    Args:
        db: The connection to query.
        table: The table holding scopes and records.
        parent: The parent scope.
        constraints: The scope and record constraints.

    Returns:
        The scopes under `parent` satisfying every constraint.
    """
    scopes = query_by_scope_constraints(db, table, parent, constraints.scope_constraints)
    return query_by_record_constraints(db, table, scopes, constraints.record_constraints_by_key)


def query_scopes(
    db: sqlite3.Connection, table: StoreTable, parent: Scope, request: ScopeQueryRequest
) -> ScopeCollection:
    """
    Run every stage of a scope query.

    Args:
        db: The connection to query. All stages use it, so they observe one snapshot.
        table: The table holding scopes and records.
        parent: The parent scope.
        request: The query to run.

    Returns:
        The matching scopes.
    """
    scopes = query_constrained_scopes(db, table, parent, request)
    return query_by_order_constraints(db, table, scopes, request.order_criteria, request.limit_criterion)


@dataclass(frozen=True)
class ScopeQueryExecutor(BaseExecutor):
    """
    Fetches the scopes directly under the executor's scope.

    Attributes:
        request: The accumulated query.

    Methods:
        where_scope_id: Constrain the scope id.
        where_scope_name: Constrain the scope name.
        where_record: Constrain the value of a record of the scope.
        order_by_scope_id: Order the results by scope id.
        order_by_scope_name: Order the results by scope name.
        limit: Limit the number of results, optionally with an offset.
        fetch: Resolve the scope and run the query.
    """

    request: ScopeQueryRequest = field(default_factory=ScopeQueryRequest)

    def where_scope_id(self, operator: WhereOperator) -> "ScopeQueryExecutor":
        """Constrain the ids of the returned scopes. Constraints accumulate."""
        return replace(self, request=self.request.where_scope_id(operator))

    def where_scope_name(self, operator: WhereOperator) -> "ScopeQueryExecutor":
        return replace(self, request=self.request.where_scope_name(operator))

    def where_record(self, key: str, operator: WhereOperator) -> "ScopeQueryExecutor":
        """Only return scopes owning a record `key` whose stored value matches `operator`."""
        return replace(self, request=self.request.where_record(key, operator))

    def order_by_scope_id(self, order: QueryOrder = QueryOrder.ASC) -> "ScopeQueryExecutor":
        return replace(self, request=self.request.order_by_scope_id(order))

    def order_by_scope_name(self, order: QueryOrder = QueryOrder.ASC) -> "ScopeQueryExecutor":
        return replace(self, request=self.request.order_by_scope_name(order))

    def limit(self, offset_or_limit: int, limit: Optional[int] = None) -> "ScopeQueryExecutor":
        """
        Limit the number of returned scopes.

        `limit(n)` returns at most `n` scopes and `limit(offset, n)` skips the first
        `offset` scopes before returning at most `n`. A later call replaces an earlier one.

        Args:
            offset_or_limit: The limit when called with one argument, the offset otherwise.
            limit: The limit when called with two arguments.

        Returns:
            A new executor with the limit set.
        """
        return replace(self, request=self.request.limit(offset_or_limit, limit))

    def fetch(self) -> ScopeCollection:
        """
        Resolve the scope and run the query in one transaction.

        Returns:
            The matching scopes.

        Raises:
            MissingScopeError: If the scope path can't be resolved.
        """

        def _fetch(db: sqlite3.Connection) -> ScopeCollection:
            return query_scopes(db, self.table, self._resolve(db), self.request)

        scopes = self.transactor.query_as_transaction(_fetch)
        LOG.debug(f"Fetched {len(scopes)} scope(s).")
        return scopes
