##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Deleting scopes directly under a parent scope.

Deletions are gated by two opt-in flags. Without `allow_bulk`, a deletion with
no scope or record constraint is refused with `BulkDeletionNotAllowedError`
before anything is removed. Without `allow_recursion`, only the matched scopes
(their identity rows and the rows they own) are removed; the rows of deeper
descendants are left in place.
"""

import logging
import sqlite3
from dataclasses import dataclass, field, replace
from typing import Iterable, Set

from scopestore.exceptions import BulkDeletionNotAllowedError
from scopestore.queries.generic_query import GenericDeletion, GenericQuery
from scopestore.queries.where_operators import WhereOperator, equal_to, in_
from scopestore.store.constants import SCOPE_KEY, SCOPE_TYPE
from scopestore.store.executors.base_executor import BaseExecutor
from scopestore.store.executors.scope_query_executor import query_constrained_scopes
from scopestore.store.requests import ScopeDeletionRequest
from scopestore.store.scope import Scope
from scopestore.store.table import StoreTable


LOG = logging.getLogger(__name__)


def collect_descendant_ids(db: sqlite3.Connection, table: StoreTable, scope_ids: Iterable[int]) -> Set[int]:
    """
    Expand a set of scope ids with the ids of all of their descendants.

    The tree is walked breadth first, one query per level, until a level
    produces no scope that hasn't been seen yet.

    Args:
        db: The connection to query.
        table: The table holding scopes and records.
        scope_ids: The ids to start from.

    Returns:
        The starting ids together with the ids of every transitive descendant.
    """
    visited: Set[int] = set(scope_ids)
    frontier: Set[int] = set(visited)
    while frontier:
        child_ids = (
            GenericQuery(table.name)
            .select(table.id_column)
            .where(table.scope_column, in_(sorted(frontier)))
            .where(table.type_column, equal_to(SCOPE_TYPE))
            .where(table.key_column, equal_to(SCOPE_KEY))
            .fetch_column(db, table.id_column, cast=int)
        )
        frontier = set(child_ids) - visited
        visited |= frontier
    return visited


def delete_scopes(db: sqlite3.Connection, table: StoreTable, parent: Scope, request: ScopeDeletionRequest) -> bool:
    """
    Delete the scopes directly under `parent` matching `request`.

    Args:
        db: The connection to run on. Matching and deleting share it.
        table: The table holding scopes and records.
        parent: The parent scope.
        request: The constraints and flags of the deletion.

    Returns:
        True once the deletion was allowed to run, whether or not any scope matched.

    Raises:
        BulkDeletionNotAllowedError: If the request has no constraint and doesn't allow bulk deletion.
    """
    if not request.has_constraints and not request.allow_bulk:
        raise BulkDeletionNotAllowedError()

    matched_ids = query_constrained_scopes(db, table, parent, request).scope_ids
    if not matched_ids:
        LOG.warning(f"No scopes under {parent} matched the deletion. Nothing was deleted.")
        return True

    deletion_ids = collect_descendant_ids(db, table, matched_ids) if request.allow_recursion else matched_ids

    owned_rows = GenericDeletion(table.name).where(table.scope_column, in_(sorted(deletion_ids))).execute(db)
    identity_rows = GenericDeletion(table.name).where(table.id_column, in_(sorted(matched_ids))).execute(db)

    LOG.info(
        f"Deleted {len(matched_ids)} scope(s) under {parent} "
        f"({len(deletion_ids) - len(matched_ids)} descendant scope(s), {owned_rows + identity_rows} row(s))."
    )
    return True


@dataclass(frozen=True)
class ScopeDeletionExecutor(BaseExecutor):
    """
    Deletes scopes directly under the executor's scope.

    Attributes:
        request: The accumulated constraints and flags.

    Methods:
        where_scope_id: Constrain the scope id.
        where_scope_name: Constrain the scope name.
        where_record: Constrain the value of a record of the scope.
        allow_bulk: Permit deleting without any constraint.
        allow_recursion: Delete every descendant of the matched scopes as well.
        execute: Resolve the scope and run the deletion.
    """

    request: ScopeDeletionRequest = field(default_factory=ScopeDeletionRequest)

    def where_scope_id(self, operator: WhereOperator) -> "ScopeDeletionExecutor":
        return replace(self, request=self.request.where_scope_id(operator))

    def where_scope_name(self, operator: WhereOperator) -> "ScopeDeletionExecutor":
        return replace(self, request=self.request.where_scope_name(operator))

    def where_record(self, key: str, operator: WhereOperator) -> "ScopeDeletionExecutor":
        return replace(self, request=self.request.where_record(key, operator))

    def allow_bulk(self, allow: bool = True) -> "ScopeDeletionExecutor":
        return replace(self, request=self.request.with_bulk(allow))

    def allow_recursion(self, allow: bool = True) -> "ScopeDeletionExecutor":
        return replace(self, request=self.request.with_recursion(allow))

    def execute(self) -> bool:
        """
        Resolve the scope and run the deletion in one transaction.

        Returns:
            True once the deletion was allowed to run.

        Raises:
            MissingScopeError: If the scope path can't be resolved.
            BulkDeletionNotAllowedError: If the deletion has no constraint and bulk deletion isn't allowed.
        """
        return self.transactor.execute_as_transaction(
            lambda db: delete_scopes(db, self.table, self._resolve(db), self.request)
        )
