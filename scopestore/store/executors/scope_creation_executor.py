##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Creating scopes below a parent scope.
"""

import logging
import sqlite3
from dataclasses import dataclass
from datetime import datetime
from typing import Tuple

from scopestore.exceptions import DuplicateScopeError, InvalidScopeNameError
from scopestore.queries.generic_query import GenericInsertion
from scopestore.store.constants import SCOPE_KEY, SCOPE_TYPE
from scopestore.store.executors.base_executor import BaseExecutor, find_child_scope
from scopestore.store.scope import Scope
from scopestore.store.table import StoreTable
from scopestore.utils import SCOPE_PATH_SEPARATOR


LOG = logging.getLogger(__name__)


def validate_scope_name(name: str):
    """
    Make sure `name` can be used as a scope name.

    Args:
        name: The scope name to check.

    Raises:
        InvalidScopeNameError: If the name is empty, not a string, or contains the path separator.
    """
    if not isinstance(name, str) or not name:
        raise InvalidScopeNameError(f"Scope names must be non-empty strings, got {name!r}.")
    if SCOPE_PATH_SEPARATOR in name:
        raise InvalidScopeNameError(f"Scope name '{name}' must not contain '{SCOPE_PATH_SEPARATOR}'.")


def insert_scope(db: sqlite3.Connection, table: StoreTable, parent: Scope, name: str) -> Scope:
    """
    Insert the identity row of a new scope under `parent`.

    Args:
        db: The connection to run on.
        table: The table holding scopes and records.
        parent: The parent of the new scope.
        name: The name of the new scope.

    Returns:
        The newly created scope.
    """
    timestamp = datetime.now().isoformat()
    scope_id = GenericInsertion(
        table.name,
        {
            table.scope_column: parent.id,
            table.type_column: SCOPE_TYPE,
            table.key_column: SCOPE_KEY,
            table.value_column: name,
            table.created_at_column: timestamp,
            table.updated_at_column: timestamp,
        },
    ).execute(db)
    scope = Scope(id=scope_id, name=name)
    LOG.info(f"Created scope {scope} under {parent}.")
    return scope


def create_scope_chain(
    db: sqlite3.Connection, table: StoreTable, parent: Scope, names: Tuple[str, ...], reuse_existing: bool
) -> Scope:
    """
    Create the scopes `names` as a chain, each one a child of the previous one.

    Args:
        db: The connection to run on.
        table: The table holding scopes and records.
        parent: The scope the chain starts under.
        names: The names of the scopes in the chain.
        reuse_existing: If True, existing scopes along the chain are reused. Otherwise
            an existing scope raises `DuplicateScopeError`.

    Returns:
        The last scope of the chain.

    Raises:
        InvalidScopeNameError: If any name is invalid.
        DuplicateScopeError: If a scope already exists and `reuse_existing` is off.
    """
    for name in names:
        validate_scope_name(name)

    current = parent
    for name in names:
        existing = find_child_scope(db, table, current, name)
        if existing is None:
            current = insert_scope(db, table, current, name)
        elif reuse_existing:
            LOG.debug(f"Reusing existing scope {existing}.")
            current = existing
        else:
            raise DuplicateScopeError(f"A scope named '{name}' already exists under {current}.")
    return current


@dataclass(frozen=True)
class ScopeCreationExecutor(BaseExecutor):
    """
    Creates one scope, or a chain of nested scopes, under the executor's scope.

    Attributes:
        names: The names of the scopes to create, outermost first.
        reuse_existing: Whether scopes that already exist along the chain are reused.
    """

    names: Tuple[str, ...] = ()
    reuse_existing: bool = False

    def execute(self) -> Scope:
        """
        Resolve the scope and create the new scope(s) in one transaction.

        Returns:
            The innermost created (or reused) scope.

        Raises:
            MissingScopeError: If the scope path can't be resolved.
            InvalidScopeNameError: If no name was given or a name is invalid.
            DuplicateScopeError: If a scope already exists and reuse isn't allowed.
        """
        if not self.names:
            raise InvalidScopeNameError("At least one scope name is required.")

        def _create(db: sqlite3.Connection) -> Scope:
            return create_scope_chain(db, self.table, self._resolve(db), self.names, self.reuse_existing)

        return self.transactor.execute_as_transaction(_create)
