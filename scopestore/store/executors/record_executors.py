##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Writing, reading, and deleting the records of a scope.

A record is identified by its scope and its key. Writing a record replaces
every row previously stored under the key, keeping the original creation
timestamp. Rows holding the identity of child scopes share the scope column
with records, so every statement here excludes the reserved scope key.
"""

import logging
import sqlite3
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple

from scopestore.exceptions import BulkDeletionNotAllowedError
from scopestore.queries.generic_query import GenericDeletion, GenericInsertion, GenericQuery
from scopestore.queries.query_order import LimitCriterion
from scopestore.queries.where_operators import equal_to, in_, not_equal_to
from scopestore.store.constants import SCOPE_KEY, ValueType
from scopestore.store.executors.base_executor import BaseExecutor
from scopestore.store.requests import validate_record_key
from scopestore.store.scope import Scope
from scopestore.store.table import StoreTable
from scopestore.store.values import decode_value, encode_value


LOG = logging.getLogger(__name__)


def write_record(db: sqlite3.Connection, table: StoreTable, scope: Scope, key: str, value: Any) -> int:
    """
    Replace the value stored under `key` in `scope`.

    Args:
        db: The connection to run on.
        table: The table holding scopes and records.
        scope: The scope owning the record.
        key: The record key.
        value: The new value. Its `ValueType` is inferred from its Python type.

    Returns:
        The number of rows written.
    """
    validate_record_key(key)
    value_type, raw_values = encode_value(value)

    now = datetime.now().isoformat()
    previous = (
        GenericQuery(table.name)
        .select(table.created_at_column)
        .where(table.scope_column, equal_to(scope.id))
        .where(table.key_column, equal_to(key))
        .order_by(table.id_column)
        .limit(LimitCriterion(n_results=1))
        .fetch_column(db, table.created_at_column)
    )
    created_at = previous[0] if previous else now

    GenericDeletion(table.name).where(table.scope_column, equal_to(scope.id)).where(
        table.key_column, equal_to(key)
    ).execute(db)
    for raw in raw_values:
        GenericInsertion(
            table.name,
            {
                table.scope_column: scope.id,
                table.type_column: value_type.value,
                table.key_column: key,
                table.value_column: raw,
                table.created_at_column: created_at,
                table.updated_at_column: now,
            },
        ).execute(db)

    LOG.debug(f"Stored record '{key}' ({value_type.value}, {len(raw_values)} row(s)) in {scope}.")
    return len(raw_values)


def read_records(db: sqlite3.Connection, table: StoreTable, scope: Scope, keys: Tuple[str, ...] = ()) -> Dict[str, Any]:
    """
    Read and decode records of `scope`.

    Args:
        db: The connection to query.
        table: The table holding scopes and records.
        scope: The scope owning the records.
        keys: The keys to read. Every record of the scope is read when empty.

    Returns:
        A dictionary of key to decoded value, in the order the keys were first stored.
        Keys without a record are left out.
    """
    query = (
        GenericQuery(table.name)
        .select(table.type_column, table.key_column, table.value_column)
        .where(table.scope_column, equal_to(scope.id))
        .where(table.key_column, not_equal_to(SCOPE_KEY))
        .order_by(table.id_column)
    )
    if keys:
        query.where(table.key_column, in_(keys))

    types: Dict[str, ValueType] = {}
    raw_values: Dict[str, List[Optional[str]]] = {}
    for row in query.fetch(db):
        key = row[table.key_column]
        types.setdefault(key, ValueType(row[table.type_column]))
        raw_values.setdefault(key, []).append(row[table.value_column])

    return {key: decode_value(types[key], raw_values[key]) for key in raw_values}


def remove_records(db: sqlite3.Connection, table: StoreTable, scope: Scope, keys: Tuple[str, ...] = ()) -> int:
    """
    Delete records of `scope`. Child scopes are left untouched.

    Args:
        db: The connection to run on.
        table: The table holding scopes and records.
        scope: The scope owning the records.
        keys: The keys to delete. Every record of the scope is deleted when empty.

    Returns:
        The number of rows deleted.
    """
    deletion = (
        GenericDeletion(table.name)
        .where(table.scope_column, equal_to(scope.id))
        .where(table.key_column, not_equal_to(SCOPE_KEY))
    )
    if keys:
        deletion.where(table.key_column, in_(keys))

    n_rows = deletion.execute(db)
    if n_rows:
        LOG.info(f"Deleted {n_rows} record row(s) from {scope}.")
    else:
        LOG.warning(f"No records of {scope} matched the deletion. Nothing was deleted.")
    return n_rows


@dataclass(frozen=True)
class RecordUpdateExecutor(BaseExecutor):
    """
    Writes records to the executor's scope.

    Attributes:
        values: (key, value) pairs to write, in order. A key written twice keeps its last value.

    Methods:
        put: Add one record to write.
        put_all: Add every item of a mapping to write.
        execute: Resolve the scope and write the records.
    """

    values: Tuple[Tuple[str, Any], ...] = ()

    def put(self, key: str, value: Any) -> "RecordUpdateExecutor":
        validate_record_key(key)
        return replace(self, values=self.values + ((key, value),))

    def put_all(self, values: Mapping[str, Any]) -> "RecordUpdateExecutor":
        executor = self
        for key, value in values.items():
            executor = executor.put(key, value)
        return executor

    def execute(self) -> int:
        """
        Resolve the scope and write every record in one transaction.

        Returns:
            The number of rows written.
        """
        values = dict(self.values)

        def _write(db: sqlite3.Connection) -> int:
            scope = self._resolve(db)
            return sum(write_record(db, self.table, scope, key, value) for key, value in values.items())

        return self.transactor.execute_as_transaction(_write)


@dataclass(frozen=True)
class RecordReadExecutor(BaseExecutor):
    """
    Reads records of the executor's scope.

    Attributes:
        keys: The keys to read. Every record is read when empty.
    """

    keys: Tuple[str, ...] = ()

    def __post_init__(self):
        for key in self.keys:
            validate_record_key(key)

    def fetch(self) -> Dict[str, Any]:
        """
        Resolve the scope and read its records in one transaction.

        Returns:
            A dictionary of key to decoded value. Missing keys are left out.
        """
        return self.transactor.query_as_transaction(
            lambda db: read_records(db, self.table, self._resolve(db), self.keys)
        )


@dataclass(frozen=True)
class RecordDeletionExecutor(BaseExecutor):
    """
    Deletes records of the executor's scope.

    Attributes:
        keys: The keys to delete.
        bulk: Whether deleting every record (no keys given) is permitted.
    """

    keys: Tuple[str, ...] = ()
    bulk: bool = False

    def __post_init__(self):
        for key in self.keys:
            validate_record_key(key)

    def allow_bulk(self, allow: bool = True) -> "RecordDeletionExecutor":
        return replace(self, bulk=allow)

    def execute(self) -> int:
        """
        Resolve the scope and delete the records in one transaction.

        Returns:
            The number of rows deleted.

        Raises:
            BulkDeletionNotAllowedError: If no key was given and bulk deletion isn't allowed.
        """
        if not self.keys and not self.bulk:
            raise BulkDeletionNotAllowedError(
                "Deleting every record of a scope requires explicitly allowing bulk deletion."
            )
        return self.transactor.execute_as_transaction(
            lambda db: remove_records(db, self.table, self._resolve(db), self.keys)
        )
