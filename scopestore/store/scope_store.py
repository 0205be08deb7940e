##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
This module contains the entry point to everything stored in a scope store.

```python
store = ScopeStore()
store.within_root().create_scopes("experiments", "run1")
store.within("experiments/run1").set_record("owner", "alice")
runs = store.within("experiments").query_scope().where_record("owner", equal_to("alice")).fetch()
```
"""

import logging
from typing import Any, Dict, Mapping, Optional, Union

from scopestore.backends.sqlite.sqlite_transactor import SQLiteTransactor
from scopestore.backends.transactor import Transactor
from scopestore.store.executors.base_executor import resolve_scope
from scopestore.store.executors.record_executors import (
    RecordDeletionExecutor,
    RecordReadExecutor,
    RecordUpdateExecutor,
)
from scopestore.store.executors.scope_creation_executor import ScopeCreationExecutor
from scopestore.store.executors.scope_deletion_executor import ScopeDeletionExecutor
from scopestore.store.executors.scope_query_executor import ScopeQueryExecutor
from scopestore.store.scope import ROOT_SCOPE, ResolvedScope, Scope, ScopeReference, UnresolvedScope
from scopestore.store.table import StoreTable
from scopestore.utils import split_scope_path


LOG = logging.getLogger(__name__)


class ScopeContext:
    """
    A scope, resolved or not, from which executors are built.

    Building an executor does no I/O. A path that doesn't exist is only reported
    when an executor runs, as a `MissingScopeError`.

    Attributes:
        transactor (backends.transactor.Transactor): Runs every executor built from this context.
        table (store.table.StoreTable): The table holding scopes and records.
        reference (store.scope.ScopeReference): The scope this context points at.

    Methods:
        resolve: Look the scope up and return it.
        query_scope: Build a query over the scopes directly under this scope.
        delete_scope: Build a deletion of the scopes directly under this scope.
        create_scope: Create a single child scope.
        create_scopes: Create a chain of nested child scopes, reusing existing ones.
        update_records: Build a record update on this scope.
        read_records: Build a record read on this scope.
        delete_records: Build a record deletion on this scope.
        set_record: Write one record.
        set_records: Write several records.
        get_record: Read one record.
        get_records: Read several records.
    """

    def __init__(self, transactor: Transactor, table: StoreTable, reference: ScopeReference):
        self.transactor: Transactor = transactor
        self.table: StoreTable = table
        self.reference: ScopeReference = reference

    def __str__(self) -> str:
        if isinstance(self.reference, ResolvedScope):
            return f"ScopeContext({self.reference.scope})"
        return f"ScopeContext('{self.reference.path}')"

    def resolve(self) -> Scope:
        """
        Look the scope of this context up.

        Returns:
            The concrete scope.

        Raises:
            MissingScopeError: If the scope path can't be resolved.
        """
        return self.transactor.query_as_transaction(lambda db: resolve_scope(db, self.table, self.reference))

    def query_scope(self) -> ScopeQueryExecutor:
        return ScopeQueryExecutor(self.transactor, self.table, self.reference)

    def delete_scope(self) -> ScopeDeletionExecutor:
        return ScopeDeletionExecutor(self.transactor, self.table, self.reference)

    def create_scope(self, name: str) -> Scope:
        """
        Create a child scope called `name`.

        Args:
            name: The name of the new scope.

        Returns:
            The new scope.

        Raises:
            DuplicateScopeError: If a child with this name already exists.
            InvalidScopeNameError: If the name is empty or contains the path separator.
        """
        return ScopeCreationExecutor(self.transactor, self.table, self.reference, names=(name,)).execute()

    def create_scopes(self, *names: str) -> Scope:
        """
        Create the chain `names[0]/names[1]/...` below this scope.

        Scopes that already exist along the chain are reused. Names may also be
        given as paths, e.g. `create_scopes("a/b", "c")`.

        Returns:
            The innermost scope of the chain.
        """
        return ScopeCreationExecutor(
            self.transactor, self.table, self.reference, names=tuple(split_scope_path(names)), reuse_existing=True
        ).execute()

    def update_records(self) -> RecordUpdateExecutor:
        return RecordUpdateExecutor(self.transactor, self.table, self.reference)

    def read_records(self, *keys: str) -> RecordReadExecutor:
        return RecordReadExecutor(self.transactor, self.table, self.reference, keys=keys)

    def delete_records(self, *keys: str) -> RecordDeletionExecutor:
        return RecordDeletionExecutor(self.transactor, self.table, self.reference, keys=keys)

    def set_record(self, key: str, value: Any) -> int:
        return self.update_records().put(key, value).execute()

    def set_records(self, values: Mapping[str, Any]) -> int:
        return self.update_records().put_all(values).execute()

    def get_record(self, key: str) -> Any:
        """
        Read the record stored under `key`.

        Args:
            key: The record key.

        Returns:
            The decoded value, or None if there is no such record.
        """
        return self.read_records(key).fetch().get(key)

    def get_records(self, *keys: str) -> Dict[str, Any]:
        return self.read_records(*keys).fetch()


class ScopeStore:
    """
    High-level interface to a scope store.

    Creating a `ScopeStore` makes sure its table exists.

    Attributes:
        transactor (backends.transactor.Transactor): Runs every transaction of the store.
        table (store.table.StoreTable): The table holding scopes and records.

    Methods:
        within_root: Get a context for the root scope.
        within: Get a context for a scope given by path or by value.
        get_db_version: Retrieve the version of the database.
    """

    def __init__(self, transactor: Optional[Transactor] = None, table: Optional[StoreTable] = None):
        """
        Initialize the store and create its table if needed.

        Args:
            transactor: The transactor to use. Defaults to a `SQLiteTransactor` on the configured database.
            table: The table to use. Defaults to the configured table.
        """
        self.transactor: Transactor = transactor if transactor is not None else SQLiteTransactor()
        self.table: StoreTable = table if table is not None else StoreTable.from_config()
        self.transactor.execute_as_transaction(self.table.create_table_if_not_exists)

    def within_root(self) -> ScopeContext:
        return ScopeContext(self.transactor, self.table, ResolvedScope(ROOT_SCOPE))

    def within(self, scope_or_path: Union[Scope, str, None], *segments: str) -> ScopeContext:
        """
        Get a context for a scope.

        Args:
            scope_or_path: Either a `Scope` obtained from this store, or a path such as
                `"experiments/run1"`. None stands for the root.
            segments: Further path segments, below `scope_or_path`.

        Returns:
            A `ScopeContext`. No lookup happens until an executor built from it runs.
        """
        if isinstance(scope_or_path, Scope):
            if not segments:
                return ScopeContext(self.transactor, self.table, ResolvedScope(scope_or_path))
            reference = UnresolvedScope(tuple(split_scope_path(segments)), base=scope_or_path)
        else:
            path = [] if scope_or_path is None else [scope_or_path]
            reference = UnresolvedScope(tuple(split_scope_path(path + list(segments))))

        if not reference.segments:
            return ScopeContext(self.transactor, self.table, ResolvedScope(reference.base))
        return ScopeContext(self.transactor, self.table, reference)

    def get_db_version(self) -> str:
        return self.transactor.get_version()
