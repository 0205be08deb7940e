##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
SQLite implementation of the `Transactor` interface.

Every transaction on a database file opens its own `SQLiteConnection`, so a
`SQLiteTransactor` holds no connection state between calls and can be shared
freely. An in-memory database only lives as long as its connection, so a
transactor on `:memory:` keeps a single connection open until `close` is called.
Reads use a deferred `BEGIN` and writes use `BEGIN IMMEDIATE` so that a writer
takes the database lock before issuing its first query.
"""

import logging
import sqlite3
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from scopestore.backends.sqlite.sqlite_connection import IN_MEMORY_DB, SQLiteConnection
from scopestore.backends.transactor import R, Transactor


LOG = logging.getLogger(__name__)


class SQLiteTransactor(Transactor):
    """
    A `Transactor` that runs closures inside SQLite transactions.

    Attributes:
        db_path (Optional[str]): Path to the database file. If None, the configured
            path is looked up each time a connection is opened.

    Methods:
        get_version: Query SQLite for the current version.
        close: Close the connection held for an in-memory database.
    """

    def __init__(self, db_path: Optional[str] = None):
        """
        Initialize the transactor.

        Args:
            db_path: Path to the database file, or `:memory:`. If None, the configured path is used.
        """
        self.db_path: Optional[str] = db_path
        self._memory_connection: Optional[SQLiteConnection] = None

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        if self.db_path != IN_MEMORY_DB:
            with SQLiteConnection(self.db_path) as conn:
                yield conn
            return

        if self._memory_connection is None:
            self._memory_connection = SQLiteConnection(IN_MEMORY_DB)
            self._memory_connection.__enter__()
        yield self._memory_connection.conn

    def _run_in_transaction(self, closure: Callable[[sqlite3.Connection], R], write: bool) -> R:
        """
        Run `closure` inside one transaction.

        Args:
            closure: A callable taking a `sqlite3.Connection` and returning a result.
            write: True to begin an immediate (write) transaction.

        Returns:
            The value returned by `closure`.
        """
        with self._connection() as conn:
            conn.execute("BEGIN IMMEDIATE" if write else "BEGIN")
            try:
                result = closure(conn)
            except Exception:
                LOG.debug("Rolling back SQLite transaction.")
                conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")
            return result

    def get_version(self) -> str:
        """
        Query SQLite for the current version.

        Returns:
            The SQLite version string.
        """
        with self._connection() as conn:
            cursor = conn.execute("SELECT sqlite_version()")
            return cursor.fetchone()[0]

    def close(self):
        """Close the connection held for an in-memory database, discarding its contents."""
        if self._memory_connection is not None:
            self._memory_connection.__exit__(None, None, None)
            self._memory_connection = None
