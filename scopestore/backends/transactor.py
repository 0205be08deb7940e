##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
This module defines the abstract base class for all transactors in Scopestore.

A transactor runs a closure inside a single transaction. The closure receives
a connection handle, may issue any number of sequential queries and writes
through it, and its return value is handed back to the caller once the
transaction commits. If the closure raises, the transaction is rolled back and
the exception propagates unchanged.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, TypeVar


R = TypeVar("R")


class Transactor(ABC):
    """
    Base class for all transactors supported in Scopestore.

    Methods:
        query_as_transaction: Run a read-only closure inside one transaction.
        execute_as_transaction: Run a closure that writes inside one transaction.
        get_version: Query the backend for its version.
    """

    def query_as_transaction(self, query: Callable[[Any], R]) -> R:
        """
        Run a read-only closure inside one transaction so that every query it
        issues observes the same snapshot.

        Args:
            query: A callable taking a connection handle and returning a result.

        Returns:
            The value returned by `query`.
        """
        return self._run_in_transaction(query, write=False)

    def execute_as_transaction(self, execution: Callable[[Any], R]) -> R:
        """
        Run a closure that modifies the store inside one transaction. Either every
        write issued by the closure is committed or none of them are.

        Args:
            execution: A callable taking a connection handle and returning a result.

        Returns:
            The value returned by `execution`.
        """
        return self._run_in_transaction(execution, write=True)

    @abstractmethod
    def _run_in_transaction(self, closure: Callable[[Any], R], write: bool) -> R:
        """
        Open a connection, run `closure` inside a transaction, and commit or roll back.

        Args:
            closure: A callable taking a connection handle and returning a result.
            write: True if the closure is expected to write to the store.

        Returns:
            The value returned by `closure`.
        """
        raise NotImplementedError("Subclasses of `Transactor` must implement a `_run_in_transaction` method.")

    @abstractmethod
    def get_version(self) -> str:
        """
        Query the backend for the current version.

        Returns:
            A string representing the current version of the backend.
        """
        raise NotImplementedError("Subclasses of `Transactor` must implement a `get_version` method.")
