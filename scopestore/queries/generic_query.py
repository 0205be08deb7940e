##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Builders for parameterized SQL statements.

`GenericQuery`, `GenericDeletion`, and `GenericInsertion` turn column names,
`WhereOperator` predicates, ordering, and limit criteria into SQL text plus a
parameter list, then run it on a connection handed to them by a transactor.
Column and table names are never taken from user input; every value is passed
as a parameter.
"""

import logging
import sqlite3
from typing import Any, Callable, Dict, List, Optional, Tuple

from scopestore.queries.query_order import LimitCriterion, QueryOrder
from scopestore.queries.where_operators import WhereOperator


LOG = logging.getLogger(__name__)


def build_where_clause(constraints: List[Tuple[str, WhereOperator]]) -> Tuple[str, List[Any]]:
    """
    Build the SQL WHERE clause and associated parameter list from a list of constraints.

    Args:
        constraints: A list of (column, operator) pairs that are ANDed together.

    Returns:
        A tuple of (where_clause, params). The clause is empty when there are no constraints.
    """
    if not constraints:
        return "", []

    conditions = []
    params = []
    for column, operator in constraints:
        condition, condition_params = operator.to_sql(column)
        conditions.append(condition)
        params.extend(condition_params)

    return "WHERE " + " AND ".join(conditions), params


class GenericQuery:
    """
    Builder for a single-table SELECT statement.

    Attributes:
        table: The name of the table to select from.

    Methods:
        select: Choose the columns to return.
        where: Add a predicate; every predicate is ANDed.
        order_by: Add an ordering criterion; criteria apply in the order they were added.
        limit: Set the offset/limit pair.
        to_sql: Render the statement and its parameters.
        fetch: Run the statement and return every row.
        fetch_column: Run the statement and extract one column from every row.
    """

    def __init__(self, table: str):
        self.table: str = table
        self._columns: List[str] = []
        self._constraints: List[Tuple[str, WhereOperator]] = []
        self._orders: List[Tuple[str, QueryOrder]] = []
        self._limit: Optional[LimitCriterion] = None

    def select(self, *columns: str) -> "GenericQuery":
        self._columns.extend(columns)
        return self

    def where(self, column: str, operator: WhereOperator) -> "GenericQuery":
        self._constraints.append((column, operator))
        return self

    def order_by(self, column: str, order: QueryOrder = QueryOrder.ASC) -> "GenericQuery":
        self._orders.append((column, order))
        return self

    def limit(self, criterion: LimitCriterion) -> "GenericQuery":
        self._limit = criterion
        return self

    def to_sql(self) -> Tuple[str, List[Any]]:
        """
        Render this query.

        Returns:
            A tuple of the SQL statement and its parameters.
        """
        columns_str = ", ".join(self._columns) if self._columns else "*"
        where_clause, params = build_where_clause(self._constraints)

        parts = [f"SELECT {columns_str} FROM {self.table}"]
        if where_clause:
            parts.append(where_clause)
        if self._orders:
            parts.append("ORDER BY " + ", ".join(f"{column} {order.value}" for column, order in self._orders))
        if self._limit is not None:
            parts.append("LIMIT ? OFFSET ?")
            params.extend([self._limit.n_results, self._limit.offset])

        return " ".join(parts), params

    def fetch(self, db: sqlite3.Connection) -> List[sqlite3.Row]:
        """
        Run this query on `db`.

        Args:
            db: The connection to run the query on.

        Returns:
            Every matching row.
        """
        query, params = self.to_sql()
        LOG.debug(f"SQLite query: {query}")
        LOG.debug(f"SQLite params: {params}")
        return db.execute(query, params).fetchall()

    def fetch_column(self, db: sqlite3.Connection, column: str, cast: Callable[[Any], Any] = None) -> List[Any]:
        """
        Run this query on `db` and extract a single column from each row.

        Args:
            db: The connection to run the query on.
            column: The column to extract. It must be one of the selected columns.
            cast: An optional callable applied to every extracted value.

        Returns:
            The extracted values, in row order.
        """
        values = [row[column] for row in self.fetch(db)]
        if cast is not None:
            values = [cast(value) for value in values]
        return values


class GenericDeletion:
    """
    Builder for a single-table DELETE statement.

    Methods:
        where: Add a predicate; every predicate is ANDed.
        to_sql: Render the statement and its parameters.
        execute: Run the statement and return the number of deleted rows.
    """

    def __init__(self, table: str):
        self.table: str = table
        self._constraints: List[Tuple[str, WhereOperator]] = []

    def where(self, column: str, operator: WhereOperator) -> "GenericDeletion":
        self._constraints.append((column, operator))
        return self

    def to_sql(self) -> Tuple[str, List[Any]]:
        where_clause, params = build_where_clause(self._constraints)
        statement = f"DELETE FROM {self.table}"
        if where_clause:
            statement = f"{statement} {where_clause}"
        return statement, params

    def execute(self, db: sqlite3.Connection) -> int:
        """
        Run this deletion on `db`.

        Args:
            db: The connection to run the deletion on.

        Returns:
            The number of rows deleted.
        """
        statement, params = self.to_sql()
        LOG.debug(f"SQLite deletion: {statement}")
        LOG.debug(f"SQLite params: {params}")
        return db.execute(statement, params).rowcount


class GenericInsertion:
    """
    Builder for a single-row INSERT statement.

    Methods:
        to_sql: Render the statement and its parameters.
        execute: Run the statement and return the id of the new row.
    """

    def __init__(self, table: str, values: Dict[str, Any]):
        self.table: str = table
        self.values: Dict[str, Any] = dict(values)

    def to_sql(self) -> Tuple[str, Dict[str, Any]]:
        columns_str = ", ".join(self.values)
        placeholders_str = ", ".join(f":{name}" for name in self.values)
        return f"INSERT INTO {self.table} ({columns_str}) VALUES ({placeholders_str})", dict(self.values)

    def execute(self, db: sqlite3.Connection) -> int:
        """
        Run this insertion on `db`.

        Args:
            db: The connection to run the insertion on.

        Returns:
            The id of the inserted row.
        """
        statement, params = self.to_sql()
        LOG.debug(f"SQLite insertion: {statement}")
        LOG.debug(f"SQLite params: {params}")
        return db.execute(statement, params).lastrowid
