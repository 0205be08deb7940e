##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Column predicates for Scopestore queries.

A `WhereOperator` knows how to render itself as a parameterized SQL fragment
against a given column. Operators are immutable and can be shared between
queries. They are normally created through the factory functions at the bottom
of this module:

```python
from scopestore.queries import between, equal_to

equal_to("alice").to_sql("value")     # ('value = ?', ['alice'])
between("2", "3").to_sql("value")     # ('value BETWEEN ? AND ?', ['2', '3'])
```
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable, List, Tuple


SqlFragment = Tuple[str, List[Any]]


def _escape_like(value: str) -> str:
    """Escape the LIKE wildcards in `value` so it's matched literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class WhereOperator(ABC):
    """
    Base class for every column predicate.

    Methods:
        to_sql: Render the predicate as a SQL fragment and its parameters.
    """

    @abstractmethod
    def to_sql(self, column: str) -> SqlFragment:
        """
        Render this predicate against `column`.

        Args:
            column: The name of the column the predicate applies to.

        Returns:
            A tuple of the SQL fragment (using `?` placeholders) and its parameters.
        """
        raise NotImplementedError("Subclasses of `WhereOperator` must implement a `to_sql` method.")


@dataclass(frozen=True)
class Comparison(WhereOperator):
    """A binary comparison such as `=`, `<>`, `<`, or `>=`."""

    symbol: str
    value: Any

    def to_sql(self, column: str) -> SqlFragment:
        if self.value is None:
            if self.symbol == "=":
                return f"{column} IS NULL", []
            if self.symbol == "<>":
                return f"{column} IS NOT NULL", []
        return f"{column} {self.symbol} ?", [self.value]


@dataclass(frozen=True)
class Between(WhereOperator):
    """An inclusive range check."""

    low: Any
    high: Any
    negate: bool = False

    def to_sql(self, column: str) -> SqlFragment:
        keyword = "NOT BETWEEN" if self.negate else "BETWEEN"
        return f"{column} {keyword} ? AND ?", [self.low, self.high]


@dataclass(frozen=True)
class In(WhereOperator):
    """A set membership check."""

    values: Tuple[Any, ...]
    negate: bool = False

    def to_sql(self, column: str) -> SqlFragment:
        # Avoid generating invalid SQL like `IN ()`
        if not self.values:
            return ("1 = 1", []) if self.negate else ("1 = 0", [])
        placeholders = ", ".join("?" for _ in self.values)
        keyword = "NOT IN" if self.negate else "IN"
        return f"{column} {keyword} ({placeholders})", list(self.values)


@dataclass(frozen=True)
class Like(WhereOperator):
    """A SQL `LIKE` pattern match using `\\` as the escape character."""

    pattern: str
    negate: bool = False

    def to_sql(self, column: str) -> SqlFragment:
        keyword = "NOT LIKE" if self.negate else "LIKE"
        return f"{column} {keyword} ? ESCAPE '\\'", [self.pattern]


@dataclass(frozen=True)
class IsNull(WhereOperator):
    """A nullness check."""

    negate: bool = False

    def to_sql(self, column: str) -> SqlFragment:
        return (f"{column} IS NOT NULL", []) if self.negate else (f"{column} IS NULL", [])


def equal_to(value: Any) -> WhereOperator:
    """Match rows whose column equals `value`. `None` matches NULL."""
    return Comparison("=", value)


def not_equal_to(value: Any) -> WhereOperator:
    """Match rows whose column differs from `value`. `None` matches non-NULL."""
    return Comparison("<>", value)


def greater_than(value: Any) -> WhereOperator:
    """Match rows whose column is strictly greater than `value`."""
    return Comparison(">", value)


def greater_than_or_equal_to(value: Any) -> WhereOperator:
    """Match rows whose column is greater than or equal to `value`."""
    return Comparison(">=", value)


def less_than(value: Any) -> WhereOperator:
    """Match rows whose column is strictly less than `value`."""
    return Comparison("<", value)


def less_than_or_equal_to(value: Any) -> WhereOperator:
    """Match rows whose column is less than or equal to `value`."""
    return Comparison("<=", value)


def between(low: Any, high: Any) -> WhereOperator:
    """Match rows whose column lies in the inclusive range [`low`, `high`]."""
    return Between(low, high)


def not_between(low: Any, high: Any) -> WhereOperator:
    """Match rows whose column lies outside the inclusive range [`low`, `high`]."""
    return Between(low, high, negate=True)


def in_(values: Iterable[Any]) -> WhereOperator:
    """Match rows whose column is one of `values`. An empty collection matches nothing."""
    return In(tuple(values))


def not_in(values: Iterable[Any]) -> WhereOperator:
    """Match rows whose column is none of `values`. An empty collection matches everything."""
    return In(tuple(values), negate=True)


def contains(substring: str) -> WhereOperator:
    """Match rows whose column contains `substring` literally."""
    return Like(f"%{_escape_like(substring)}%")


def starts_with(prefix: str) -> WhereOperator:
    """Match rows whose column starts with `prefix` literally."""
    return Like(f"{_escape_like(prefix)}%")


def ends_with(suffix: str) -> WhereOperator:
    """Match rows whose column ends with `suffix` literally."""
    return Like(f"%{_escape_like(suffix)}")


def match(pattern: str) -> WhereOperator:
    """Match rows whose column matches the raw SQL LIKE `pattern` (`%` and `_` are wildcards)."""
    return Like(pattern)


def is_null() -> WhereOperator:
    """Match rows whose column is NULL."""
    return IsNull()


def is_not_null() -> WhereOperator:
    """Match rows whose column is not NULL."""
    return IsNull(negate=True)
