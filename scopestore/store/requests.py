##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Immutable request values describing scope queries and scope deletions.

A request collects constraints on the scope identity (id or name), constraints
on the values of a scope's records (several per key, ANDed), and, for queries,
ordering and limit criteria. Every builder method returns a new request; the
original is never modified, so a request can be shared and reused freely.

```python
request = (
    ScopeQueryRequest()
    .where_scope_name(between("2", "3"))
    .where_record("owner", equal_to("alice"))
    .order_by_scope_name(QueryOrder.DESC)
    .limit(1)
)
```
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Optional, Tuple

from scopestore.exceptions import ReservedKeyError
from scopestore.queries.query_order import LimitCriterion, QueryOrder
from scopestore.queries.where_operators import WhereOperator
from scopestore.store.constants import SCOPE_KEY


class ScopeField(Enum):
    """
    The two projections of a scope identity row that can be constrained or ordered.

    Attributes:
        ID (str): The scope id.
        NAME (str): The scope name.
    """

    ID: str = "id"
    NAME: str = "name"


def validate_record_key(key: str):
    """
    Make sure `key` can be used as a record key.

    Args:
        key: The record key to check.

    Raises:
        ReservedKeyError: If the key is empty or is the reserved scope key.
    """
    if not isinstance(key, str) or not key:
        raise ReservedKeyError(f"Record keys must be non-empty strings, got {key!r}.")
    if key == SCOPE_KEY:
        raise ReservedKeyError(f"The record key '{SCOPE_KEY}' is reserved for scope names.")


@dataclass(frozen=True)
class ScopeConstraints:
    """
    Constraints on scope identity and on record values.

    Attributes:
        scope_constraints: (field, operator) pairs on the scope identity, ANDed together.
        record_constraints: (key, operators) pairs. Keys are unique and keep the order they
            were first constrained in; the operators of one key are ANDed together.
    """

    scope_constraints: Tuple[Tuple[ScopeField, WhereOperator], ...] = ()
    record_constraints: Tuple[Tuple[str, Tuple[WhereOperator, ...]], ...] = ()

    def where_scope_id(self, operator: WhereOperator):
        return replace(self, scope_constraints=self.scope_constraints + ((ScopeField.ID, operator),))

    def where_scope_name(self, operator: WhereOperator):
        return replace(self, scope_constraints=self.scope_constraints + ((ScopeField.NAME, operator),))

    def where_record(self, key: str, operator: WhereOperator):
        validate_record_key(key)
        constraints = self.record_constraints_by_key
        constraints[key] = constraints.get(key, ()) + (operator,)
        return replace(self, record_constraints=tuple(constraints.items()))

    @property
    def record_constraints_by_key(self) -> Dict[str, Tuple[WhereOperator, ...]]:
        """The record constraints as a (new) dictionary keyed by record key."""
        return dict(self.record_constraints)

    @property
    def has_constraints(self) -> bool:
        """True if at least one scope or record constraint was registered."""
        return bool(self.scope_constraints or self.record_constraints)


@dataclass(frozen=True)
class ScopeQueryRequest(ScopeConstraints):
    """
    Everything needed to run a scope query below a parent scope.

    Attributes:
        order_criteria: (field, order) pairs. Fields are unique; setting the order of a
            field that is already ordered replaces its direction in place.
        limit_criterion: The optional offset/limit pair.
    """

    order_criteria: Tuple[Tuple[ScopeField, QueryOrder], ...] = ()
    limit_criterion: Optional[LimitCriterion] = None

    def _order_by(self, field: ScopeField, order: QueryOrder) -> "ScopeQueryRequest":
        criteria = dict(self.order_criteria)
        criteria[field] = order
        return replace(self, order_criteria=tuple(criteria.items()))

    def order_by_scope_id(self, order: QueryOrder = QueryOrder.ASC) -> "ScopeQueryRequest":
        return self._order_by(ScopeField.ID, order)

    def order_by_scope_name(self, order: QueryOrder = QueryOrder.ASC) -> "ScopeQueryRequest":
        return self._order_by(ScopeField.NAME, order)

    def limit(self, offset_or_limit: int, limit: Optional[int] = None) -> "ScopeQueryRequest":
        """
        Set the offset/limit pair, replacing any previous one.

        Args:
            offset_or_limit: The limit when called with one argument, the offset otherwise.
            limit: The limit when called with two arguments.

        Returns:
            A new request with the limit criterion set.
        """
        if limit is None:
            criterion = LimitCriterion(n_results=offset_or_limit)
        else:
            criterion = LimitCriterion(n_results=limit, offset=offset_or_limit)
        return replace(self, limit_criterion=criterion)

    @property
    def needs_ordering(self) -> bool:
        """True if an ordering or a limit has to be applied to the final candidates."""
        return bool(self.order_criteria) or self.limit_criterion is not None


@dataclass(frozen=True)
class ScopeDeletionRequest(ScopeConstraints):
    """
    Everything needed to delete scopes below a parent scope.

    Attributes:
        allow_bulk: Whether deleting without any constraint is permitted.
        allow_recursion: Whether descendants of the matched scopes are deleted too.
    """

    allow_bulk: bool = False
    allow_recursion: bool = False

    def with_bulk(self, allow: bool = True) -> "ScopeDeletionRequest":
        return replace(self, allow_bulk=allow)

    def with_recursion(self, allow: bool = True) -> "ScopeDeletionRequest":
        return replace(self, allow_recursion=allow)
