##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Row-store query facility used by the scope engine.

Modules:
    where_operators: Column predicates (equality, range, set membership, patterns, nullness).
    query_order: The `QueryOrder` direction enum and the `LimitCriterion` offset/limit pair.
    generic_query: Builders for parameterized SELECT, INSERT and DELETE statements.
"""

from scopestore.queries.query_order import LimitCriterion, QueryOrder
from scopestore.queries.where_operators import (
    WhereOperator,
    between,
    contains,
    ends_with,
    equal_to,
    greater_than,
    greater_than_or_equal_to,
    in_,
    is_not_null,
    is_null,
    less_than,
    less_than_or_equal_to,
    match,
    not_between,
    not_equal_to,
    not_in,
    starts_with,
)


__all__ = (
    "LimitCriterion",
    "QueryOrder",
    "WhereOperator",
    "between",
    "contains",
    "ends_with",
    "equal_to",
    "greater_than",
    "greater_than_or_equal_to",
    "in_",
    "is_not_null",
    "is_null",
    "less_than",
    "less_than_or_equal_to",
    "match",
    "not_between",
    "not_equal_to",
    "not_in",
    "starts_with",
)
