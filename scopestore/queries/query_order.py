##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""This module provides the ordering and limiting criteria for queries."""
from dataclasses import dataclass
from enum import Enum


__all__ = ("QueryOrder", "LimitCriterion")


class QueryOrder(Enum):
    """
    Enum for the direction a query result is sorted in.

    Attributes:
        ASC (str): Sort in ascending order.
        DESC (str): Sort in descending order.
    """

    ASC: str = "ASC"
    DESC: str = "DESC"


@dataclass(frozen=True)
class LimitCriterion:
    """
    An offset/limit pair applied to a query.

    Attributes:
        n_results: The maximum number of rows to return.
        offset: The number of rows to skip before returning results.
    """

    n_results: int
    offset: int = 0

    def __post_init__(self):
        if self.n_results < 0:
            raise ValueError(f"The number of results must be non-negative, got {self.n_results}.")
        if self.offset < 0:
            raise ValueError(f"The offset must be non-negative, got {self.offset}.")
