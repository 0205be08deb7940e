##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
This module houses the value objects describing scopes.

A `Scope` is always built from a row that was fetched from (or just inserted
into) the store, so both its id and name are populated. The only exception is
`ROOT_SCOPE`, the sentinel parent of every top-level scope, whose id is None.

Scope references handed to executors are a tagged variant: either an
`UnresolvedScope` holding the path segments still to be looked up, or a
`ResolvedScope` wrapping a concrete `Scope`.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Set, Tuple, Union

from scopestore.utils import join_scope_path


@dataclass(frozen=True)
class Scope:
    """
    A node in the scope tree.

    Attributes:
        id: The id of the scope's identity row. None only for the root sentinel.
        name: The name of the scope, unique among its siblings.
    """

    id: Optional[int]
    name: str

    @property
    def is_root(self) -> bool:
        """True if this is the root sentinel."""
        return self.id is None

    def __str__(self) -> str:
        return "<root>" if self.is_root else f"{self.name} (id={self.id})"


ROOT_SCOPE = Scope(id=None, name="")


@dataclass(frozen=True)
class ScopeCollection:
    """
    An ordered, immutable sequence of scopes.

    The order is the order the scopes were returned by the query that produced
    the collection; no other ordering is implied.

    Attributes:
        scopes: The scopes in this collection.

    Methods:
        of: Build a collection from any iterable of scopes.
        filter_by_ids: Keep only the scopes whose id is in a given set, preserving order.
    """

    scopes: Tuple[Scope, ...] = ()

    @classmethod
    def of(cls, scopes: Iterable[Scope]) -> "ScopeCollection":
        return cls(tuple(scopes))

    @property
    def scope_ids(self) -> Set[int]:
        """The set of ids of the scopes in this collection."""
        return {scope.id for scope in self.scopes}

    @property
    def scope_names(self) -> Set[str]:
        """The set of names of the scopes in this collection."""
        return {scope.name for scope in self.scopes}

    def filter_by_ids(self, scope_ids: Iterable[int]) -> "ScopeCollection":
        keep = set(scope_ids)
        return ScopeCollection(tuple(scope for scope in self.scopes if scope.id in keep))

    def __len__(self) -> int:
        return len(self.scopes)

    def __iter__(self) -> Iterator[Scope]:
        return iter(self.scopes)

    def __getitem__(self, index: int) -> Scope:
        return self.scopes[index]

    def __bool__(self) -> bool:
        return bool(self.scopes)


@dataclass(frozen=True)
class UnresolvedScope:
    """
    A scope that is known only by its path below a base scope.

    Attributes:
        segments: The names to walk down from `base`, in order.
        base: The scope the walk starts from.
    """

    segments: Tuple[str, ...]
    base: Scope = ROOT_SCOPE

    @property
    def path(self) -> str:
        """The segments joined by the path separator."""
        return join_scope_path(self.segments)


@dataclass(frozen=True)
class ResolvedScope:
    """
    A scope that has already been materialized.

    Attributes:
        scope: The concrete scope.
    """

    scope: Scope


ScopeReference = Union[UnresolvedScope, ResolvedScope]
