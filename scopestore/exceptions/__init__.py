##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Module of all Scopestore-specific exception types.
"""

__all__ = (
    "ScopeStoreError",
    "MissingScopeError",
    "BulkDeletionNotAllowedError",
    "ReservedKeyError",
    "DuplicateScopeError",
    "InvalidScopeNameError",
    "UnsupportedValueTypeError",
)


class ScopeStoreError(Exception):
    """
    Base class for every error raised by Scopestore itself. Errors coming
    from the underlying SQLite driver are never wrapped in this class.
    """


class MissingScopeError(ScopeStoreError):
    """
    Exception to signal that a scope path could not be resolved because
    one of its segments has no matching child scope.

    Attributes:
        path (str): The full path that was attempted, with segments joined by `/`.
    """

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Scope '{path}' does not exist.")


class BulkDeletionNotAllowedError(ScopeStoreError):
    """
    Exception to signal that a deletion without any scope or record
    constraint was attempted without explicitly allowing bulk deletion.
    """

    def __init__(self, message: str = None):
        super().__init__(
            message or "Bulk deletion is not allowed. Add a constraint or explicitly allow bulk deletion."
        )


class ReservedKeyError(ScopeStoreError):
    """
    Exception to signal that a record key collides with the key reserved
    for scope identity records (or is otherwise unusable).
    """


class DuplicateScopeError(ScopeStoreError):
    """
    Exception to signal that a scope with the same name already exists
    under the same parent.
    """


class InvalidScopeNameError(ScopeStoreError):
    """
    Exception to signal that a scope name is empty or contains the path separator.
    """


class UnsupportedValueTypeError(ScopeStoreError):
    """
    Exception to signal that a record value cannot be stored because its
    Python type has no matching value type.
    """
