##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Constants shared by every part of the scope store.

The (`SCOPE_TYPE`, `SCOPE_KEY`) pair marks the identity row of a scope. The
value column of an identity row holds the scope's name and its scope column
holds the id of the parent scope (NULL for top-level scopes).
"""
from enum import Enum


__all__ = ("SCOPE_KEY", "SCOPE_TYPE", "ValueType")


class ValueType(Enum):
    """
    Enum for the values stored in the `type` column.

    Attributes:
        SCOPE (str): The row is the identity row of a scope.
        STRING (str): A text value (also used for `None`, stored as NULL).
        BOOLEAN (str): A boolean value stored as "true" or "false".
        INT (str): An integer value.
        DOUBLE (str): A floating point value.
        DATETIME (str): A datetime stored in ISO 8601 format.
        JSON (str): A dictionary or heterogeneous list stored as a JSON document.
        STRING_LIST (str): A list of text values, one row per element.
        INT_LIST (str): A list of integers, one row per element.
        DOUBLE_LIST (str): A list of floating point values, one row per element.
        BOOLEAN_LIST (str): A list of booleans, one row per element.
    """

    SCOPE: str = "scope"
    STRING: str = "string"
    BOOLEAN: str = "boolean"
    INT: str = "int"
    DOUBLE: str = "double"
    DATETIME: str = "datetime"
    JSON: str = "json"
    STRING_LIST: str = "string_list"
    INT_LIST: str = "int_list"
    DOUBLE_LIST: str = "double_list"
    BOOLEAN_LIST: str = "boolean_list"

    @property
    def is_list(self) -> bool:
        """True if values of this type are stored as one row per element."""
        return self.value.endswith("_list")


SCOPE_TYPE: str = ValueType.SCOPE.value
SCOPE_KEY: str = "_scope_name"
