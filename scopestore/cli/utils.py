##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Utility functions to support Scopestore CLI command handlers.

These helpers turn the raw strings given on the command line into the values
and where-operators understood by the scope store.
"""

import json
import logging
from contextlib import suppress
from typing import Any, Callable, Dict, List, Optional, Tuple

from scopestore.queries import (
    WhereOperator,
    contains,
    ends_with,
    equal_to,
    greater_than,
    greater_than_or_equal_to,
    less_than,
    less_than_or_equal_to,
    match,
    not_equal_to,
    starts_with,
)
from scopestore.store.values import encode_value


LOG = logging.getLogger("scopestore")

NAME_OPERATORS: Dict[str, Callable[[str], WhereOperator]] = {
    "eq": equal_to,
    "ne": not_equal_to,
    "lt": less_than,
    "le": less_than_or_equal_to,
    "gt": greater_than,
    "ge": greater_than_or_equal_to,
    "like": match,
    "contains": contains,
    "starts": starts_with,
    "ends": ends_with,
}

VALUE_TYPES = ["auto", "string", "int", "double", "boolean", "json"]


def parse_where_args(where_list: Optional[List[str]]) -> List[Tuple[str, str]]:
    """
    Parse a list of "KEY=VALUE" strings into (key, value) pairs.

    Only the first '=' separates the key from the value, so values may contain '='.

    Args:
        where_list: The strings given to `--where`, or None.

    Returns:
        The (key, value) pairs, in the order they were given.

    Raises:
        ValueError: If an entry has no '=' or an empty key.
    """
    if not where_list:
        return []
    LOG.debug(f"Command line record constraints = {where_list}")

    result = []
    for arg in where_list:
        if "=" not in arg:
            raise ValueError(f"--where requires '=' operator, got '{arg}'. Example: --where owner=alice")
        key, value = arg.split("=", 1)
        if not key:
            raise ValueError(f"--where requires a non-empty key, got '{arg}'.")
        result.append((key, value))
    return result


def parse_name_constraint(operator: str, value: str) -> WhereOperator:
    """
    Build the where-operator for a `--name OP VALUE` argument.

    Args:
        operator: One of the keys of `NAME_OPERATORS`.
        value: The value to compare scope names against.

    Returns:
        The matching where-operator.

    Raises:
        ValueError: If the operator is unknown.
    """
    if operator not in NAME_OPERATORS:
        raise ValueError(f"Unknown name operator '{operator}'. Choose from: {', '.join(NAME_OPERATORS)}.")
    return NAME_OPERATORS[operator](value)


def parse_record_value(value: str, value_type: str = "auto") -> Any:
    """
    Convert a command-line string into the Python value to store.

    With the "auto" type, integers, floats and the literals "true" / "false"
    are recognized; anything else stays a string.

    Args:
        value: The raw string.
        value_type: One of `VALUE_TYPES`.

    Returns:
        The converted value.

    Raises:
        ValueError: If the value can't be converted to the requested type.
    """
    if value_type == "string":
        return value
    if value_type == "int":
        return int(value)
    if value_type == "double":
        return float(value)
    if value_type == "boolean":
        if value.lower() not in ("true", "false"):
            raise ValueError(f"'{value}' is not a boolean. Use 'true' or 'false'.")
        return value.lower() == "true"
    if value_type == "json":
        return json.loads(value)
    if value_type != "auto":
        raise ValueError(f"Unknown value type '{value_type}'. Choose from: {', '.join(VALUE_TYPES)}.")

    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    with suppress(ValueError):
        return int(value)
    with suppress(ValueError):
        return float(value)
    return value


def parse_record_constraint(value: str, value_type: str = "auto") -> WhereOperator:
    """
    Build the equality operator for a `--where KEY=VALUE` argument.

    The value goes through the same conversion as `record set`, so the text
    used to write a record also matches it: "1.50" matches a stored 1.5 and
    "True" a stored boolean.

    Args:
        value: The raw string.
        value_type: One of `VALUE_TYPES`.

    Returns:
        An `equal_to` operator on the stored form of the value.

    Raises:
        ValueError: If the value can't be converted or converts to a list.
    """
    parsed = parse_record_value(value, value_type)
    if isinstance(parsed, (list, tuple)):
        raise ValueError(f"--where compares a single value, got the list '{value}'.")
    _, raw_values = encode_value(parsed)
    return equal_to(raw_values[0])
