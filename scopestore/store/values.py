##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Scopestore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Scopestore.
##############################################################################

"""
Conversion of record values to and from their stored representation.

Every record value is stored as text in the `value` column together with its
`ValueType` in the `type` column. Lists of scalars are stored as one row per
element, sharing the same key, so that record constraints can match any
element of a list.
"""

import json
import logging
from datetime import datetime
from typing import Any, List, Optional, Tuple

from scopestore.exceptions import UnsupportedValueTypeError
from scopestore.store.constants import ValueType


LOG = logging.getLogger(__name__)

LIST_TYPES = {
    ValueType.STRING: ValueType.STRING_LIST,
    ValueType.INT: ValueType.INT_LIST,
    ValueType.DOUBLE: ValueType.DOUBLE_LIST,
    ValueType.BOOLEAN: ValueType.BOOLEAN_LIST,
}
ELEMENT_TYPES = {list_type: element_type for element_type, list_type in LIST_TYPES.items()}


def infer_value_type(value: Any) -> ValueType:
    """
    Figure out which `ValueType` a Python value is stored as.

    Args:
        value: The value to inspect.

    Returns:
        The matching `ValueType`.

    Raises:
        UnsupportedValueTypeError: If the value can't be stored.
    """
    if value is None or isinstance(value, str):
        return ValueType.STRING
    # bool is a subclass of int
    if isinstance(value, bool):
        return ValueType.BOOLEAN
    if isinstance(value, int):
        return ValueType.INT
    if isinstance(value, float):
        return ValueType.DOUBLE
    if isinstance(value, datetime):
        return ValueType.DATETIME
    if isinstance(value, dict):
        return ValueType.JSON
    if isinstance(value, (list, tuple)):
        element_types = {infer_value_type(element) for element in value if element is not None}
        if value and None not in value:
            if element_types == {ValueType.INT, ValueType.DOUBLE}:
                return ValueType.DOUBLE_LIST
            if len(element_types) == 1 and next(iter(element_types)) in LIST_TYPES:
                return LIST_TYPES[next(iter(element_types))]
        return ValueType.JSON
    raise UnsupportedValueTypeError(f"Cannot store a value of type '{type(value).__name__}'.")


def _encode_scalar(value_type: ValueType, value: Any) -> Optional[str]:
    if value is None:
        return None
    if value_type == ValueType.BOOLEAN:
        return "true" if value else "false"
    if value_type == ValueType.INT:
        return str(int(value))
    if value_type == ValueType.DOUBLE:
        return repr(float(value))
    if value_type == ValueType.DATETIME:
        return value.isoformat()
    return str(value)


def _decode_scalar(value_type: ValueType, raw: Optional[str]) -> Any:
    if raw is None:
        return None
    if value_type == ValueType.BOOLEAN:
        if raw.lower() not in ("true", "false"):
            raise ValueError(f"'{raw}' is not a boolean value.")
        return raw.lower() == "true"
    if value_type == ValueType.INT:
        return int(raw)
    if value_type == ValueType.DOUBLE:
        return float(raw)
    if value_type == ValueType.DATETIME:
        return datetime.fromisoformat(raw)
    return raw


def encode_value(value: Any) -> Tuple[ValueType, List[Optional[str]]]:
    """
    Convert a Python value into its stored representation.

    Args:
        value: The value to encode.

    Returns:
        A tuple of the value type and the list of raw values, one per row to store.
    """
    value_type = infer_value_type(value)
    if value_type == ValueType.JSON:
        try:
            return value_type, [json.dumps(value, default=str)]
        except (TypeError, ValueError) as exc:
            raise UnsupportedValueTypeError(f"Cannot store value as JSON: {exc}") from exc
    if value_type.is_list:
        element_type = ELEMENT_TYPES[value_type]
        return value_type, [_encode_scalar(element_type, element) for element in value]
    return value_type, [_encode_scalar(value_type, value)]


def decode_value(value_type: ValueType, raw_values: List[Optional[str]]) -> Any:
    """
    Convert the stored representation of a record back into a Python value.

    Args:
        value_type: The value type the rows were stored with.
        raw_values: The raw values of every row sharing the key, in insertion order.

    Returns:
        The decoded value. List types produce a list, other types a single value.
    """
    if value_type.is_list:
        element_type = ELEMENT_TYPES[value_type]
        return [_decode_scalar(element_type, raw) for raw in raw_values]

    if len(raw_values) > 1:
        LOG.warning(f"Found {len(raw_values)} rows for a single {value_type.value} value. Using the last one.")
    raw = raw_values[-1] if raw_values else None
    if value_type == ValueType.JSON:
        return None if raw is None else json.loads(raw)
    return _decode_scalar(value_type, raw)
