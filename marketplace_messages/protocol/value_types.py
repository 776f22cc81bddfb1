"""
Value Types for Capability Elements
===================================

Every element in a capability schema declares a valueType tag.
This module maps (valueType, value) to valid / invalid.

The set of tags is closed. Tags we do not know are read as ANY_TYPE:
an unconstrained element accepts every value.
"""

import math
from collections.abc import Mapping
from datetime import datetime, timezone
from enum import Enum
from numbers import Real
from typing import Any, Callable, Dict


class ValueType(str, Enum):
    """The finite set of element value types."""
    # String family
    STRING = "string"
    LANG_STRING = "langString"
    ANY_URI = "anyURI"

    # Floating numbers
    DECIMAL = "decimal"
    DOUBLE = "double"
    FLOAT = "float"

    # Integer family
    INT = "int"
    INTEGER = "integer"
    LONG = "long"
    SHORT = "short"
    BYTE = "byte"
    UNSIGNED_LONG = "unsignedLong"
    UNSIGNED_SHORT = "unsignedShort"
    UNSIGNED_BYTE = "unsignedByte"

    # Signed integer ranges
    NON_NEGATIVE_INTEGER = "nonNegativeInteger"
    POSITIVE_INTEGER = "positiveInteger"
    TIME = "time"
    NON_POSITIVE_INTEGER = "nonPositiveInteger"
    NEGATIVE_INTEGER = "negativeInteger"

    # Dates (epoch milliseconds)
    DATE = "date"
    DATE_TIME = "dateTime"
    DATE_TIME_STAMP = "dateTimeStamp"

    BOOLEAN = "boolean"
    COMPLEX_TYPE = "complexType"

    # Unconstrained
    ANY_TYPE = "anyType"
    ANY_SIMPLE_TYPE = "anySimpleType"
    ANY_ATOMIC_TYPE = "anyAtomicType"

    @classmethod
    def parse(cls, tag: Any) -> "ValueType":
        """
        Parse a valueType tag from catalog data.

        Unknown tags become ANY_TYPE.

        Example:
            assert ValueType.parse("integer") is ValueType.INTEGER
            assert ValueType.parse("uuid") is ValueType.ANY_TYPE
        """
        try:
            return cls(tag)
        except ValueError:
            return cls.ANY_TYPE


# ============================================================
# KIND CHECKS
# ============================================================

def is_number(value: Any) -> bool:
    """Real numbers only. bool is not a number here."""
    return isinstance(value, Real) and not isinstance(value, bool)


def is_integral(value: Any) -> bool:
    """A number with no fractional part (3.0 counts, NaN and inf don't)."""
    if not is_number(value):
        return False
    # ints are always finite
    if isinstance(value, float) and not math.isfinite(value):
        return False
    return value % 1 == 0


def is_timestamp(value: Any) -> bool:
    """
    A number that converts to a calendar date as epoch milliseconds.

    Limited to what datetime can represent: years 1 to 9999.
    Later dates (up to year 275760 elsewhere) are rejected.
    """
    if not is_number(value):
        return False
    try:
        datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return False
    return True


def _always(value: Any) -> bool:
    return True


# ============================================================
# RULE TABLE
# ============================================================

_STRING_RULE = lambda v: isinstance(v, str)
_INTEGER_RULE = is_integral

RULES: Dict[ValueType, Callable[[Any], bool]] = {
    ValueType.STRING: _STRING_RULE,
    ValueType.LANG_STRING: _STRING_RULE,
    ValueType.ANY_URI: _STRING_RULE,

    ValueType.DECIMAL: is_number,
    ValueType.DOUBLE: is_number,
    ValueType.FLOAT: is_number,

    ValueType.INT: _INTEGER_RULE,
    ValueType.INTEGER: _INTEGER_RULE,
    ValueType.LONG: _INTEGER_RULE,
    ValueType.SHORT: _INTEGER_RULE,
    ValueType.BYTE: _INTEGER_RULE,
    ValueType.UNSIGNED_LONG: _INTEGER_RULE,
    ValueType.UNSIGNED_SHORT: _INTEGER_RULE,
    ValueType.UNSIGNED_BYTE: _INTEGER_RULE,

    ValueType.NON_NEGATIVE_INTEGER: lambda v: is_integral(v) and v >= 0,
    ValueType.POSITIVE_INTEGER: lambda v: is_integral(v) and v > 0,
    ValueType.TIME: lambda v: is_integral(v) and v > 0,
    ValueType.NON_POSITIVE_INTEGER: lambda v: is_integral(v) and v <= 0,
    ValueType.NEGATIVE_INTEGER: lambda v: is_integral(v) and v < 0,

    ValueType.DATE: is_timestamp,
    ValueType.DATE_TIME: is_timestamp,
    ValueType.DATE_TIME_STAMP: is_timestamp,

    ValueType.BOOLEAN: lambda v: isinstance(v, bool),
    ValueType.COMPLEX_TYPE: lambda v: isinstance(v, (Mapping, list, tuple)),

    ValueType.ANY_TYPE: _always,
    ValueType.ANY_SIMPLE_TYPE: _always,
    ValueType.ANY_ATOMIC_TYPE: _always,
}


def validate(value_type: Any, value: Any) -> bool:
    """
    Check a value against a declared element type.

    Never raises. Accepts a ValueType or a raw tag string.

    Example:
        assert validate("integer", 42)
        assert not validate("integer", "42")
        assert validate("nonNegativeInteger", 0)
        assert not validate("positiveInteger", 0)
    """
    if not isinstance(value_type, ValueType):
        value_type = ValueType.parse(value_type)
    return bool(RULES[value_type](value))
