"""
Rentomatic Backend - Room Filter Grammar
=========================================

What:  Defines which Room attributes can be filtered and how filter keys are read.
Why:   The request builder (validation) and both repositories (execution) must
       agree on one grammar, otherwise the in-memory and SQL backends could
       return different rooms for the same filters.
How:   A filter key is `<field>` (equality), `<field>_min` (inclusive lower
       bound) or `<field>_max` (inclusive upper bound). Values are coerced to the
       field's type, since query strings only carry text.

Examples:
    {"price_min": "40"}            → price >= 40
    {"size": 200, "price_max": 60} → size == 200 AND price <= 60
    {"code": "f853578c-..."}       → code == 'f853578c-...'
    {"code_min": "a"}              → rejected: codes only support equality
"""

import math
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Optional, Tuple

EQ = "eq"
MIN = "min"
MAX = "max"

_RANGE_SUFFIXES = {"_min": MIN, "_max": MAX}

# Postgres `integer` (int4) bounds of the size and price columns
INT4_MIN = -(2 ** 31)
INT4_MAX = 2 ** 31 - 1


def _read_int(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("booleans are not integers")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{value!r} is not a whole number")
        return int(value)
    if isinstance(value, str):
        return int(value.strip())
    if isinstance(value, int):
        return value
    raise TypeError(f"cannot read an integer from {type(value).__name__}")


def _to_int(value: Any) -> int:
    number = _read_int(value)
    if not INT4_MIN <= number <= INT4_MAX:
        raise ValueError(f"{number} is outside the integer column range")
    return number


def _read_float(value: Any) -> float:
    if isinstance(value, bool):
        raise TypeError("booleans are not numbers")
    if isinstance(value, str):
        return float(value.strip())
    if isinstance(value, (int, float)):
        return float(value)
    raise TypeError(f"cannot read a number from {type(value).__name__}")


def _to_float(value: Any) -> float:
    number = _read_float(value)
    # NaN sorts above every number in Postgres but compares false in Python
    if not math.isfinite(number):
        raise ValueError(f"{number} is not a finite number")
    return number


def _to_str(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected text, got {type(value).__name__}")
    return value


# field name → (value coercer, allowed operators)
FILTERABLE_FIELDS: Dict[str, Tuple[Callable[[Any], Any], Tuple[str, ...]]] = {
    "code": (_to_str, (EQ,)),
    "size": (_to_int, (EQ, MIN, MAX)),
    "price": (_to_int, (EQ, MIN, MAX)),
    "longitude": (_to_float, (EQ, MIN, MAX)),
    "latitude": (_to_float, (EQ, MIN, MAX)),
}


class UnknownFilterError(ValueError):
    """Raised for a filter key that names no filterable field/operator pair."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Key {key} cannot be used")


class FilterCondition(NamedTuple):
    """One parsed predicate, e.g. FilterCondition('price', 'min', 40)."""

    field: str
    operator: str
    value: Any

    def matches(self, room: Any) -> bool:
        actual = getattr(room, self.field)
        # NULL matches no predicate, as in SQL
        if actual is None:
            return False
        if self.operator == MIN:
            return actual >= self.value
        if self.operator == MAX:
            return actual <= self.value
        return actual == self.value


def parse_filter_key(key: str) -> Tuple[str, str]:
    """
    Split a filter key into (field, operator).

    Raises:
        UnknownFilterError: The field is not filterable, or does not support
            the requested operator (e.g. `code_max`).
    """
    field, operator = key, EQ
    for suffix, suffix_operator in _RANGE_SUFFIXES.items():
        if key.endswith(suffix):
            field, operator = key[: -len(suffix)], suffix_operator
            break

    entry = FILTERABLE_FIELDS.get(field)
    if entry is None or operator not in entry[1]:
        raise UnknownFilterError(key)
    return field, operator


def coerce_filter_value(field: str, value: Any) -> Any:
    """Convert a raw filter value to the type of `field` (ValueError, TypeError or OverflowError on failure)."""
    coercer, _ = FILTERABLE_FIELDS[field]
    return coercer(value)


def parse_filters(filters: Optional[Mapping[str, Any]]) -> List[FilterCondition]:
    """
    Turn a filter mapping into conditions, strictly.

    Repositories call this on filters that were already validated by
    `build_room_list_request`, so any failure here is a programming error and
    surfaces as an exception.
    """
    if not filters:
        return []
    conditions = []
    for key, value in filters.items():
        field, operator = parse_filter_key(key)
        conditions.append(FilterCondition(field, operator, coerce_filter_value(field, value)))
    return conditions
