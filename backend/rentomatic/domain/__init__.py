"""Domain entities and the filter grammar shared by every repository."""

from rentomatic.domain.filters import (
    FILTERABLE_FIELDS,
    FilterCondition,
    parse_filter_key,
    parse_filters,
)
from rentomatic.domain.room import Room

__all__ = [
    "FILTERABLE_FIELDS",
    "FilterCondition",
    "Room",
    "parse_filter_key",
    "parse_filters",
]
