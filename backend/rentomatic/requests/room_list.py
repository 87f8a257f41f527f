"""
Rentomatic Backend - Room List Request
=======================================

What:  The validated input of the room-list use case.
Why:   Validation happens once, before any repository is touched. A use case
       receiving an invalid request refuses to run and reports the errors.
How:   `build_room_list_request()` checks every filter key and value, collects
       ALL problems (not just the first) as structured RequestError entries,
       and returns a RoomListRequest whose truthiness says whether it is valid.

Error codes:
    invalid_type   - `filters` is not a mapping
    unknown_filter - the key names no filterable field/operator
    invalid_value  - the value cannot be read as the field's type
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from rentomatic.domain.filters import (
    UnknownFilterError,
    coerce_filter_value,
    parse_filter_key,
)

logger = logging.getLogger(__name__)


class RequestError(BaseModel):
    """One validation problem, safe to return to the client."""

    parameter: str = Field(description="Offending parameter, e.g. 'price_min'")
    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable explanation")


class RoomListRequest(BaseModel):
    """
    Filters for listing rooms, plus any validation errors.

    `filters` only contains entries that parsed successfully, already coerced
    to the field types. Check `is_valid` (or `bool(request)`) before using it.
    """

    filters: Dict[str, Any] = Field(default_factory=dict)
    errors: List[RequestError] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def __bool__(self) -> bool:
        return self.is_valid

    def add_error(self, parameter: str, code: str, message: str) -> None:
        self.errors.append(RequestError(parameter=parameter, code=code, message=message))


def build_room_list_request(filters: Optional[Any] = None) -> RoomListRequest:
    """
    Validate raw filters and build the request object.

    Args:
        filters: Mapping of filter key → raw value (usually strings from the
                 query string). None means "no filters".

    Returns:
        RoomListRequest, valid or carrying errors. Never raises for bad input.
    """
    request = RoomListRequest()
    if filters is None:
        return request

    if not isinstance(filters, Mapping):
        request.add_error("filters", "invalid_type", "Is not iterable")
        return request

    for key, raw_value in filters.items():
        try:
            field, _ = parse_filter_key(key)
        except UnknownFilterError as e:
            request.add_error(key, "unknown_filter", str(e))
            continue

        try:
            request.filters[key] = coerce_filter_value(field, raw_value)
        except (TypeError, ValueError, OverflowError):
            request.add_error(
                key,
                "invalid_value",
                f"Value {raw_value!r} is not a valid {field}",
            )

    if request.errors:
        logger.debug("Rejected room list filters: %s", [e.parameter for e in request.errors])
    return request
