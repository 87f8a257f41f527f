"""
Rentomatic Backend - Use Case Response Envelope
================================================

What:  The tagged result type every use case returns.
Why:   Use cases report failure by value, not by exception. Whatever the
       storage backend, the HTTP layer only ever sees these four tags and maps
       them to status codes in one place.
How:   A pydantic model with a `type` tag. Success carries `value`; failures
       carry `message` (and `errors` for parameter problems). A validator
       enforces that exactly one of value/message is populated.

Tag → HTTP status (see routes/rooms.py):
    success          → 200
    resource_error   → 404
    parameters_error → 400
    system_error     → 500
"""

from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field, model_validator

from rentomatic.requests.room_list import RequestError, RoomListRequest


class ResponseType(str, Enum):
    SUCCESS = "success"
    RESOURCE_ERROR = "resource_error"
    PARAMETERS_ERROR = "parameters_error"
    SYSTEM_ERROR = "system_error"


class Response(BaseModel):
    """
    Outcome of a use case.

    Construct with the classmethods rather than directly:
        Response.success([room, ...])
        Response.failure(ResponseType.SYSTEM_ERROR, exc)
        Response.from_invalid_request(request)
    """

    type: ResponseType
    value: Optional[Any] = None
    message: Optional[str] = None
    errors: List[RequestError] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_payload_matches_tag(self) -> "Response":
        if self.type == ResponseType.SUCCESS:
            if self.value is None or self.message is not None:
                raise ValueError("A success response carries a value and no message")
        elif self.message is None or self.value is not None:
            raise ValueError("A failure response carries a message and no value")
        return self

    def __bool__(self) -> bool:
        return self.type == ResponseType.SUCCESS

    @classmethod
    def success(cls, value: Any) -> "Response":
        return cls(type=ResponseType.SUCCESS, value=value)

    @classmethod
    def failure(
        cls,
        response_type: ResponseType,
        message: Union[str, BaseException],
        errors: Optional[List[RequestError]] = None,
    ) -> "Response":
        if response_type == ResponseType.SUCCESS:
            raise ValueError("Use Response.success() for successful responses")
        if isinstance(message, BaseException):
            message = f"{type(message).__name__}: {message}"
        return cls(type=response_type, message=message, errors=errors or [])

    @classmethod
    def from_invalid_request(cls, request: RoomListRequest) -> "Response":
        message = "\n".join(f"{e.parameter}: {e.message}" for e in request.errors)
        return cls.failure(
            ResponseType.PARAMETERS_ERROR,
            message,
            errors=list(request.errors),
        )
