"""
Rentomatic Backend - Response Envelope Unit Tests
==================================================

What:  Tests for Response construction, truthiness and message formatting.
"""

import pytest
from pydantic import ValidationError

from rentomatic.requests.room_list import build_room_list_request
from rentomatic.responses import Response, ResponseType

SUCCESS_VALUE = {"key": ["value1", "value2"]}
GENERIC_RESPONSE_TYPE = ResponseType.RESOURCE_ERROR
GENERIC_RESPONSE_MESSAGE = "This is a response"


def test_response_type_values():
    assert ResponseType.SUCCESS.value == "success"
    assert ResponseType.RESOURCE_ERROR.value == "resource_error"
    assert ResponseType.PARAMETERS_ERROR.value == "parameters_error"
    assert ResponseType.SYSTEM_ERROR.value == "system_error"


def test_response_success_is_true():
    response = Response.success(SUCCESS_VALUE)

    assert bool(response) is True
    assert response.type == ResponseType.SUCCESS
    assert response.value == SUCCESS_VALUE
    assert response.message is None


def test_response_success_with_empty_list_is_true():
    assert bool(Response.success([])) is True


def test_response_failure_is_false():
    response = Response.failure(GENERIC_RESPONSE_TYPE, GENERIC_RESPONSE_MESSAGE)

    assert bool(response) is False
    assert response.type == GENERIC_RESPONSE_TYPE
    assert response.message == GENERIC_RESPONSE_MESSAGE
    assert response.value is None
    assert response.errors == []


def test_response_failure_from_exception():
    response = Response.failure(
        ResponseType.SYSTEM_ERROR, Exception("Just an error message")
    )

    assert bool(response) is False
    assert response.type == ResponseType.SYSTEM_ERROR
    assert response.message == "Exception: Just an error message"


def test_response_failure_rejects_success_type():
    with pytest.raises(ValueError):
        Response.failure(ResponseType.SUCCESS, "nope")


def test_response_success_requires_a_value():
    with pytest.raises(ValidationError):
        Response(type=ResponseType.SUCCESS)


def test_response_failure_requires_a_message():
    with pytest.raises(ValidationError):
        Response(type=ResponseType.SYSTEM_ERROR)


def test_response_from_invalid_request():
    request = build_room_list_request(filters={"colour": "red", "price_min": "abc"})

    response = Response.from_invalid_request(request)

    assert bool(response) is False
    assert response.type == ResponseType.PARAMETERS_ERROR
    assert response.message == (
        "colour: Key colour cannot be used\n"
        "price_min: Value 'abc' is not a valid price"
    )
    assert response.errors == request.errors
