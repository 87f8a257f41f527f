"""
Rentomatic Backend - Rooms Route Handler
=========================================

What:  Handles GET /rooms, the room listing endpoint.
Why:   The HTTP boundary: turns a query string into a request object and a
       Response envelope into a status code and JSON body.
How:   Collects `filter_<key>` query parameters (prefix stripped), builds a
       RoomListRequest, runs room_list_use_case against the repository
       provided by `get_room_repository`, then maps the envelope's tag.

Examples:
    GET /rooms                                → 200, every room
    GET /rooms?filter_price_min=40            → 200, rooms with price >= 40
    GET /rooms?filter_price_min=abc           → 400, parameters_error
    GET /rooms (database down)                → 500, system_error
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from rentomatic.middleware.request_id import request_id_var
from rentomatic.repository.base import RoomRepository
from rentomatic.requests.room_list import build_room_list_request
from rentomatic.responses import Response, ResponseType
from rentomatic.schemas.room import ErrorResponse, RoomResponse
from rentomatic.use_cases.room_list import room_list_use_case

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Rooms"])

FILTER_PREFIX = "filter_"

STATUS_CODES = {
    ResponseType.SUCCESS: 200,
    ResponseType.RESOURCE_ERROR: 404,
    ResponseType.PARAMETERS_ERROR: 400,
    ResponseType.SYSTEM_ERROR: 500,
}


def get_room_repository(request: Request) -> RoomRepository:
    """
    FastAPI dependency returning the repository built by create_app().

    Tests swap the backend with `app.dependency_overrides[get_room_repository]`.
    """
    return request.app.state.room_repository


def extract_filters(query_params: Any) -> Dict[str, str]:
    """Keep `filter_*` parameters only, with the prefix stripped."""
    return {
        key[len(FILTER_PREFIX):]: value
        for key, value in query_params.items()
        if key.startswith(FILTER_PREFIX)
    }


def build_http_response(response: Response) -> JSONResponse:
    """Serialize a use-case Response into the HTTP status and body."""
    status_code = STATUS_CODES[response.type]

    if response:
        rooms = [RoomResponse.model_validate(room).model_dump() for room in response.value]
        return JSONResponse(status_code=status_code, content=rooms)

    body: Dict[str, Any] = {
        "error": response.type.value,
        "message": response.message,
        "request_id": request_id_var.get(""),
    }
    if response.errors:
        body["details"] = {"errors": [e.model_dump() for e in response.errors]}
    return JSONResponse(status_code=status_code, content=body)


@router.get(
    "/rooms",
    response_model=List[RoomResponse],
    responses={
        200: {"description": "Rooms matching every filter (possibly none)"},
        400: {"description": "Unknown filter or invalid filter value", "model": ErrorResponse},
        500: {"description": "Room store failure", "model": ErrorResponse},
    },
    summary="List rooms",
    description=(
        "Returns the rooms matching all `filter_<key>` query parameters. "
        "Keys are `<field>` (equality), `<field>_min` and `<field>_max` (inclusive "
        "bounds) for size, price, longitude and latitude, and `code` (equality)."
    ),
)
async def list_rooms(
    request: Request,
    repo: RoomRepository = Depends(get_room_repository),
) -> JSONResponse:
    filters = extract_filters(request.query_params)
    room_list_request = build_room_list_request(filters=filters)

    response = await room_list_use_case(repo, room_list_request)

    if response.type == ResponseType.SYSTEM_ERROR:
        logger.error("GET /rooms failed: %s", response.message)
    return build_http_response(response)
