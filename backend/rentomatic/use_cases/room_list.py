"""
Rentomatic Backend - Room List Use Case
========================================

What:  Lists rooms matching the filters of a RoomListRequest.
Why:   The one piece of business logic, kept free of HTTP and storage details.
How:   Invalid request  → parameters_error, repository never called
       Valid request    → repo.list(filters) wrapped as success
       Any exception    → system_error; nothing backend-specific escapes

Whatever the backend, callers only ever receive a Response, never an
exception from asyncpg, SQLite or the filesystem.
"""

import logging

from rentomatic.repository.base import RoomRepository
from rentomatic.requests.room_list import RoomListRequest
from rentomatic.responses import Response, ResponseType

logger = logging.getLogger(__name__)


async def room_list_use_case(repo: RoomRepository, request: RoomListRequest) -> Response:
    if not request:
        return Response.from_invalid_request(request)

    try:
        rooms = await repo.list(filters=request.filters)
    except Exception as e:
        logger.error(
            "Room listing failed in %s: %s",
            type(repo).__name__,
            str(e),
            exc_info=True,
        )
        return Response.failure(ResponseType.SYSTEM_ERROR, e)

    logger.debug("Listed %d rooms with filters %s", len(rooms), request.filters)
    return Response.success(rooms)
