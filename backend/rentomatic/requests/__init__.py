"""Request objects: validated input for use cases."""

from rentomatic.requests.room_list import (
    RequestError,
    RoomListRequest,
    build_room_list_request,
)

__all__ = ["RequestError", "RoomListRequest", "build_room_list_request"]
