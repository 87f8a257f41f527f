"""
Rentomatic Backend - In-Memory Room Repository
===============================================

What:  RoomRepository over a static sequence of rooms.
Why:   Deterministic, I/O-free backend for unit tests and for demo deployments
       (REPOSITORY_BACKEND=memory with ROOMS_FILE).
How:   Parses the filters with the shared grammar and keeps the rooms that
       satisfy every condition, preserving the input order.
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Union

from rentomatic.domain.filters import parse_filters
from rentomatic.domain.room import Room
from rentomatic.exceptions import ConfigurationError
from rentomatic.repository.base import RoomRepository

logger = logging.getLogger(__name__)


class MemRoomRepository(RoomRepository):
    """
    Filters an in-process list of rooms.

    Accepts Room instances or plain dicts; dicts are converted once at
    construction so that list() never returns anything but Room values.
    """

    def __init__(self, rooms: Iterable[Union[Room, Mapping[str, Any]]] = ()):
        self._rooms: List[Room] = [
            room if isinstance(room, Room) else Room.from_dict(room) for room in rooms
        ]

    async def list(self, filters: Optional[Mapping[str, Any]] = None) -> List[Room]:
        conditions = parse_filters(filters)
        return [
            room for room in self._rooms
            if all(condition.matches(room) for condition in conditions)
        ]

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "MemRoomRepository":
        """
        Seed a repository from a JSON array of room objects.

        Raises:
            ConfigurationError: The file is missing or is not a list of rooms.
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(data, list):
                raise ValueError("expected a JSON array of rooms")
            repo = cls(data)
        except (OSError, ValueError) as e:
            raise ConfigurationError(
                message=f"Cannot load rooms from {path}: {e}",
                path=str(path),
            ) from e
        logger.info("Loaded %d rooms from %s", len(data), path)
        return repo
