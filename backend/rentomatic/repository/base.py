"""
Rentomatic Backend - Abstract Room Repository Interface
========================================================

What:  Abstract base class defining the contract for room storage backends.
Why:   Use cases depend on this interface only, so the storage backend can be
       swapped (in-memory list ↔ Postgres table) without touching business
       logic or HTTP code.
How:   Concrete repositories inherit from RoomRepository and implement list().
Who:   Called by room_list_use_case; built by the `get_room_repository`
       dependency in routes/rooms.py.

Implementations:
    - MemRoomRepository: filters a static sequence in process (tests, demos)
    - SqlRoomRepository: translates filters into a WHERE clause (production)
"""

from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional

from rentomatic.domain.room import Room


class RoomRepository(ABC):
    """
    Abstract interface for fetching rooms.

    Contract:
        - list() returns fully constructed Room values, never raw rows or dicts
        - Given the same underlying data and filters, every implementation
          returns the same rooms
        - Filters are expected to be validated already (build_room_list_request);
          an unknown key is a programming error and raises ValueError
        - Storage failures raise RepositoryError / StoreUnavailableError
    """

    @abstractmethod
    async def list(self, filters: Optional[Mapping[str, Any]] = None) -> List[Room]:
        """
        Return the rooms matching every filter.

        Args:
            filters: Mapping of filter key → value, e.g. {"price_min": 40}.
                     None or an empty mapping returns every room.

        Returns:
            List of Room. An empty list when nothing matches, never None.

        Raises:
            ValueError: Unknown filter key or value of the wrong type.
            RepositoryError: The store failed to run the query.
            StoreUnavailableError: The store could not be reached.
        """
        ...
