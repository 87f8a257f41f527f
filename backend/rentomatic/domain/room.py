"""
Rentomatic Backend - Room Domain Entity
========================================

What:  The single business entity of the application: a rentable room.
Why:   Use cases and repositories exchange Room values, never ORM rows or dicts,
       so that business logic is independent of the storage backend.
How:   A frozen pydantic model. `from_attributes` lets the SQL repository build
       a Room straight from a `RoomModel` row with `Room.model_validate(row)`.

Field notes:
    - id:        Assigned by the store's sequence; None for rooms not yet stored
    - code:      Opaque unique identifier, usually a UUID string (max 36 chars)
    - size:      Square metres
    - price:     Price per night, in whole currency units
    - longitude / latitude: WGS84 coordinates

    size, price and the coordinates mirror nullable columns: they must be
    present but may be None, and a None value matches no filter.
"""

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field


class Room(BaseModel):
    """A rentable room. Immutable once read from a repository."""

    id: Optional[int] = Field(default=None, description="Store-assigned identifier")
    code: str = Field(max_length=36, description="Unique room code (UUID)")
    size: Optional[int] = Field(description="Room size in square metres")
    price: Optional[int] = Field(description="Price per night")
    longitude: Optional[float] = Field(description="Longitude (WGS84)")
    latitude: Optional[float] = Field(description="Latitude (WGS84)")

    model_config = {"frozen": True, "from_attributes": True}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Room":
        return cls.model_validate(dict(data))

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()
