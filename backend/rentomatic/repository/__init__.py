"""
Rentomatic Backend - Repositories
==================================

Storage-access abstraction decoupling use cases from a specific backend.

Inventory:
    - RoomRepository (abstract): the capability interface
    - MemRoomRepository: in-process list, no I/O
    - SqlRoomRepository: async SQLAlchemy over the `room` table
"""

from rentomatic.repository.base import RoomRepository
from rentomatic.repository.memory import MemRoomRepository
from rentomatic.repository.sql import SqlRoomRepository

__all__ = ["MemRoomRepository", "RoomRepository", "SqlRoomRepository"]
