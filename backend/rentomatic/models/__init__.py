"""ORM models. Import from here so Alembic sees every table."""

from rentomatic.models.room import RoomModel

__all__ = ["RoomModel"]
