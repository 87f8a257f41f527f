"""
Rentomatic Backend - Room SQLAlchemy Model
===========================================

What:  ORM model for the `room` table.
Why:   Gives SqlRoomRepository typed columns to build WHERE clauses from.
How:   Inherits from the shared DeclarativeBase; Alembic migration 001 creates
       the same table.
Who:   SqlRoomRepository (reads), tests and fixtures (writes).

Schema:
    room(id serial primary key, code varchar(36) not null, size int,
         price int, longitude double precision, latitude double precision)

Rows are inserted outside the application (psql, fixtures). The application
never returns a RoomModel: every row is converted to a domain Room.
"""

from typing import Optional

from sqlalchemy import Double, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from rentomatic.database import Base


class RoomModel(Base):
    __tablename__ = "room"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(36), nullable=False)
    size: Mapped[Optional[int]] = mapped_column(Integer)
    price: Mapped[Optional[int]] = mapped_column(Integer)
    longitude: Mapped[Optional[float]] = mapped_column(Double)
    latitude: Mapped[Optional[float]] = mapped_column(Double)

    def __repr__(self) -> str:
        return f"<RoomModel(id={self.id}, code='{self.code}', price={self.price})>"
