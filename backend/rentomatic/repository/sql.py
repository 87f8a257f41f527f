"""
Rentomatic Backend - SQL Room Repository
=========================================

What:  RoomRepository backed by the `room` table (Postgres in production).
Why:   Production storage; must return exactly what MemRoomRepository would
       return for the same data, so that backends stay interchangeable.
How:   Translates parsed filter conditions into SQLAlchemy predicates,
       executes the SELECT on a session opened for this call, and converts
       every row into a domain Room before the session closes.

Query shape:
    SELECT * FROM room
    WHERE price >= :price_min AND size = :size ...
    ORDER BY id

Error translation:
    OperationalError / InterfaceError / OSError → StoreUnavailableError
    any other exception, unreadable row         → RepositoryError
    Pool sizing, retries and timeouts stay with SQLAlchemy/asyncpg.
"""

import logging
from typing import Any, List, Mapping, Optional

from pydantic import ValidationError
from sqlalchemy import Select, select
from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from rentomatic.domain.filters import MAX, MIN, parse_filters
from rentomatic.domain.room import Room
from rentomatic.exceptions import RepositoryError, StoreUnavailableError
from rentomatic.models.room import RoomModel
from rentomatic.repository.base import RoomRepository

logger = logging.getLogger(__name__)


class SqlRoomRepository(RoomRepository):
    """
    Reads rooms through an async SQLAlchemy session factory.

    The repository holds no connection itself: each list() call opens a
    session, which borrows a pooled connection and returns it on exit.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @staticmethod
    def build_query(filters: Optional[Mapping[str, Any]] = None) -> Select:
        """Translate filters into a SELECT. Raises ValueError on unknown keys."""
        query = select(RoomModel)
        for condition in parse_filters(filters):
            column = getattr(RoomModel, condition.field)
            if condition.operator == MIN:
                query = query.where(column >= condition.value)
            elif condition.operator == MAX:
                query = query.where(column <= condition.value)
            else:
                query = query.where(column == condition.value)
        return query.order_by(RoomModel.id)

    async def list(self, filters: Optional[Mapping[str, Any]] = None) -> List[Room]:
        query = self.build_query(filters)

        try:
            async with self._session_factory() as session:
                result = await session.execute(query)
                return [Room.model_validate(row) for row in result.scalars().all()]

        except (OperationalError, InterfaceError, OSError) as e:
            logger.error("Room store unreachable: %s", str(e))
            raise StoreUnavailableError(
                context={"original_error": type(e).__name__},
            ) from e
        except SQLAlchemyError as e:
            logger.error("Room query failed: %s", str(e), exc_info=True)
            raise RepositoryError(
                context={"original_error": type(e).__name__},
            ) from e
        except ValidationError as e:
            # A row the domain cannot represent (e.g. a code over 36 characters)
            logger.error("Unreadable room row: %s", str(e))
            raise RepositoryError(
                message="The room store returned an invalid row",
                context={"original_error": type(e).__name__},
            ) from e
        except Exception as e:
            # Driver-level failures outside SQLAlchemy (e.g. parameter conversion)
            logger.error("Room query failed in the driver: %s", str(e), exc_info=True)
            raise RepositoryError(
                context={"original_error": type(e).__name__},
            ) from e
