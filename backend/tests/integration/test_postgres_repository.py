"""
Rentomatic Backend - Postgres Integration Tests
================================================

What:  SqlRoomRepository against a real Postgres (the testing compose stack).
How:   Run through `rentomatic-manage test`, which starts the stack, creates
       APPLICATION_DB and calls `pytest --integration`. Connection details
       come from config/testing.json via the environment.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from rentomatic.config import Settings
from rentomatic.database import Base, create_engine_from_settings, create_session_factory
from rentomatic.main import create_app
from rentomatic.models.room import RoomModel
from rentomatic.repository.sql import SqlRoomRepository

pytestmark = pytest.mark.integration


@pytest.fixture
def pg_settings():
    return Settings(_env_file=None)


@pytest_asyncio.fixture
async def pg_engine(pg_settings):
    engine = create_engine_from_settings(pg_settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def pg_session_factory(pg_engine, room_dicts):
    factory = create_session_factory(pg_engine)
    async with factory() as session:
        # Let the serial column assign ids, as it does in production
        session.add_all([
            RoomModel(**{k: v for k, v in data.items() if k != "id"}) for data in room_dicts
        ])
        await session.commit()
    return factory


@pytest.mark.asyncio
async def test_repository_list_without_parameters(pg_session_factory, room_dicts):
    rooms = await SqlRoomRepository(pg_session_factory).list()

    assert [room.code for room in rooms] == [data["code"] for data in room_dicts]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "filters",
    [
        {"code": "fe2c3195-aeff-487a-a08f-e0bdc0ec6e9a"},
        {"price": 60},
        {"price_min": 48},
        {"price_max": 60},
        {"latitude_min": 51.5, "size_max": 300},
    ],
)
async def test_postgres_and_memory_agree(pg_session_factory, mem_repo, filters):
    pg_rooms = await SqlRoomRepository(pg_session_factory).list(filters=filters)
    mem_rooms = await mem_repo.list(filters=filters)

    assert [room.code for room in pg_rooms] == [room.code for room in mem_rooms]


@pytest.mark.asyncio
async def test_rooms_endpoint(pg_settings, pg_session_factory):
    app = create_app(pg_settings, room_repository=SqlRoomRepository(pg_session_factory))

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/rooms", params={"filter_price_min": "40"})

    assert response.status_code == 200
    assert [room["price"] for room in response.json()] == [66, 60, 48]
