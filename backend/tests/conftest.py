"""
Rentomatic Backend - Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (room data, repositories, a SQLite
       backed session factory, an HTTP client) so tests need no Postgres.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Overview:
    ├── room_dicts:            Four rooms as plain dicts
    ├── domain_rooms:          The same rooms as Room values
    ├── mem_repo:              MemRoomRepository over room_dicts
    ├── mock_repo:             RoomRepository whose list() is an AsyncMock
    ├── sqlite_engine:         Async SQLite engine with the room table created
    ├── sql_session_factory:   Session factory over sqlite_engine, rooms inserted
    └── test_client:           HTTPX AsyncClient for a memory-backed app

Integration tests (marked `integration`) need a live Postgres and only run
with `pytest --integration` (which `rentomatic-manage test` passes).
"""

import os
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any app imports
# Why: importing rentomatic.main builds an app from the environment
os.environ["REPOSITORY_BACKEND"] = "memory"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.pop("ROOMS_FILE", None)

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

from rentomatic.config import Settings
from rentomatic.database import Base, create_session_factory
from rentomatic.domain.room import Room
from rentomatic.models.room import RoomModel
from rentomatic.repository.base import RoomRepository
from rentomatic.repository.memory import MemRoomRepository


# ══════════════════════════════════════════════════════════════════════════
# Command line options
# ══════════════════════════════════════════════════════════════════════════

def pytest_addoption(parser):
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests (need a running Postgres)",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--integration"):
        return

    skip_integration = pytest.mark.skip(reason="need --integration option to run")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


# ══════════════════════════════════════════════════════════════════════════
# Room data
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def room_dicts():
    """Four rooms, ordered by id, as stored in both backends."""
    return [
        {
            "id": 1,
            "code": "f853578c-fc0f-4e65-81b8-566c5dffa35a",
            "size": 215,
            "price": 39,
            "longitude": -0.09998975,
            "latitude": 51.75436293,
        },
        {
            "id": 2,
            "code": "fe2c3195-aeff-487a-a08f-e0bdc0ec6e9a",
            "size": 405,
            "price": 66,
            "longitude": 0.18228006,
            "latitude": 51.74640997,
        },
        {
            "id": 3,
            "code": "913694c6-435a-4366-ba0d-da5334a611b2",
            "size": 56,
            "price": 60,
            "longitude": 0.27891577,
            "latitude": 51.45994069,
        },
        {
            "id": 4,
            "code": "eed76e77-55c1-41ce-985d-ca49bf6c0585",
            "size": 93,
            "price": 48,
            "longitude": 0.33894476,
            "latitude": 51.39916678,
        },
    ]


@pytest.fixture
def domain_rooms(room_dicts):
    return [Room.from_dict(data) for data in room_dicts]


@pytest.fixture
def mem_repo(room_dicts):
    return MemRoomRepository(room_dicts)


@pytest.fixture
def mock_repo():
    """
    A RoomRepository whose list() returns [] unless reconfigured.

    Usage:
        mock_repo.list.return_value = domain_rooms
        mock_repo.list.side_effect = StoreUnavailableError()
    """
    repo = MagicMock(spec=RoomRepository)
    repo.list = AsyncMock(return_value=[])
    return repo


# ══════════════════════════════════════════════════════════════════════════
# SQL backend (SQLite through aiosqlite)
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def sqlite_engine(tmp_path):
    """Fresh file-backed SQLite database with the room table, per test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'rooms.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def sql_session_factory(sqlite_engine, room_dicts):
    factory = create_session_factory(sqlite_engine)
    async with factory() as session:
        session.add_all([RoomModel(**data) for data in room_dicts])
        await session.commit()
    return factory


# ══════════════════════════════════════════════════════════════════════════
# HTTP
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def memory_settings():
    return Settings(_env_file=None, repository_backend="memory", log_level="WARNING")


@pytest_asyncio.fixture
async def test_client(memory_settings, mem_repo):
    """
    HTTPX AsyncClient talking to an app backed by mem_repo.

    Usage:
        async def test_rooms(test_client):
            response = await test_client.get("/rooms")
            assert response.status_code == 200
    """
    from rentomatic.main import create_app

    app = create_app(memory_settings, room_repository=mem_repo)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
