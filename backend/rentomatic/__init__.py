"""
Rentomatic Backend - Application Package Initializer
=====================================================

What: Marks the `rentomatic` directory as a Python package.
Why:  Enables module imports like `from rentomatic.config import Settings`.
Who:  Used by uvicorn/gunicorn, Alembic, pytest and the `rentomatic-manage` CLI.

Architecture Note:
    The backend is layered so that business rules never see a storage backend:

    ┌─────────────────────────────────────┐
    │        Routes (HTTP boundary)       │  ← query string in, JSON + status out
    ├─────────────────────────────────────┤
    │      Use Cases (business logic)     │  ← request object in, envelope out
    ├─────────────────────────────────────┤
    │     Requests / Responses / Domain   │  ← pydantic models, no I/O
    ├─────────────────────────────────────┤
    │   Repositories (memory | SQL)       │  ← the only layer that touches storage
    └─────────────────────────────────────┘

    Use cases depend on the RoomRepository interface only, so the in-memory
    and SQL repositories are interchangeable.
"""

__version__ = "1.0.0"
