"""
Rentomatic Backend - Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for storage and configuration failures.
Why:   Repositories translate driver-specific exceptions (asyncpg, sqlite,
       OSError) into a small set of our own, so log lines and system-error
       messages read the same whatever backend is configured.
How:   Each exception carries a message and an optional context dict.
       The room-list use case turns any of them into a `system_error`
       envelope. The global handlers in main.py are only a safety net for
       errors raised outside a use case.

Exception Hierarchy:
    RentomaticError (base)
    ├── RepositoryError            → system_error / 500
    │   └── StoreUnavailableError  → system_error / 500 (cannot connect)
    └── ConfigurationError         → CLI exits non-zero

Note that bad client input is NOT an exception here: it is collected as
RequestError values on the request object (see requests/room_list.py).
"""

from typing import Any, Dict, Optional


class RentomaticError(Exception):
    """
    Base exception for all Rentomatic application errors.

    Attributes:
        message:  Human-readable description
        context:  Additional debug info (logged but NOT returned to clients)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class RepositoryError(RentomaticError):
    """
    Raised when a repository cannot complete a query.

    When:  Bad SQL, schema mismatch, constraint problems, driver errors.
    The original exception is chained (`raise ... from exc`) and its type name
    is stored in context for the logs.
    """

    def __init__(
        self,
        message: str = "The room store failed to complete the query",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreUnavailableError(RepositoryError):
    """
    Raised when the room store cannot be reached at all.

    When:  Postgres is down, the host does not resolve, credentials are
           rejected, or the connection drops mid-query.
    """

    def __init__(
        self,
        message: str = "The room store is unreachable",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConfigurationError(RentomaticError):
    """
    Raised when an orchestration config file is missing or malformed.

    Who:  rentomatic.manage, before any subprocess is started.
    """

    def __init__(
        self,
        message: str = "Invalid configuration",
        path: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(message=message, context=ctx)
        self.path = path
