"""
Rentomatic Backend - Pydantic Response Schemas
===============================================

What:  The JSON contract of the HTTP API.
Why:   The domain Room may grow fields the API should not expose; the schema
       fixes exactly what clients receive and documents it in OpenAPI.
How:   RoomResponse is built from a domain Room via `from_attributes`.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class RoomResponse(BaseModel):
    """One room as returned by GET /rooms."""

    id: Optional[int] = Field(default=None, description="Store-assigned identifier")
    code: str = Field(description="Unique room code (UUID)")
    size: Optional[int] = Field(description="Room size in square metres")
    price: Optional[int] = Field(description="Price per night")
    longitude: Optional[float] = Field(description="Longitude (WGS84)")
    latitude: Optional[float] = Field(description="Latitude (WGS84)")

    model_config = {"from_attributes": True}


class RequestErrorItem(BaseModel):
    parameter: str
    code: str
    message: str


class ErrorDetails(BaseModel):
    errors: List[RequestErrorItem] = Field(description="One entry per rejected parameter")


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example (GET /rooms?filter_price_min=abc):
        {
            "error": "parameters_error",
            "message": "price_min: Value 'abc' is not a valid price",
            "details": {"errors": [{"parameter": "price_min", "code": "invalid_value", ...}]},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code (the response tag)")
    message: str = Field(description="Human-readable error description")
    details: Optional[ErrorDetails] = Field(default=None, description="Present for parameters_error only")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and store status."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    repository: str = Field(description="Configured backend: sql, memory")
    database: str = Field(description="Store connectivity: connected, disconnected, not_applicable")
    uptime_seconds: float = Field(description="Seconds since service started")

