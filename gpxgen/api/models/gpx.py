"""
Pydantic Models for the GPX generator API

Response contracts for /generate-gpx errors, the service banner and the
health check. The request body is validated by core.gpx.validation so
that malformed payloads get the exact messages clients expect.
"""

from typing import Optional
from pydantic import BaseModel, Field


class GpxErrorResponse(BaseModel):
    """
    Error body returned by POST /generate-gpx.

    Attributes:
        message: Human-readable reason (validation message, or a generic server message)
        error: Underlying cause, only set for server-side failures
    """
    message: str = Field(..., description="Human-readable error message")
    error: Optional[str] = Field(default=None, description="Underlying cause for server-side failures")

    model_config = {
        "json_schema_extra": {
            "example": {
                "message": "points array required, minimum 2 points"
            }
        }
    }


class HealthStatus(BaseModel):
    status: str = Field(default="ok", description="Service status")
    version: str = Field(..., description="Package version")
