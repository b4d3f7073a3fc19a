"""Response envelopes shared by all API routes."""

from typing import Any

from pydantic import BaseModel


class ApiResponse(BaseModel):
    """Success envelope: ``{status, data}``."""

    status: int = 200
    data: Any


class ErrorResponse(BaseModel):
    """Failure envelope: ``{status, message}``."""

    status: int
    message: str
