"""Error response schemas for API endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error envelope returned for every failed request."""

    code: str
    message: str
    status: int
    details: dict[str, Any] | None = None
