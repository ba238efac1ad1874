from fastapi import APIRouter
from pydantic import BaseModel

from commgate import __version__

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe - is the service running?"""
    return HealthResponse(status="healthy", version=__version__)
