"""
Health check API endpoints.

Routes: GET /health, GET /health/store

Dependencies: jobstatus.boundary
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from jobstatus.api.deps import get_status_store
from jobstatus.boundary.kv.status_store import StatusStore
from jobstatus.core.exceptions import TransientStoreError


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/store", response_model=HealthResponse)
def health_check_store(
    status_store: StatusStore = Depends(get_status_store),
) -> HealthResponse:
    """Status store health check."""
    try:
        reachable = status_store.ping()
    except TransientStoreError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message)
    if not reachable:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Status store did not answer ping",
        )
    return HealthResponse(status="healthy", message="Status store connection OK")
