"""Health check endpoint."""

from fastapi import APIRouter

from postboard.schemas import HealthStatus

router = APIRouter(prefix="/api/health", tags=["Health"])


@router.get("", response_model=HealthStatus)
async def health() -> HealthStatus:
    return HealthStatus(status="ok")
