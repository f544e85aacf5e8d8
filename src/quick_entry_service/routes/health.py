"""Health check endpoint."""

from fastapi import APIRouter

from .. import __version__
from ..config import settings
from ..services.batch import sessions

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict[str, str | int]:
    """Return service health and the number of open batch sessions."""
    return {
        "status": "healthy",
        "service": settings.service_name,
        "version": __version__,
        "environment": settings.environment,
        "open_batches": len(sessions),
    }
