"""Health check endpoints."""

from fastapi import APIRouter, Request

from tokenswap.config import get_settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "tokenswap"}


@router.get("/health/detailed")
async def detailed_health(request: Request):
    """Detailed health check with configuration info."""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": "tokenswap",
        "version": "0.1.0",
        "engine_deployed": getattr(request.app.state, "swap_engine", None) is not None,
        "config": settings.get_safe_dict(),
    }
