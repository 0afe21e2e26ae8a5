# app/api/routers/health.py

from fastapi import APIRouter, Request

from app.config.settings import get_settings

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    """Health check with identity and correlation ID from request state."""
    settings = get_settings()
    return {
        "status": "ok",
        "identity_id": request.state.identity_id,
        "correlation_id": request.state.correlation_id,
        "environment": settings.environment,
        "version": settings.version,
    }
