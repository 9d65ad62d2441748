from datetime import datetime, timezone

from fastapi import APIRouter

from writing_assistant.core.config import get_settings


router = APIRouter()


@router.get("/health", summary="Service health check", tags=["health"])
async def health_check() -> dict:
    """
    Liveness probe for the service itself; no provider is contacted.
    """
    settings = get_settings()

    return {
        "status": "ok",
        "service": settings.app_name,
        "environment": settings.environment,
        "time": datetime.now(timezone.utc).isoformat(),
    }
