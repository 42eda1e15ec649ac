from datetime import datetime, timezone

from fastapi import APIRouter

from services.dashboard import SNAPSHOT_CACHE, SNAPSHOT_KEY
from utils.settings import get_settings

router = APIRouter()

SERVICE_NAME = "ai-24h-radar"


@router.get("/health", summary="Health check", tags=["Health"])
@router.head("/health", include_in_schema=False)
async def health_check() -> dict:
    """
    Basic health/status route for uptime checks.
    """
    settings = get_settings()
    snapshot = SNAPSHOT_CACHE.get(SNAPSHOT_KEY)
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "environment": settings.environment,
        "snapshot_generated_at": snapshot.generated_at.isoformat() if snapshot else None,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
