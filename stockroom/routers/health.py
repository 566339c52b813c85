from datetime import datetime, timezone

from fastapi import APIRouter

from stockroom.config import get_settings

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check():
    settings = get_settings()
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
        "version": settings.APP_VERSION,
        "time": datetime.now(timezone.utc).isoformat(),
    }
