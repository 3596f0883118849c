from datetime import datetime, timezone

from fastapi import APIRouter

from testgen.core.config import get_settings
from testgen.services.generator import DEFAULT_ELEMENT_TEMPLATES, DEFAULT_METHOD_TEMPLATES


router = APIRouter()


@router.get("/health", summary="Service health check", tags=["health"])
async def health_check() -> dict:
    """
    Readiness probe that also reports how generation is configured.
    """
    settings = get_settings()

    return {
        "status": "ok",
        "service": settings.app_name,
        "environment": settings.environment,
        "suggester": settings.default_suggester,
        "ai_enhancement_enabled": settings.ai_enhancement_enabled,
        "methods": sorted(DEFAULT_METHOD_TEMPLATES),
        "element_types": sorted(DEFAULT_ELEMENT_TEMPLATES),
        "time": datetime.now(timezone.utc).isoformat(),
    }
