from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query

from careersync.api.deps import get_settings, get_stats_service
from careersync.config import Settings
from careersync.schemas.stats import HealthResponse, StatsResponse
from careersync.services.stats import StatsService

router = APIRouter(prefix="/api", tags=["stats"])


@router.get("/stats", response_model=StatsResponse)
def stats(user_id: int = Query(..., alias="userId"), service: StatsService = Depends(get_stats_service)):
    return StatsResponse(**service.for_user(user_id))


@router.get("/health", response_model=HealthResponse)
def health(settings: Settings = Depends(get_settings)):
    return HealthResponse(status="healthy", timestamp=datetime.now(timezone.utc), ai_model=settings.ai.model)
