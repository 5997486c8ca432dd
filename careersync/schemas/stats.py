from datetime import datetime

from careersync.schemas.base import CamelModel


class StatsResponse(CamelModel):
    total_jobs: int
    total_applications: int
    wishlist_count: int
    interview_count: int


class HealthResponse(CamelModel):
    status: str
    timestamp: datetime
    ai_model: str
