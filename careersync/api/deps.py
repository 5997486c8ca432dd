import random
from typing import Iterator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from careersync.config import Settings
from careersync.db import session_scope
from careersync.services.analysis import ResumeAnalysisService
from careersync.services.analysis_cache import AnalysisCache
from careersync.services.application import ApplicationService
from careersync.services.assistant import AssistantService
from careersync.services.job import JobService
from careersync.services.llm_client import ModelClient
from careersync.services.stats import StatsService
from careersync.services.wishlist import WishlistService


def get_db(request: Request) -> Iterator[Session]:
    yield from session_scope(request.app.state.session_factory)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_model_client(request: Request) -> ModelClient:
    return request.app.state.model_client


def get_rng(request: Request) -> random.Random:
    return request.app.state.rng


def get_job_service(db: Session = Depends(get_db)) -> JobService:
    return JobService(db)


def get_analysis_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    model: ModelClient = Depends(get_model_client),
    rng: random.Random = Depends(get_rng),
) -> ResumeAnalysisService:
    return ResumeAnalysisService(
        jobs=JobService(db),
        cache=AnalysisCache(db),
        model=model,
        rng=rng,
        fallback_enabled=settings.analysis_fallback_enabled,
    )


def get_application_service(db: Session = Depends(get_db)) -> ApplicationService:
    return ApplicationService(db, JobService(db))


def get_wishlist_service(db: Session = Depends(get_db)) -> WishlistService:
    return WishlistService(db, JobService(db))


def get_assistant_service(
    db: Session = Depends(get_db), model: ModelClient = Depends(get_model_client)
) -> AssistantService:
    return AssistantService(db, JobService(db), model)


def get_stats_service(db: Session = Depends(get_db)) -> StatsService:
    return StatsService(db)
