import logging
import random
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import sessionmaker

from careersync.api import ai, application, job, stats, wishlist
from careersync.config import Settings, configure_logging, load_settings
from careersync.db import init_db
from careersync.errors import Conflict, MalformedModelOutput, ModelUnavailable, NotFound, StorageFailure
from careersync.services.llm_client import ModelClient

logger = logging.getLogger("careersync.main")


def _error(status_code: int, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail})


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotFound)
    async def not_found(request: Request, exc: NotFound):
        return _error(status.HTTP_404_NOT_FOUND, str(exc) or "Not found")

    @app.exception_handler(Conflict)
    async def conflict(request: Request, exc: Conflict):
        return _error(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(StorageFailure)
    async def storage_failure(request: Request, exc: StorageFailure):
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Storage temporarily unavailable")

    @app.exception_handler(ModelUnavailable)
    @app.exception_handler(MalformedModelOutput)
    async def model_failure(request: Request, exc: Exception):
        logger.warning("AI failure on %s %s: %s", request.method, request.url.path, exc)
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "AI service temporarily unavailable")


def create_app(
    settings: Optional[Settings] = None,
    session_factory: Optional[sessionmaker] = None,
    model_client: Optional[ModelClient] = None,
    rng: Optional[random.Random] = None,
) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="CareerSync API", version="0.1.0")
    app.state.settings = settings
    app.state.session_factory = session_factory or init_db(settings)
    app.state.model_client = model_client or ModelClient(settings.ai)
    app.state.rng = rng or random.Random()

    app.include_router(job.router)
    app.include_router(ai.router)
    app.include_router(application.router)
    app.include_router(wishlist.router)
    app.include_router(stats.router)

    register_error_handlers(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.info("CareerSync API configured with AI model %s", settings.ai.model)
    return app


app = create_app()
