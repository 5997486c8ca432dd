from __future__ import annotations

import random
from pathlib import Path
from typing import Any, Callable

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from careersync.config import AIConfig, Settings
from careersync.db import Base, build_engine
from careersync.main import create_app
from careersync.models.db_models import Job, User
from tests.fakes import FakeModelClient


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'careersync.sqlite3'}",
        ai=AIConfig(api_key="test-key"),
        log_level="DEBUG",
    )


@pytest.fixture
def session_factory(settings: Settings) -> sessionmaker:
    engine = build_engine(settings.database_url)
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    yield factory
    engine.dispose()


@pytest.fixture
def db(session_factory: sessionmaker) -> Session:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def user(db: Session) -> User:
    row = User(name="Ada Lovelace", email="ada@example.com", hashed_password="x", skills=["SQL", "Python"])
    db.add(row)
    db.commit()
    return row


@pytest.fixture
def make_job(db: Session) -> Callable[..., Job]:
    def _make(**overrides: Any) -> Job:
        fields = {
            "title": "Backend Engineer",
            "company_name": "Acme Labs",
            "description": "Build and operate REST services.",
            "requirements": "5y Node",
            "skills": ["SQL", "APIs"],
            "location": "Remote",
            "category": "engineering",
            "status": "active",
        }
        fields.update(overrides)
        job = Job(**fields)
        db.add(job)
        db.commit()
        return job

    return _make


@pytest.fixture
def job(make_job: Callable[..., Job]) -> Job:
    return make_job()


@pytest.fixture
def model() -> FakeModelClient:
    return FakeModelClient()


@pytest.fixture
def client(settings: Settings, session_factory: sessionmaker, model: FakeModelClient):
    app = create_app(settings=settings, session_factory=session_factory, model_client=model, rng=random.Random(7))
    with TestClient(app) as test_client:
        yield test_client
