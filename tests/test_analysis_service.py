from __future__ import annotations

import json
import random

import pytest

from careersync.errors import MalformedModelOutput, ModelUnavailable, NotFound, StorageFailure
from careersync.models.db_models import ResumeAnalysis
from careersync.schemas.analysis import AnalysisResult
from careersync.services.analysis import ResumeAnalysisService
from careersync.services.analysis_cache import AnalysisCache
from careersync.services.job import JobService
from careersync.services.prompts import ANALYSIS_SYSTEM_PROMPT

from tests.fakes import FakeModelClient

RESUME = "Built REST APIs for 6 years using SQL databases."
MODEL_REPLY = json.dumps(
    {
        "score": 82,
        "matchingSkills": ["SQL", "APIs"],
        "missingSkills": [],
        "strengths": ["Experience"],
        "suggestions": ["Add metrics"],
    }
)


def _service(db, model, fallback_enabled: bool = True) -> ResumeAnalysisService:
    return ResumeAnalysisService(
        jobs=JobService(db),
        cache=AnalysisCache(db),
        model=model,
        rng=random.Random(11),
        fallback_enabled=fallback_enabled,
    )


def test_fresh_analysis_uses_model_reply(db, user, job) -> None:
    model = FakeModelClient([MODEL_REPLY])
    outcome = _service(db, model).analyze(user.id, job.id, RESUME)

    assert outcome.cached is False
    assert outcome.result == AnalysisResult(
        score=82,
        matching_skills=["SQL", "APIs"],
        missing_skills=[],
        strengths=["Experience"],
        suggestions=["Add metrics"],
        degraded=False,
    )
    system_prompt, user_prompt = model.calls[0]
    assert system_prompt == ANALYSIS_SYSTEM_PROMPT
    assert "JOB TITLE: Backend Engineer" in user_prompt
    assert RESUME in user_prompt


def test_repeat_analysis_is_served_from_store_without_model_call(db, user, job) -> None:
    model = FakeModelClient([MODEL_REPLY])
    service = _service(db, model)
    first = service.analyze(user.id, job.id, RESUME)

    second = service.analyze(user.id, job.id, "a completely different resume")

    assert second.cached is True
    assert second.result == first.result
    assert len(model.calls) == 1


def test_unparseable_reply_degrades_to_fallback(db, user, job) -> None:
    outcome = _service(db, FakeModelClient(["Sorry, I cannot help."])).analyze(user.id, job.id, RESUME)

    assert outcome.cached is False
    assert outcome.result.degraded is True
    assert 50 <= outcome.result.score < 90
    assert outcome.result.matching_skills
    assert outcome.result.missing_skills
    assert outcome.result.strengths
    assert outcome.result.suggestions


def test_model_outage_degrades_to_fallback_and_is_stored(db, user, job) -> None:
    service = _service(db, FakeModelClient([ModelUnavailable("AI service error: 502")]))
    outcome = service.analyze(user.id, job.id, RESUME)

    assert outcome.result.degraded is True
    cached = service.analyze(user.id, job.id, RESUME)
    assert cached.cached is True
    assert cached.result == outcome.result


def test_unknown_job_raises_not_found_without_store_write(db, user) -> None:
    model = FakeModelClient()
    with pytest.raises(NotFound):
        _service(db, model).analyze(user.id, 9999, RESUME)

    assert model.calls == []
    assert db.query(ResumeAnalysis).count() == 0


def test_disabled_fallback_propagates_model_errors(db, user, job) -> None:
    with pytest.raises(ModelUnavailable):
        _service(db, FakeModelClient([ModelUnavailable("down")]), fallback_enabled=False).analyze(
            user.id, job.id, RESUME
        )
    with pytest.raises(MalformedModelOutput):
        _service(db, FakeModelClient(["not json"]), fallback_enabled=False).analyze(user.id, job.id, RESUME)

    assert db.query(ResumeAnalysis).count() == 0


def test_concurrent_first_analyses_both_succeed_and_one_result_survives(session_factory, user, job) -> None:
    # The second request runs while the first one waits on the model, so both miss the store.
    second_session = session_factory()
    second_reply = json.dumps({"score": 30, "matchingSkills": ["SQL"]})
    second_outcomes = []

    def run_second_request() -> str:
        second = _service(second_session, FakeModelClient([second_reply]))
        second_outcomes.append(second.analyze(user.id, job.id, RESUME))
        return MODEL_REPLY

    first_session = session_factory()
    try:
        first_outcome = _service(first_session, FakeModelClient([run_second_request])).analyze(
            user.id, job.id, RESUME
        )

        assert first_outcome.cached is False
        assert second_outcomes[0].cached is False
        stored = AnalysisCache(first_session).lookup(user.id, job.id)
        assert stored in (first_outcome.result, second_outcomes[0].result)
        assert first_session.query(ResumeAnalysis).count() == 1
    finally:
        first_session.close()
        second_session.close()


class _FailingCache(AnalysisCache):
    def __init__(self, db, fail_on: str):
        super().__init__(db)
        self.fail_on = fail_on

    def lookup(self, user_id, job_id):
        if self.fail_on == "lookup":
            raise StorageFailure("Could not read stored analysis")
        return super().lookup(user_id, job_id)

    def store(self, user_id, job_id, result):
        if self.fail_on == "store":
            raise StorageFailure("Could not store analysis")
        super().store(user_id, job_id, result)


def test_store_failure_after_model_reply_propagates(db, user, job) -> None:
    model = FakeModelClient([MODEL_REPLY])
    service = ResumeAnalysisService(
        jobs=JobService(db), cache=_FailingCache(db, "store"), model=model, rng=random.Random(11)
    )

    with pytest.raises(StorageFailure):
        service.analyze(user.id, job.id, RESUME)
    assert len(model.calls) == 1
    assert db.query(ResumeAnalysis).count() == 0


def test_lookup_failure_propagates_without_model_call(db, user, job) -> None:
    model = FakeModelClient([MODEL_REPLY])
    service = ResumeAnalysisService(
        jobs=JobService(db), cache=_FailingCache(db, "lookup"), model=model, rng=random.Random(11)
    )

    with pytest.raises(StorageFailure):
        service.analyze(user.id, job.id, RESUME)
    assert model.calls == []
