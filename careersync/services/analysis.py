import logging
import random
from dataclasses import dataclass
from typing import Optional

from careersync.errors import ModelUnavailable
from careersync.schemas.analysis import AnalysisResult
from careersync.services.analysis_cache import AnalysisCache
from careersync.services.job import JobService
from careersync.services.llm_client import ModelClient
from careersync.services.normalizer import normalize_analysis, parse_analysis
from careersync.services.prompts import ANALYSIS_SYSTEM_PROMPT, build_analysis_prompt

logger = logging.getLogger("careersync.analysis")


@dataclass
class AnalysisOutcome:
    result: AnalysisResult
    cached: bool


class ResumeAnalysisService:
    """Scores a resume against a job, reusing the stored result for the (user, job) pair.

    Model failures (unreachable endpoint or an unparseable reply) degrade to a
    placeholder result flagged ``degraded=True`` unless ``fallback_enabled`` is
    False, in which case they propagate. Missing jobs and storage errors always
    propagate.
    """

    def __init__(
        self,
        jobs: JobService,
        cache: AnalysisCache,
        model: ModelClient,
        rng: Optional[random.Random] = None,
        fallback_enabled: bool = True,
    ):
        self.jobs = jobs
        self.cache = cache
        self.model = model
        self.rng = rng or random.Random()
        self.fallback_enabled = fallback_enabled

    def analyze(self, user_id: int, job_id: int, resume_text: str) -> AnalysisOutcome:
        job = self.jobs.get_requirement(job_id)

        stored = self.cache.lookup(user_id, job_id)
        if stored is not None:
            return AnalysisOutcome(result=stored, cached=True)

        prompt = build_analysis_prompt(job, resume_text)
        result = self._score(prompt)
        self.cache.store(user_id, job_id, result)
        logger.info(
            "Stored analysis user=%s job=%s score=%s degraded=%s", user_id, job_id, result.score, result.degraded
        )
        return AnalysisOutcome(result=result, cached=False)

    def _score(self, prompt: str) -> AnalysisResult:
        try:
            raw: Optional[str] = self.model.complete(ANALYSIS_SYSTEM_PROMPT, prompt)
        except ModelUnavailable:
            if not self.fallback_enabled:
                raise
            raw = None
        if not self.fallback_enabled:
            return parse_analysis(raw)
        return normalize_analysis(raw, self.rng)
