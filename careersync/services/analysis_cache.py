import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from careersync.errors import StorageFailure
from careersync.models.db_models import ResumeAnalysis
from careersync.schemas.analysis import AnalysisResult

logger = logging.getLogger("careersync.analysis_cache")


def _to_result(row: ResumeAnalysis) -> AnalysisResult:
    return AnalysisResult(
        score=row.match_score,
        matching_skills=list(row.matching_skills or []),
        missing_skills=list(row.missing_skills or []),
        strengths=list(row.strengths or []),
        suggestions=list(row.suggestions or []),
        degraded=bool(row.degraded),
    )


def _apply(row: ResumeAnalysis, result: AnalysisResult) -> None:
    row.match_score = result.score
    row.matching_skills = list(result.matching_skills)
    row.missing_skills = list(result.missing_skills)
    row.strengths = list(result.strengths)
    row.suggestions = list(result.suggestions)
    row.degraded = result.degraded
    row.analysis_data = result.model_dump()


class AnalysisCache:
    """Stores at most one AnalysisResult per (user, job) pair."""

    def __init__(self, db: Session):
        self.db = db

    def _find(self, user_id: int, job_id: int) -> Optional[ResumeAnalysis]:
        return (
            self.db.query(ResumeAnalysis)
            .filter(ResumeAnalysis.user_id == user_id, ResumeAnalysis.job_id == job_id)
            .order_by(ResumeAnalysis.created_at.desc(), ResumeAnalysis.id.desc())
            .first()
        )

    def lookup(self, user_id: int, job_id: int) -> Optional[AnalysisResult]:
        try:
            row = self._find(user_id, job_id)
        except SQLAlchemyError as exc:
            logger.exception("Analysis lookup failed for user=%s job=%s", user_id, job_id)
            raise StorageFailure("Could not read stored analysis") from exc
        if row is None:
            logger.debug("Analysis cache miss user=%s job=%s", user_id, job_id)
            return None
        logger.debug("Analysis cache hit user=%s job=%s", user_id, job_id)
        return _to_result(row)

    def store(self, user_id: int, job_id: int, result: AnalysisResult) -> None:
        """Persist ``result`` for the pair; a concurrent or earlier write is overwritten."""
        try:
            row = ResumeAnalysis(user_id=user_id, job_id=job_id)
            _apply(row, result)
            self.db.add(row)
            self.db.commit()
            return
        except IntegrityError as exc:
            self.db.rollback()
            conflict = exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Analysis insert failed for user=%s job=%s", user_id, job_id)
            raise StorageFailure("Could not store analysis") from exc

        # Another request stored a result for this pair first: last write wins.
        try:
            row = self._find(user_id, job_id)
            if row is None:
                raise StorageFailure("Could not store analysis") from conflict
            _apply(row, result)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Analysis overwrite failed for user=%s job=%s", user_id, job_id)
            raise StorageFailure("Could not store analysis") from exc
        logger.info("Overwrote concurrent analysis for user=%s job=%s", user_id, job_id)
