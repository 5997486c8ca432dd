from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from careersync.errors import Conflict, StorageFailure
from careersync.models.db_models import Application
from careersync.services.job import JobService


class ApplicationService:
    def __init__(self, db: Session, jobs: JobService):
        self.db = db
        self.jobs = jobs

    def apply(
        self, user_id: int, job_id: int, cover_letter: Optional[str] = None, resume_url: Optional[str] = None
    ) -> Application:
        job = self.jobs.get_job(job_id, active_only=True)
        try:
            existing = (
                self.db.query(Application)
                .filter(Application.user_id == user_id, Application.job_id == job_id)
                .first()
            )
        except SQLAlchemyError as exc:
            raise StorageFailure("Could not read applications") from exc
        if existing is not None:
            raise Conflict("Already applied to this job")

        application = Application(
            user_id=user_id,
            job_id=job_id,
            job_title=job.title,
            company_name=job.company_name,
            cover_letter=cover_letter,
            resume_url=resume_url,
        )
        try:
            self.db.add(application)
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise Conflict("Already applied to this job") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageFailure("Could not create application") from exc
        return application

    def list(self, user_id: int) -> List[Application]:
        try:
            return (
                self.db.query(Application)
                .filter(Application.user_id == user_id)
                .order_by(Application.applied_date.desc(), Application.id.desc())
                .all()
            )
        except SQLAlchemyError as exc:
            raise StorageFailure("Could not read applications") from exc
