from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from careersync.errors import NotFound, StorageFailure
from careersync.models.db_models import Job
from careersync.schemas.analysis import JobRequirement


class JobService:
    def __init__(self, db: Session):
        self.db = db

    def get_job(self, job_id: int, active_only: bool = False) -> Job:
        try:
            query = self.db.query(Job).filter(Job.id == job_id)
            if active_only:
                query = query.filter(Job.status == "active")
            job = query.first()
        except SQLAlchemyError as exc:
            raise StorageFailure("Could not read job") from exc
        if job is None:
            raise NotFound("Job not found")
        return job

    def get_requirement(self, job_id: int) -> JobRequirement:
        return self.to_requirement(self.get_job(job_id))

    @staticmethod
    def to_requirement(job: Job) -> JobRequirement:
        return JobRequirement(
            title=job.title,
            description=job.description or "",
            requirements=job.requirements or "",
            skills=[str(skill) for skill in job.skills or []],
        )

    def list_jobs(
        self,
        category: Optional[str] = None,
        location: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Job]:
        try:
            query = self.db.query(Job).filter(Job.status == "active")
            if category:
                query = query.filter(Job.category == category)
            if location:
                query = query.filter(Job.location.ilike(f"%{location}%"))
            return query.order_by(Job.posted_date.desc(), Job.id.desc()).offset(offset).limit(limit).all()
        except SQLAlchemyError as exc:
            raise StorageFailure("Could not list jobs") from exc
