from typing import Optional

from fastapi import APIRouter, Depends, Query

from careersync.api.deps import get_job_service
from careersync.schemas.job import JobListResponse, JobResponse
from careersync.services.job import JobService

router = APIRouter(prefix="/api/jobs", tags=["jobs"])


@router.get("", response_model=JobListResponse)
def list_jobs(
    category: Optional[str] = None,
    location: Optional[str] = None,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    jobs: JobService = Depends(get_job_service),
):
    rows = jobs.list_jobs(category=category, location=location, limit=limit, offset=offset)
    return JobListResponse(jobs=[JobResponse.model_validate(row) for row in rows], limit=limit, offset=offset)


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: int, jobs: JobService = Depends(get_job_service)):
    return JobResponse.model_validate(jobs.get_job(job_id, active_only=True))
