from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict

from careersync.schemas.base import CamelModel


class JobResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    company_name: Optional[str] = None
    description: str
    requirements: str
    skills: List[str]
    location: Optional[str] = None
    category: Optional[str] = None
    experience_level: Optional[str] = None
    salary_display: Optional[str] = None
    status: str
    posted_date: datetime


class JobListResponse(CamelModel):
    jobs: List[JobResponse]
    limit: int
    offset: int
