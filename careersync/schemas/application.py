from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict

from careersync.schemas.base import CamelModel


class ApplicationRequest(CamelModel):
    user_id: int
    job_id: int
    cover_letter: Optional[str] = None
    resume_url: Optional[str] = None


class ApplicationResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    job_id: int
    job_title: str
    company_name: Optional[str] = None
    cover_letter: Optional[str] = None
    resume_url: Optional[str] = None
    status: str
    applied_date: datetime


class ApplicationListResponse(CamelModel):
    applications: List[ApplicationResponse]
