from datetime import datetime
from typing import List

from careersync.schemas.base import CamelModel
from careersync.schemas.job import JobResponse


class WishlistRequest(CamelModel):
    user_id: int
    job_id: int


class WishlistMessage(CamelModel):
    message: str


class SavedJob(JobResponse):
    saved_date: datetime


class WishlistResponse(CamelModel):
    jobs: List[SavedJob]
