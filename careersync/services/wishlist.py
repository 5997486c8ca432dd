from typing import List, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from careersync.errors import Conflict, NotFound, StorageFailure
from careersync.models.db_models import Job, WishlistItem
from careersync.services.job import JobService


class WishlistService:
    def __init__(self, db: Session, jobs: JobService):
        self.db = db
        self.jobs = jobs

    def add(self, user_id: int, job_id: int) -> WishlistItem:
        self.jobs.get_job(job_id)
        item = WishlistItem(user_id=user_id, job_id=job_id)
        try:
            self.db.add(item)
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise Conflict("Job already in wishlist") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageFailure("Could not update wishlist") from exc
        return item

    def remove(self, user_id: int, job_id: int) -> None:
        try:
            deleted = (
                self.db.query(WishlistItem)
                .filter(WishlistItem.user_id == user_id, WishlistItem.job_id == job_id)
                .delete()
            )
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageFailure("Could not update wishlist") from exc
        if not deleted:
            raise NotFound("Job not found in wishlist")

    def list(self, user_id: int) -> List[Tuple[Job, WishlistItem]]:
        try:
            return (
                self.db.query(Job, WishlistItem)
                .join(WishlistItem, WishlistItem.job_id == Job.id)
                .filter(WishlistItem.user_id == user_id, Job.status == "active")
                .order_by(WishlistItem.created_at.desc(), WishlistItem.id.desc())
                .all()
            )
        except SQLAlchemyError as exc:
            raise StorageFailure("Could not read wishlist") from exc
