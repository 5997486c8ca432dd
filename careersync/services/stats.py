from typing import Dict

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from careersync.errors import StorageFailure
from careersync.models.db_models import Application, Job, WishlistItem


class StatsService:
    def __init__(self, db: Session):
        self.db = db

    def for_user(self, user_id: int) -> Dict[str, int]:
        try:
            total_jobs = self.db.query(func.count(Job.id)).filter(Job.status == "active").scalar()
            applications = self.db.query(func.count(Application.id)).filter(Application.user_id == user_id).scalar()
            wishlist = self.db.query(func.count(WishlistItem.id)).filter(WishlistItem.user_id == user_id).scalar()
            interviews = (
                self.db.query(func.count(Application.id))
                .filter(Application.user_id == user_id, Application.status == "interview")
                .scalar()
            )
        except SQLAlchemyError as exc:
            raise StorageFailure("Could not compute stats") from exc
        return {
            "total_jobs": int(total_jobs or 0),
            "total_applications": int(applications or 0),
            "wishlist_count": int(wishlist or 0),
            "interview_count": int(interviews or 0),
        }
