import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from careersync.errors import StorageFailure
from careersync.models.db_models import AIConversation, User
from careersync.services.job import JobService
from careersync.services.llm_client import ModelClient
from careersync.services.prompts import (
    COVER_LETTER_SYSTEM_PROMPT,
    build_chat_system_prompt,
    build_cover_letter_prompt,
)

logger = logging.getLogger("careersync.assistant")

HISTORY_LIMIT = 10


class AssistantService:
    """Cover letters and career chat. Model errors propagate as ModelUnavailable."""

    def __init__(self, db: Session, jobs: JobService, model: ModelClient):
        self.db = db
        self.jobs = jobs
        self.model = model

    def _user(self, user_id: int) -> Optional[User]:
        try:
            return self.db.get(User, user_id)
        except SQLAlchemyError as exc:
            raise StorageFailure("Could not read user") from exc

    def cover_letter(
        self,
        user_id: int,
        job_id: int,
        user_experience: Optional[str] = None,
        custom_prompt: Optional[str] = None,
    ) -> str:
        job = self.jobs.get_job(job_id)
        requirement = self.jobs.to_requirement(job)
        user = self._user(user_id)
        prompt = build_cover_letter_prompt(
            requirement,
            company_name=job.company_name,
            applicant_name=user.name if user else None,
            applicant_skills=list(user.skills or []) if user else [],
            user_experience=user_experience,
            custom_prompt=custom_prompt,
        )
        return self.model.complete(COVER_LETTER_SYSTEM_PROMPT, prompt)

    def history(self, user_id: int, session_id: str) -> List[Dict[str, str]]:
        try:
            rows = (
                self.db.query(AIConversation)
                .filter(AIConversation.user_id == user_id, AIConversation.session_id == session_id)
                .order_by(AIConversation.created_at.desc(), AIConversation.id.desc())
                .limit(HISTORY_LIMIT)
                .all()
            )
        except SQLAlchemyError as exc:
            raise StorageFailure("Could not read conversation") from exc
        return [{"role": row.role, "content": row.content} for row in reversed(rows)]

    def chat(self, user_id: int, session_id: str, message: str, context: Optional[Dict[str, Any]] = None) -> str:
        context = context or {}
        user = self._user(user_id)
        ai_context = {
            "userName": user.name if user else None,
            "userSkills": list(user.skills or []) if user else [],
            "conversationHistory": self.history(user_id, session_id),
            **context,
        }
        reply = self.model.complete(build_chat_system_prompt(user.name if user else None, ai_context), message)

        try:
            self.db.add_all(
                [
                    AIConversation(
                        user_id=user_id, session_id=session_id, role="user", content=message, context=context
                    ),
                    AIConversation(
                        user_id=user_id, session_id=session_id, role="assistant", content=reply, context=context
                    ),
                ]
            )
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Could not persist chat turn for user=%s session=%s", user_id, session_id)
            raise StorageFailure("Could not store conversation") from exc
        return reply
