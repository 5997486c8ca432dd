from typing import Any, Dict, Optional

from pydantic import Field

from careersync.schemas.base import CamelModel


class CoverLetterRequest(CamelModel):
    user_id: int
    job_id: int
    user_experience: Optional[str] = None
    custom_prompt: Optional[str] = None


class CoverLetterResponse(CamelModel):
    cover_letter: str


class ChatRequest(CamelModel):
    user_id: int
    message: str = Field(min_length=1)
    session_id: str = "default"
    context: Dict[str, Any] = Field(default_factory=dict)


class ChatResponse(CamelModel):
    response: str
