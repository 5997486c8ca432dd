from fastapi import APIRouter, Depends

from careersync.api.deps import get_analysis_service, get_assistant_service
from careersync.schemas.analysis import AnalyzeResumeRequest, AnalyzeResumeResponse
from careersync.schemas.assistant import ChatRequest, ChatResponse, CoverLetterRequest, CoverLetterResponse
from careersync.services.analysis import ResumeAnalysisService
from careersync.services.assistant import AssistantService

router = APIRouter(prefix="/api/ai", tags=["ai"])


@router.post("/analyze-resume", response_model=AnalyzeResumeResponse)
def analyze_resume(payload: AnalyzeResumeRequest, service: ResumeAnalysisService = Depends(get_analysis_service)):
    outcome = service.analyze(user_id=payload.user_id, job_id=payload.job_id, resume_text=payload.resume_text)
    return AnalyzeResumeResponse.from_result(outcome.result, cached=outcome.cached)


@router.post("/generate-cover-letter", response_model=CoverLetterResponse)
def generate_cover_letter(payload: CoverLetterRequest, service: AssistantService = Depends(get_assistant_service)):
    letter = service.cover_letter(
        user_id=payload.user_id,
        job_id=payload.job_id,
        user_experience=payload.user_experience,
        custom_prompt=payload.custom_prompt,
    )
    return CoverLetterResponse(cover_letter=letter)


@router.post("/chat", response_model=ChatResponse)
def chat(payload: ChatRequest, service: AssistantService = Depends(get_assistant_service)):
    reply = service.chat(
        user_id=payload.user_id,
        session_id=payload.session_id,
        message=payload.message,
        context=payload.context,
    )
    return ChatResponse(response=reply)
