from fastapi import APIRouter, Depends, Query, status

from careersync.api.deps import get_application_service
from careersync.schemas.application import ApplicationListResponse, ApplicationRequest, ApplicationResponse
from careersync.services.application import ApplicationService

router = APIRouter(prefix="/api/applications", tags=["applications"])


@router.post("", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
def create_application(payload: ApplicationRequest, service: ApplicationService = Depends(get_application_service)):
    application = service.apply(
        user_id=payload.user_id,
        job_id=payload.job_id,
        cover_letter=payload.cover_letter,
        resume_url=payload.resume_url,
    )
    return ApplicationResponse.model_validate(application)


@router.get("", response_model=ApplicationListResponse)
def list_applications(
    user_id: int = Query(..., alias="userId"),
    service: ApplicationService = Depends(get_application_service),
):
    entries = service.list(user_id)
    return ApplicationListResponse(applications=[ApplicationResponse.model_validate(entry) for entry in entries])
