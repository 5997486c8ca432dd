from fastapi import APIRouter, Depends, Query, status

from careersync.api.deps import get_wishlist_service
from careersync.schemas.job import JobResponse
from careersync.schemas.wishlist import SavedJob, WishlistMessage, WishlistRequest, WishlistResponse
from careersync.services.wishlist import WishlistService

router = APIRouter(prefix="/api/wishlist", tags=["wishlist"])


@router.post("", response_model=WishlistMessage, status_code=status.HTTP_201_CREATED)
def add_to_wishlist(payload: WishlistRequest, service: WishlistService = Depends(get_wishlist_service)):
    service.add(payload.user_id, payload.job_id)
    return WishlistMessage(message="Added to wishlist")


@router.delete("/{job_id}", response_model=WishlistMessage)
def remove_from_wishlist(
    job_id: int,
    user_id: int = Query(..., alias="userId"),
    service: WishlistService = Depends(get_wishlist_service),
):
    service.remove(user_id, job_id)
    return WishlistMessage(message="Removed from wishlist")


@router.get("", response_model=WishlistResponse)
def list_wishlist(
    user_id: int = Query(..., alias="userId"),
    service: WishlistService = Depends(get_wishlist_service),
):
    saved = [
        SavedJob(**JobResponse.model_validate(job).model_dump(), saved_date=item.created_at)
        for job, item in service.list(user_id)
    ]
    return WishlistResponse(jobs=saved)
