from http import HTTPStatus
from fastapi import APIRouter, Depends
from video_api.dependencies import current_user_id, get_likes_service
from video_api.models.likes import LikeToggleResponse
from video_api.services.likes_service import LikesService

router = APIRouter(prefix="/api/videos", tags=["likes"])


@router.post(
    "/{video_id}/like",
    response_model=LikeToggleResponse,
    status_code=HTTPStatus.OK)
async def toggle_like(
    video_id: str,
    user_id: str = Depends(current_user_id),
    svc: LikesService = Depends(get_likes_service),
) -> LikeToggleResponse:
    return await svc.toggle(user_id=user_id, video_id=video_id)
