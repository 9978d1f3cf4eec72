from http import HTTPStatus
from fastapi import APIRouter, Depends, Response

from video_api.dependencies import current_user_id, get_ratings_service
from video_api.services.ratings_service import RatingsService
from video_api.models.ratings import (
    RatingDeleteResponse, RatingGetResponse, RatingPutResponse,
    RatingRequest, RatingStatsResponse,
)

router = APIRouter(prefix="/api/videos", tags=["ratings"])


@router.post(
    "/{video_id}/rating",
    response_model=RatingPutResponse,
    status_code=HTTPStatus.OK)
async def set_rating(
    video_id: str,
    body: RatingRequest,
    response: Response,
    user_id: str = Depends(current_user_id),
    svc: RatingsService = Depends(get_ratings_service),
):
    result = await svc.put_rating(
        user_id=user_id,
        video_id=video_id,
        rating=body.rating)
    if result.created:
        response.status_code = HTTPStatus.CREATED
    return result


@router.get(
    "/{video_id}/rating",
    response_model=RatingGetResponse,
    status_code=HTTPStatus.OK)
async def get_rating(
    video_id: str,
    user_id: str = Depends(current_user_id),
    svc: RatingsService = Depends(get_ratings_service),
) -> RatingGetResponse:
    return await svc.get_user_rating(user_id=user_id, video_id=video_id)


@router.delete(
    "/{video_id}/rating",
    response_model=RatingDeleteResponse,
    status_code=HTTPStatus.OK)
async def delete_rating(
    video_id: str,
    user_id: str = Depends(current_user_id),
    svc: RatingsService = Depends(get_ratings_service),
) -> RatingDeleteResponse:
    return await svc.delete_rating(user_id=user_id, video_id=video_id)


@router.get(
    "/{video_id}/rating/stats",
    response_model=RatingStatsResponse,
    status_code=HTTPStatus.OK)
async def rating_stats(
    video_id: str,
    svc: RatingsService = Depends(get_ratings_service),
) -> RatingStatsResponse:
    return await svc.rating_stats(video_id)
