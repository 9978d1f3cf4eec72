from http import HTTPStatus
from fastapi import APIRouter, Depends

from video_api.dependencies import current_user_id, get_favorites_service
from video_api.services.favorites_service import FavoritesService
from video_api.models.favorites import (
    FavoriteAddRequest, FavoriteChangeResponse, FavoritesResponse
)

router = APIRouter(prefix="/api/users/me/favorites", tags=["favorites"])


@router.get(
    "",
    response_model=FavoritesResponse,
    status_code=HTTPStatus.OK)
async def list_favorites(
    user_id: str = Depends(current_user_id),
    svc: FavoritesService = Depends(get_favorites_service),
):
    return await svc.list_favorites(user_id=user_id)


@router.post(
    "",
    response_model=FavoriteChangeResponse,
    status_code=HTTPStatus.CREATED)
async def add_favorite(
    body: FavoriteAddRequest,
    user_id: str = Depends(current_user_id),
    svc: FavoritesService = Depends(get_favorites_service),
):
    return await svc.add_favorite(user_id=user_id, video_ref=body.video_id)


@router.delete(
    "/{video_ref}",
    response_model=FavoriteChangeResponse,
    status_code=HTTPStatus.OK)
async def remove_favorite(
    video_ref: str,
    user_id: str = Depends(current_user_id),
    svc: FavoritesService = Depends(get_favorites_service),
):
    return await svc.remove_favorite(user_id=user_id, video_ref=video_ref)
