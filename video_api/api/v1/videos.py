from http import HTTPStatus
from typing import Optional

from fastapi import APIRouter, Depends, Query

from video_api.dependencies import current_user_id, get_videos_service
from video_api.models.videos import (
    IngestResponse, VideoDetailResponse, VideoListResponse, VideosResponse,
)
from video_api.services.videos_service import VideosService

router = APIRouter(prefix="/api/videos", tags=["videos"])


# статические пути регистрируем раньше "/{video_id}"
@router.get("/fetch", response_model=IngestResponse,
            status_code=HTTPStatus.OK)
async def fetch_from_catalog(
    query: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    per_page: int = Query(15, ge=1, le=80),
    svc: VideosService = Depends(get_videos_service),
):
    return await svc.ingest(query=query or None, page=page,
                            per_page=per_page)


@router.get("/popular", response_model=VideosResponse,
            status_code=HTTPStatus.OK)
async def popular_videos(
    limit: Optional[int] = Query(None),
    svc: VideosService = Depends(get_videos_service),
):
    return await svc.popular(limit)


@router.get("/liked", response_model=VideosResponse,
            status_code=HTTPStatus.OK)
async def liked_videos(
    user_id: str = Depends(current_user_id),
    svc: VideosService = Depends(get_videos_service),
):
    return await svc.liked_by(user_id)


@router.get("", response_model=VideoListResponse,
            status_code=HTTPStatus.OK)
async def list_videos(
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
    svc: VideosService = Depends(get_videos_service),
):
    return await svc.list_videos(page=page, limit=limit)


@router.get("/{video_id}", response_model=VideoDetailResponse,
            status_code=HTTPStatus.OK)
async def get_video(
    video_id: str,
    svc: VideosService = Depends(get_videos_service),
):
    return await svc.get_video(video_id)
