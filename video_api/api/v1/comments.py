from http import HTTPStatus
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from video_api.dependencies import (
    current_user_id, get_comments_service, get_current_user,
)
from video_api.services.comments_service import CommentsService
from video_api.models.comments import (
    CommentDeleteResponse, CommentListResponse, CommentRequest,
    CommentResponse,
)

router = APIRouter(prefix="/api/videos", tags=["comments"])


@router.post("/{video_id}/comments", response_model=CommentResponse,
             status_code=HTTPStatus.CREATED)
async def add_comment(
    video_id: str,
    body: CommentRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    svc: CommentsService = Depends(get_comments_service),
):
    return await svc.add_comment(user=user, video_id=video_id,
                                 text=body.text)


@router.get("/{video_id}/comments",
            response_model=CommentListResponse,
            status_code=HTTPStatus.OK)
async def list_comments(
    video_id: str,
    # non-positive values fall back to defaults in the service
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
    svc: CommentsService = Depends(get_comments_service),
):
    return await svc.list_comments(video_id=video_id,
                                   page=page,
                                   limit=limit)


@router.put("/{video_id}/comments/{comment_id}",
            response_model=CommentResponse,
            status_code=HTTPStatus.OK)
async def edit_comment(
    video_id: str,
    comment_id: str,
    body: CommentRequest,
    user_id: str = Depends(current_user_id),
    svc: CommentsService = Depends(get_comments_service),
):
    return await svc.edit_comment(user_id=user_id,
                                  video_id=video_id,
                                  comment_id=comment_id,
                                  text=body.text)


@router.delete("/{video_id}/comments/{comment_id}",
               response_model=CommentDeleteResponse,
               status_code=HTTPStatus.OK)
async def delete_comment(
    video_id: str,
    comment_id: str,
    user_id: str = Depends(current_user_id),
    svc: CommentsService = Depends(get_comments_service),
):
    return await svc.delete_comment(user_id=user_id,
                                    video_id=video_id,
                                    comment_id=comment_id)
