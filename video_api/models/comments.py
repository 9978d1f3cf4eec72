from datetime import datetime
from typing import List

from video_api.models.common import CamelModel


class CommentRequest(CamelModel):
    # length limits are configurable, checked in the service
    text: str


class CommentItem(CamelModel):
    id: str
    user_id: str
    user_name: str
    text: str
    created_at: datetime


class CommentResponse(CamelModel):
    message: str
    comment: CommentItem
    total_comments: int


class CommentDeleteResponse(CamelModel):
    message: str
    total_comments: int


class CommentListResponse(CamelModel):
    comments: List[CommentItem]
    current_page: int
    total_pages: int
    total_comments: int
