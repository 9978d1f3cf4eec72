"""Comments service: author-owned comments embedded in a video."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from video_api.core.errors import Forbidden, InvalidArgument, NotFound
from video_api.core.pagination import page_request, slice_page, total_pages
from video_api.models.comments import (
    CommentDeleteResponse,
    CommentItem,
    CommentListResponse,
    CommentResponse,
)
from video_api.services.repositories.videos_repo import VideosRepo

logger = logging.getLogger(__name__)

COMMENTS_KEY = 'comments'


def clean_comment_text(text: Optional[str], max_length: int) -> str:
    """Strip and validate comment text; runs before any storage access."""
    cleaned = (text or '').strip()
    if not cleaned:
        raise InvalidArgument('Comment text is required')
    if len(cleaned) > max_length:
        raise InvalidArgument(
            f'Comment cannot be longer than {max_length} characters')
    return cleaned


def find_comment(
    comments: List[Dict[str, Any]],
    comment_id: str,
) -> Dict[str, Any]:
    for comment in comments:
        if comment['id'] == comment_id:
            return comment
    raise NotFound('Comment not found')


def newest_first(comments: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Sort by created_at desc; equal timestamps keep later inserts first."""
    indexed = sorted(
        enumerate(comments),
        key=lambda pair: (pair[1]['created_at'], pair[0]),
        reverse=True,
    )
    return [comment for _, comment in indexed]


def to_item(comment: Dict[str, Any]) -> CommentItem:
    return CommentItem(
        id=comment['id'],
        user_id=comment['user_id'],
        user_name=comment['user_name'],
        text=comment['text'],
        created_at=comment['created_at'],
    )


class CommentsService:
    """Add, edit, delete and list comments of a video."""

    def __init__(
            self,
            db: AsyncIOMotorDatabase,
            max_length: int = 500,
            retries: int = 5,
            default_page_size: int = 20,
            max_page_size: int = 100) -> None:
        self.repo = VideosRepo(db)
        self.max_length = max_length
        self.retries = retries
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    async def _mutate(self, video_id: str, change, op: str):
        try:
            return await self.repo.mutate_engagement(
                video_id, change, retries=self.retries)
        except PyMongoError as error:
            raise RuntimeError(f'mongo_comment_{op}_error: {error}') from error

    # ---------- CREATE ----------

    async def add_comment(
            self,
            user: Dict[str, Any],
            video_id: str,
            text: str) -> CommentResponse:
        """Append a comment with a snapshot of the author's name."""
        text = clean_comment_text(text, self.max_length)
        comment = {
            'id': str(ObjectId()),
            'user_id': str(user['_id']),
            'user_name': user.get('name', ''),
            'text': text,
            'created_at': datetime.now(timezone.utc),
        }

        def change(doc: Dict[str, Any]):
            comments = doc.get(COMMENTS_KEY) or []
            comments.append(comment)
            return len(comments), {COMMENTS_KEY: comments}

        total = await self._mutate(video_id, change, 'create')
        logger.info('comment_added',
                    extra={'video_id': video_id, 'comment_id': comment['id']})
        return CommentResponse(
            message='Comment added',
            comment=to_item(comment),
            total_comments=total,
        )

    # ---------- UPDATE (EDIT) ----------

    async def edit_comment(
            self,
            user_id: str,
            video_id: str,
            comment_id: str,
            text: str) -> CommentResponse:
        """Replace text by the author; created_at stays as it was."""
        text = clean_comment_text(text, self.max_length)

        def change(doc: Dict[str, Any]):
            comments = doc.get(COMMENTS_KEY) or []
            comment = find_comment(comments, comment_id)
            if comment['user_id'] != user_id:
                raise Forbidden('You can only edit your own comments')
            comment['text'] = text
            return (comment, len(comments)), {COMMENTS_KEY: comments}

        comment, total = await self._mutate(video_id, change, 'update')
        return CommentResponse(
            message='Comment updated',
            comment=to_item(comment),
            total_comments=total,
        )

    # ---------- DELETE ----------

    async def delete_comment(
            self,
            user_id: str,
            video_id: str,
            comment_id: str) -> CommentDeleteResponse:
        """Remove a comment by its id; only the author may do it."""

        def change(doc: Dict[str, Any]):
            comments = doc.get(COMMENTS_KEY) or []
            comment = find_comment(comments, comment_id)
            if comment['user_id'] != user_id:
                raise Forbidden('You can only delete your own comments')
            comments.remove(comment)
            return len(comments), {COMMENTS_KEY: comments}

        total = await self._mutate(video_id, change, 'delete')
        logger.info('comment_deleted',
                    extra={'video_id': video_id, 'comment_id': comment_id})
        return CommentDeleteResponse(message='Comment deleted',
                                     total_comments=total)

    # ---------- LIST ----------

    async def list_comments(
            self,
            video_id: str,
            page: Optional[int] = None,
            limit: Optional[int] = None) -> CommentListResponse:
        """Newest-first page of comments with page arithmetic."""
        try:
            doc = await self.repo.get_by_id(video_id, {COMMENTS_KEY: 1})
        except PyMongoError as error:
            raise RuntimeError(f'mongo_comment_list_error: {error}') from error
        if doc is None:
            raise NotFound('Video not found')

        req = page_request(page, limit,
                           default_limit=self.default_page_size,
                           max_limit=self.max_page_size)
        comments = newest_first(doc.get(COMMENTS_KEY) or [])
        return CommentListResponse(
            comments=[to_item(c) for c in slice_page(comments, req)],
            current_page=req.page,
            total_pages=total_pages(len(comments), req.limit),
            total_comments=len(comments),
        )
