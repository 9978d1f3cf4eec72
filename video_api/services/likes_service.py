"""Service layer for the user <-> video like relation."""

from __future__ import annotations

import logging
from typing import Any, Dict

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from video_api.core.errors import NotFound
from video_api.models.likes import LikeToggleResponse
from video_api.services.repositories.users_repo import UsersRepo
from video_api.services.repositories.videos_repo import VideosRepo

logger = logging.getLogger(__name__)


class LikesService:
    """Toggle likes; the user's liked list is the source of truth.

    `likes_count` on the video is recomputed from membership after every
    change instead of being incremented, so it cannot drift.
    """

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.users = UsersRepo(db)
        self.videos = VideosRepo(db)

    async def toggle(self, user_id: str, video_id: str) -> LikeToggleResponse:
        """Flip the caller's like on a video."""
        try:
            video = await self.videos.get_by_id(video_id, {'_id': 1})
            if video is None:
                raise NotFound('Video not found')
            video_id = str(video['_id'])

            if await self.users.remove_liked(user_id, video_id):
                liked = False
            elif await self.users.add_liked(user_id, video_id):
                liked = True
            elif await self.users.get_by_id(user_id) is None:
                raise NotFound('User not found')
            else:
                # a concurrent request added it between our two updates
                liked = True

            count = await self.refresh_count(video_id)
        except PyMongoError as error:
            raise RuntimeError(f'mongo_like_toggle_error: {error}') from error

        logger.info('like_toggled',
                    extra={'video_id': video_id, 'user_id': user_id,
                           'liked': liked, 'likes_count': count})
        return LikeToggleResponse(
            message='Like added' if liked else 'Like removed',
            liked=liked,
            likes_count=count,
        )

    async def refresh_count(self, video_id: str) -> int:
        """Recount members and store the result on the video."""
        count = await self.users.count_likes(video_id)
        await self.videos.set_likes_count(video_id, count)
        return count

    async def withdraw_all(self, user: Dict[str, Any]) -> None:
        """Recount every video a removed user had liked."""
        for video_id in user.get('liked_videos') or []:
            await self.refresh_count(video_id)
