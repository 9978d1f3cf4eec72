"""Service layer for the user's favorites list."""

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from video_api.core.errors import InvalidArgument, NotFound
from video_api.models.favorites import (
    FavoriteChangeResponse,
    FavoritesResponse,
)
from .repositories.users_repo import UsersRepo


class FavoritesService:
    """Opaque video references kept on the user, separate from likes."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        """Initialize repository."""
        self.repo = UsersRepo(db)

    async def list_favorites(self, user_id: str) -> FavoritesResponse:
        """Return the user's favorites in insertion order."""
        favorites = await self._favorites(user_id)
        return FavoritesResponse(favorites=favorites, total=len(favorites))

    async def add_favorite(
        self,
        user_id: str,
        video_ref: str,
    ) -> FavoriteChangeResponse:
        """Append a reference; duplicates are rejected."""
        try:
            added = await self.repo.add_favorite(user_id, video_ref)
        except PyMongoError as error:
            raise RuntimeError(
                f'mongo_favorite_add_error: {error}') from error
        favorites = await self._favorites(user_id)
        if not added:
            raise InvalidArgument('Video is already a favorite')
        return FavoriteChangeResponse(
            message='Video added to favorites', favorites=favorites)

    async def remove_favorite(
        self,
        user_id: str,
        video_ref: str,
    ) -> FavoriteChangeResponse:
        """Drop a reference; missing ones are reported."""
        try:
            removed = await self.repo.remove_favorite(user_id, video_ref)
        except PyMongoError as error:
            raise RuntimeError(
                f'mongo_favorite_remove_error: {error}') from error
        favorites = await self._favorites(user_id)
        if not removed:
            raise NotFound('Video is not in favorites')
        return FavoriteChangeResponse(
            message='Video removed from favorites', favorites=favorites)

    async def _favorites(self, user_id: str) -> list[str]:
        try:
            user = await self.repo.get_by_id(user_id)
        except PyMongoError as error:
            raise RuntimeError(
                f'mongo_favorite_list_error: {error}') from error
        if user is None:
            raise NotFound('User not found')
        return list(user.get('favorite_videos') or [])
