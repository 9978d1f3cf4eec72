"""Service layer for per-user video ratings and rating statistics."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from video_api.core.errors import NotFound
from video_api.models.ratings import (
    RatingDeleteResponse,
    RatingGetResponse,
    RatingPutResponse,
    RatingStatsResponse,
)
from video_api.services import aggregates
from .repositories.videos_repo import VideosRepo

logger = logging.getLogger(__name__)


class RatingsService:
    """Upsert/remove ratings embedded in a video and keep the average exact."""

    def __init__(self, db: AsyncIOMotorDatabase, retries: int = 5) -> None:
        """Init with DB adapter and CAS retry budget."""
        self.repo = VideosRepo(db)
        self.retries = retries

    # ---------- CREATE / UPDATE ----------

    async def put_rating(
        self,
        user_id: str,
        video_id: str,
        rating: int,
    ) -> RatingPutResponse:
        """Create or replace the caller's rating, then recompute the mean."""
        rating = aggregates.validate_rating(rating)

        def change(doc: Dict[str, Any]):
            ratings = doc.get('ratings') or []
            created = aggregates.upsert_rating(
                ratings,
                user_id=user_id,
                value=rating,
                now=datetime.now(timezone.utc),
            )
            avg = aggregates.average_rating(ratings)
            result = RatingPutResponse(
                message='Rating added' if created else 'Rating updated',
                average_rating=avg,
                total_ratings=len(ratings),
                user_rating=rating,
                created=created,
            )
            return result, {'ratings': ratings, 'average_rating': avg}

        try:
            result = await self.repo.mutate_engagement(
                video_id, change, retries=self.retries)
        except PyMongoError as error:
            raise RuntimeError(f'mongo_rating_put_error: {error}') from error

        logger.info(
            'rating_upserted',
            extra={'video_id': video_id, 'user_id': user_id,
                   'is_new': result.created},
        )
        return result

    # ---------- READ ----------

    async def get_user_rating(
        self,
        user_id: str,
        video_id: str,
    ) -> RatingGetResponse:
        """Return the caller's rating (or None) with the current aggregate."""
        ratings = await self._load_ratings(video_id)
        entry = aggregates.find_rating(ratings, user_id)
        return RatingGetResponse(
            user_rating=int(entry['rating']) if entry else None,
            average_rating=aggregates.average_rating(ratings),
            total_ratings=len(ratings),
        )

    # ---------- DELETE ----------

    async def delete_rating(
        self,
        user_id: str,
        video_id: str,
    ) -> RatingDeleteResponse:
        """Remove the caller's rating; an empty set averages to 0."""

        def change(doc: Dict[str, Any]):
            ratings = doc.get('ratings') or []
            if aggregates.remove_rating(ratings, user_id) is None:
                raise NotFound('You have not rated this video')
            avg = aggregates.average_rating(ratings)
            result = RatingDeleteResponse(
                message='Rating removed',
                average_rating=avg,
                total_ratings=len(ratings),
            )
            return result, {'ratings': ratings, 'average_rating': avg}

        try:
            result = await self.repo.mutate_engagement(
                video_id, change, retries=self.retries)
        except PyMongoError as error:
            raise RuntimeError(
                f'mongo_rating_delete_error: {error}') from error

        logger.info('rating_removed',
                    extra={'video_id': video_id, 'user_id': user_id})
        return result

    # ---------- STATS ----------

    async def rating_stats(self, video_id: str) -> RatingStatsResponse:
        """Average, total and per-level distribution for a video."""
        ratings = await self._load_ratings(video_id)
        counts, percentages = aggregates.rating_distribution(ratings)
        return RatingStatsResponse(
            average_rating=aggregates.average_rating(ratings),
            total_ratings=len(ratings),
            distribution=counts,
            distribution_percentage=percentages,
        )

    async def _load_ratings(self, video_id: str) -> list:
        try:
            doc = await self.repo.get_by_id(video_id, {'ratings': 1})
        except PyMongoError as error:
            raise RuntimeError(f'mongo_rating_get_error: {error}') from error
        if doc is None:
            raise NotFound('Video not found')
        return doc.get('ratings') or []
