"""Mongo repository for videos and their embedded engagement state."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from motor.motor_asyncio import AsyncIOMotorDatabase

from video_api.core.errors import NotFound
from video_api.db.mongo import object_id_or_none

logger = logging.getLogger(__name__)

T = TypeVar('T')

# change(doc) -> (result, fields to $set or None when nothing changed)
EngagementChange = Callable[[Dict[str, Any]], Tuple[T, Optional[Dict[str, Any]]]]

ENGAGEMENT_PROJECTION = {
    'ratings': 1,
    'comments': 1,
    'average_rating': 1,
    'version': 1,
}


class VideosRepo:
    """Catalog reads, ingestion upserts and engagement writes."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.col = db['videos']

    async def get_by_id(
        self,
        video_id: str,
        projection: Optional[Dict[str, int]] = None,
    ) -> Optional[Dict[str, Any]]:
        """Get a video by its string id; malformed ids return None."""
        oid = object_id_or_none(video_id)
        if oid is None:
            return None
        return await self.col.find_one({'_id': oid}, projection)

    async def list_page(self, offset: int, limit: int) -> List[Dict[str, Any]]:
        """List videos newest first."""
        cursor = self.col.find(
            {},
            sort=[('created_at', -1), ('_id', -1)],
            skip=offset,
            limit=limit,
        )
        return [doc async for doc in cursor]

    async def count(self) -> int:
        return await self.col.count_documents({})

    async def popular(self, limit: int) -> List[Dict[str, Any]]:
        """Most liked videos first."""
        cursor = self.col.find(
            {},
            sort=[('likes_count', -1), ('_id', -1)],
            limit=limit,
        )
        return [doc async for doc in cursor]

    async def find_many(self, video_ids: List[str]) -> List[Dict[str, Any]]:
        """Fetch videos by ids, keeping the order of `video_ids`."""
        oids = [oid for oid in map(object_id_or_none, video_ids) if oid]
        if not oids:
            return []
        docs = {
            str(doc['_id']): doc
            async for doc in self.col.find({'_id': {'$in': oids}})
        }
        return [docs[vid] for vid in video_ids if vid in docs]

    async def upsert_from_catalog(
        self,
        item: Dict[str, Any],
    ) -> Tuple[Dict[str, Any], bool]:
        """Insert a catalog video unless its pexels_id is already stored.

        Existing videos are returned untouched so re-ingestion never resets
        their engagement state. Returns (document, created).
        """
        now = datetime.now(timezone.utc)
        metadata = {k: v for k, v in item.items() if k != 'pexels_id'}
        result = await self.col.update_one(
            {'pexels_id': item['pexels_id']},
            {
                '$setOnInsert': {
                    **metadata,
                    'likes_count': 0,
                    'ratings': [],
                    'average_rating': 0.0,
                    'comments': [],
                    'version': 0,
                    'created_at': now,
                    'updated_at': now,
                },
            },
            upsert=True,
        )
        doc = await self.col.find_one({'pexels_id': item['pexels_id']})
        return doc, result.upserted_id is not None

    async def set_likes_count(self, video_id: str, count: int) -> bool:
        """Store the membership-derived like count."""
        oid = object_id_or_none(video_id)
        if oid is None:
            return False
        result = await self.col.update_one(
            {'_id': oid},
            {'$set': {'likes_count': max(count, 0)}},
        )
        return result.matched_count == 1

    async def save_engagement(
        self,
        video_id: str,
        version: Optional[int],
        fields: Dict[str, Any],
    ) -> bool:
        """Compare-and-set write of embedded arrays and aggregates.

        Succeeds only if nobody bumped `version` since the document was read.
        """
        now = datetime.now(timezone.utc)
        result = await self.col.update_one(
            {'_id': object_id_or_none(video_id), 'version': version},
            {
                '$set': {**fields, 'updated_at': now},
                '$inc': {'version': 1},
            },
        )
        return result.matched_count == 1

    async def mutate_engagement(
        self,
        video_id: str,
        change: EngagementChange,
        retries: int = 5,
    ) -> T:
        """Load, apply `change` in memory and write back the whole arrays.

        A lost compare-and-set reloads the document and reapplies `change`.
        """
        for attempt in range(1, retries + 1):
            doc = await self.get_by_id(video_id, ENGAGEMENT_PROJECTION)
            if doc is None:
                raise NotFound('Video not found')
            result, fields = change(doc)
            if fields is None:
                return result
            if await self.save_engagement(
                    video_id, doc.get('version'), fields):
                return result
            logger.warning(
                'engagement_write_conflict',
                extra={'video_id': video_id, 'attempt': attempt},
            )
        raise RuntimeError(f'engagement_write_conflict: {video_id}')
