"""Service layer for the video catalog: listing and ingestion."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from video_api.core.errors import NotFound
from video_api.core.pagination import page_request, total_pages
from video_api.models.videos import (
    IngestResponse,
    VideoDetailResponse,
    VideoItem,
    VideoListResponse,
    VideosResponse,
)
from video_api.services.catalog_client import PexelsClient, catalog_item
from video_api.services.repositories.users_repo import UsersRepo
from video_api.services.repositories.videos_repo import VideosRepo

logger = logging.getLogger(__name__)


def to_video_item(doc: Dict[str, Any]) -> VideoItem:
    return VideoItem(
        id=str(doc['_id']),
        pexels_id=doc['pexels_id'],
        width=doc.get('width', 0),
        height=doc.get('height', 0),
        url=doc.get('url', ''),
        image=doc.get('image', ''),
        duration=doc.get('duration', 0),
        user=doc['user'],
        video_files=doc.get('video_files', []),
        video_pictures=doc.get('video_pictures', []),
        likes_count=int(doc.get('likes_count', 0)),
        average_rating=float(doc.get('average_rating', 0.0)),
        total_ratings=len(doc.get('ratings') or []),
        total_comments=len(doc.get('comments') or []),
        created_at=doc.get('created_at'),
    )


class VideosService:
    """Read side of the catalog plus Pexels ingestion."""

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        catalog: Optional[PexelsClient] = None,
        default_page_size: int = 20,
        max_page_size: int = 100,
    ) -> None:
        self.repo = VideosRepo(db)
        self.users = UsersRepo(db)
        self.catalog = catalog
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    async def list_videos(
        self,
        page: Optional[int],
        limit: Optional[int],
    ) -> VideoListResponse:
        req = page_request(page, limit,
                           default_limit=self.default_page_size,
                           max_limit=self.max_page_size)
        try:
            docs = await self.repo.list_page(req.offset, req.limit)
            total = await self.repo.count()
        except PyMongoError as error:
            raise RuntimeError(f'mongo_video_list_error: {error}') from error
        return VideoListResponse(
            videos=[to_video_item(d) for d in docs],
            current_page=req.page,
            total_pages=total_pages(total, req.limit),
            total_videos=total,
        )

    async def get_video(self, video_id: str) -> VideoDetailResponse:
        try:
            doc = await self.repo.get_by_id(video_id)
        except PyMongoError as error:
            raise RuntimeError(f'mongo_video_get_error: {error}') from error
        if doc is None:
            raise NotFound('Video not found')
        return VideoDetailResponse(video=to_video_item(doc))

    async def popular(self, limit: Optional[int]) -> VideosResponse:
        limit = page_request(1, limit, default_limit=10,
                             max_limit=self.max_page_size).limit
        try:
            docs = await self.repo.popular(limit)
        except PyMongoError as error:
            raise RuntimeError(
                f'mongo_video_popular_error: {error}') from error
        return VideosResponse(videos=[to_video_item(d) for d in docs],
                              total=len(docs))

    async def liked_by(self, user_id: str) -> VideosResponse:
        """Videos in the user's liked list, in the order they were liked."""
        try:
            user = await self.users.get_by_id(user_id)
            if user is None:
                raise NotFound('User not found')
            docs = await self.repo.find_many(user.get('liked_videos') or [])
        except PyMongoError as error:
            raise RuntimeError(f'mongo_video_liked_error: {error}') from error
        return VideosResponse(videos=[to_video_item(d) for d in docs],
                              total=len(docs))

    async def ingest(
        self,
        query: Optional[str],
        page: int = 1,
        per_page: int = 15,
    ) -> IngestResponse:
        """Pull a page from Pexels and upsert it by pexels_id.

        New videos start with empty engagement state; known videos are
        returned as stored.
        """
        data = await self.catalog.fetch_videos(query, page, per_page)

        saved = []
        created_count = 0
        try:
            for raw in data.get('videos', []):
                doc, created = await self.repo.upsert_from_catalog(
                    catalog_item(raw))
                saved.append(to_video_item(doc))
                created_count += int(created)
        except PyMongoError as error:
            raise RuntimeError(
                f'mongo_video_ingest_error: {error}') from error

        logger.info('videos_ingested',
                    extra={'query': query or '', 'saved': len(saved),
                           'created_count': created_count})
        message = (f'Videos for "{query}" fetched and saved' if query
                   else 'Popular videos fetched and saved')
        return IngestResponse(
            message=message,
            page=int(data.get('page', page)),
            per_page=int(data.get('per_page', per_page)),
            total_results=int(data.get('total_results', len(saved))),
            videos=saved,
            total_saved=len(saved),
            total_created=created_count,
        )
