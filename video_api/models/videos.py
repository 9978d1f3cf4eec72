from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from video_api.models.common import CamelModel


class PexelsUser(CamelModel):
    id: int
    name: str
    url: str


class VideoFile(CamelModel):
    id: int
    quality: Optional[str] = None
    file_type: str
    width: Optional[int] = None
    height: Optional[int] = None
    link: str


class VideoPicture(CamelModel):
    id: int
    picture: str
    nr: int


class VideoItem(CamelModel):
    id: str
    pexels_id: int
    width: int
    height: int
    url: str
    image: str
    duration: int
    user: PexelsUser
    video_files: List[VideoFile] = Field(default_factory=list)
    video_pictures: List[VideoPicture] = Field(default_factory=list)
    likes_count: int = 0
    average_rating: float = 0.0
    total_ratings: int = 0
    total_comments: int = 0
    created_at: Optional[datetime] = None


class VideoDetailResponse(CamelModel):
    video: VideoItem


class VideoListResponse(CamelModel):
    videos: List[VideoItem]
    current_page: int
    total_pages: int
    total_videos: int


class VideosResponse(CamelModel):
    videos: List[VideoItem]
    total: int


class IngestResponse(CamelModel):
    message: str
    page: int
    per_page: int
    total_results: int
    videos: List[VideoItem]
    total_saved: int
    total_created: int
