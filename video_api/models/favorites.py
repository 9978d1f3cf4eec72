from typing import List

from pydantic import Field

from video_api.models.common import CamelModel


class FavoriteAddRequest(CamelModel):
    video_id: str = Field(min_length=1, max_length=200)


class FavoritesResponse(CamelModel):
    favorites: List[str]
    total: int


class FavoriteChangeResponse(CamelModel):
    message: str
    favorites: List[str]
