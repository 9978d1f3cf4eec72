from typing import Dict, Optional

from pydantic import Field

from video_api.models.common import CamelModel


class RatingRequest(CamelModel):
    # strict: 3.5, "3" and true are rejected instead of coerced
    rating: int = Field(..., ge=1, le=5, strict=True)


class RatingPutResponse(CamelModel):
    message: str
    average_rating: float
    total_ratings: int
    user_rating: int
    created: bool = Field(False, exclude=True)


class RatingGetResponse(CamelModel):
    user_rating: Optional[int]  # None если оценки нет
    average_rating: float
    total_ratings: int


class RatingDeleteResponse(CamelModel):
    message: str
    average_rating: float
    total_ratings: int


class RatingStatsResponse(CamelModel):
    average_rating: float
    total_ratings: int
    distribution: Dict[str, int]
    distribution_percentage: Dict[str, str]
