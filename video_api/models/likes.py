from video_api.models.common import CamelModel


class LikeToggleResponse(CamelModel):
    message: str
    liked: bool
    likes_count: int
