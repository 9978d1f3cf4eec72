from typing import Any, Dict, Optional

from fastapi import Depends, Header, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from video_api.core.config import settings
from video_api.core.errors import Unauthenticated
from video_api.core.security import decode_access_token
from video_api.services.auth_service import AuthService
from video_api.services.catalog_client import PexelsClient
from video_api.services.comments_service import CommentsService
from video_api.services.favorites_service import FavoritesService
from video_api.services.likes_service import LikesService
from video_api.services.mailer import LoggingMailer
from video_api.services.ratings_service import RatingsService
from video_api.services.repositories.users_repo import UsersRepo
from video_api.services.users_service import UsersService
from video_api.services.videos_service import VideosService


async def get_db(request: Request) -> AsyncIOMotorDatabase:
    # storage handle создаётся в lifespan и живёт на app.state
    return request.app.state.mongo.db


def bearer_token(
        authorization: Optional[str] = Header(default=None)) -> str:
    if not authorization:
        raise Unauthenticated("Access denied. No token provided.")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthenticated("Access denied. No token provided.")
    return token.strip()


async def get_current_user(
        token: str = Depends(bearer_token),
        db=Depends(get_db),
) -> Dict[str, Any]:
    """Authentication gate: bearer JWT -> user document (no password)."""
    user_id = decode_access_token(token)
    user = await UsersRepo(db).get_by_id(user_id)
    if user is None:
        raise Unauthenticated("Invalid token")
    return user


def current_user_id(user: Dict[str, Any] = Depends(get_current_user)) -> str:
    return str(user["_id"])


def get_mailer() -> LoggingMailer:
    return LoggingMailer()


def get_catalog_client() -> PexelsClient:
    return PexelsClient(
        api_key=settings.pexels_api_key,
        base_url=settings.pexels_base_url,
        timeout=settings.http_timeout_seconds,
    )


async def get_ratings_service(db=Depends(get_db)) -> RatingsService:
    return RatingsService(db, retries=settings.engagement_write_retries)


async def get_comments_service(db=Depends(get_db)) -> CommentsService:
    return CommentsService(
        db,
        max_length=settings.comment_max_length,
        retries=settings.engagement_write_retries,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )


async def get_likes_service(db=Depends(get_db)) -> LikesService:
    return LikesService(db)


async def get_favorites_service(db=Depends(get_db)) -> FavoritesService:
    return FavoritesService(db)


async def get_videos_service(
        db=Depends(get_db),
        catalog: PexelsClient = Depends(get_catalog_client),
) -> VideosService:
    return VideosService(
        db,
        catalog=catalog,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )


async def get_users_service(db=Depends(get_db)) -> UsersService:
    return UsersService(db)


async def get_auth_service(
        db=Depends(get_db),
        mailer=Depends(get_mailer),
) -> AuthService:
    return AuthService(db, mailer=mailer)
