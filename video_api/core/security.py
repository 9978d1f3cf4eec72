"""Password hashing and bearer token helpers."""

from __future__ import annotations

import hashlib
import secrets
from datetime import datetime, timedelta, timezone

import jwt
from passlib.context import CryptContext

from video_api.core.config import settings
from video_api.core.errors import Unauthenticated

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    if not hashed:
        return False
    return pwd_context.verify(password, hashed)


def create_access_token(user_id: str) -> str:
    expires = datetime.now(timezone.utc) + timedelta(
        days=settings.jwt_expires_days)
    return jwt.encode(
        {"userId": user_id, "exp": expires},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str) -> str:
    """Return the user id carried by a valid token."""
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.PyJWTError as error:
        raise Unauthenticated("Invalid token") from error
    user_id = payload.get("userId")
    if not isinstance(user_id, str) or not user_id:
        raise Unauthenticated("Invalid token")
    return user_id


def hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def new_reset_token() -> tuple[str, str]:
    """Return (raw token for the email, sha256 digest to persist)."""
    raw = secrets.token_hex(32)
    return raw, hash_reset_token(raw)
