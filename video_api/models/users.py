from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import EmailStr, Field

from video_api.models.common import CamelModel


class Role(str, Enum):
    user = "user"
    admin = "admin"


class UserPublic(CamelModel):
    """User as returned by the API; the password hash never leaves storage."""

    id: str
    name: str
    email: str
    age: int
    role: Role = Role.user
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserUpdateRequest(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    email: Optional[EmailStr] = None
    age: Optional[int] = Field(default=None, ge=0, le=120)


class UserResponse(CamelModel):
    message: str
    user: UserPublic


class UserListResponse(CamelModel):
    message: str
    users: List[UserPublic]
    total: int
