from pydantic import EmailStr, Field

from video_api.models.common import CamelModel
from video_api.models.users import UserPublic

PASSWORD_MIN_LENGTH = 6


class RegisterRequest(CamelModel):
    name: str = Field(min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(min_length=PASSWORD_MIN_LENGTH)
    age: int = Field(ge=0, le=120)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class AuthResponse(CamelModel):
    message: str
    token: str
    user: UserPublic


class ProfileResponse(CamelModel):
    user: UserPublic


class ForgotPasswordRequest(CamelModel):
    email: EmailStr


class ResetPasswordRequest(CamelModel):
    token: str = Field(min_length=1)
    new_password: str = Field(min_length=PASSWORD_MIN_LENGTH)


class ChangePasswordRequest(CamelModel):
    current_password: str
    new_password: str = Field(min_length=PASSWORD_MIN_LENGTH)
