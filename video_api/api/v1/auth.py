from http import HTTPStatus
from typing import Any, Dict

from fastapi import APIRouter, Depends

from video_api.dependencies import (
    current_user_id, get_auth_service, get_current_user,
)
from video_api.models.auth import (
    AuthResponse, ChangePasswordRequest, ForgotPasswordRequest,
    LoginRequest, ProfileResponse, RegisterRequest, ResetPasswordRequest,
)
from video_api.models.common import MessageResponse
from video_api.services.auth_service import AuthService
from video_api.services.users_service import to_public

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse,
             status_code=HTTPStatus.CREATED)
async def register(
    body: RegisterRequest,
    svc: AuthService = Depends(get_auth_service),
):
    return await svc.register(body)


@router.post("/login", response_model=AuthResponse,
             status_code=HTTPStatus.OK)
async def login(
    body: LoginRequest,
    svc: AuthService = Depends(get_auth_service),
):
    return await svc.login(body)


@router.get("/profile", response_model=ProfileResponse,
            status_code=HTTPStatus.OK)
async def profile(user: Dict[str, Any] = Depends(get_current_user)):
    return ProfileResponse(user=to_public(user))


@router.post("/forgot-password", response_model=MessageResponse,
             status_code=HTTPStatus.OK)
async def forgot_password(
    body: ForgotPasswordRequest,
    svc: AuthService = Depends(get_auth_service),
):
    return await svc.forgot_password(body.email)


@router.post("/reset-password", response_model=AuthResponse,
             status_code=HTTPStatus.OK)
async def reset_password(
    body: ResetPasswordRequest,
    svc: AuthService = Depends(get_auth_service),
):
    return await svc.reset_password(body)


@router.put("/change-password", response_model=MessageResponse,
            status_code=HTTPStatus.OK)
async def change_password(
    body: ChangePasswordRequest,
    user_id: str = Depends(current_user_id),
    svc: AuthService = Depends(get_auth_service),
):
    return await svc.change_password(user_id, body)
