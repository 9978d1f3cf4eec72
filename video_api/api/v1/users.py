from http import HTTPStatus
from typing import Any, Dict

from fastapi import APIRouter, Depends

from video_api.dependencies import get_current_user, get_users_service
from video_api.models.common import MessageResponse
from video_api.models.users import (
    UserListResponse, UserResponse, UserUpdateRequest,
)
from video_api.services.users_service import UsersService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=UserListResponse, status_code=HTTPStatus.OK)
async def list_users(
    _: Dict[str, Any] = Depends(get_current_user),
    svc: UsersService = Depends(get_users_service),
):
    return await svc.list_users()


@router.get("/{user_id}", response_model=UserResponse,
            status_code=HTTPStatus.OK)
async def get_user(
    user_id: str,
    _: Dict[str, Any] = Depends(get_current_user),
    svc: UsersService = Depends(get_users_service),
):
    return await svc.get_user(user_id)


@router.put("/{user_id}", response_model=UserResponse,
            status_code=HTTPStatus.OK)
async def update_user(
    user_id: str,
    body: UserUpdateRequest,
    actor: Dict[str, Any] = Depends(get_current_user),
    svc: UsersService = Depends(get_users_service),
):
    return await svc.update_user(actor=actor, user_id=user_id, data=body)


@router.delete("/{user_id}", response_model=MessageResponse,
               status_code=HTTPStatus.OK)
async def delete_user(
    user_id: str,
    actor: Dict[str, Any] = Depends(get_current_user),
    svc: UsersService = Depends(get_users_service),
):
    await svc.delete_user(actor=actor, user_id=user_id)
    return MessageResponse(message="User deleted")
