"""Service layer for user profile CRUD."""

from __future__ import annotations

import logging
from typing import Any, Dict

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from video_api.core.errors import Forbidden, InvalidArgument, NotFound
from video_api.models.users import (
    Role,
    UserListResponse,
    UserPublic,
    UserResponse,
    UserUpdateRequest,
)
from video_api.services.likes_service import LikesService
from video_api.services.repositories.users_repo import UsersRepo

logger = logging.getLogger(__name__)


def to_public(doc: Dict[str, Any]) -> UserPublic:
    return UserPublic(
        id=str(doc['_id']),
        name=doc['name'],
        email=doc['email'],
        age=doc['age'],
        role=doc.get('role', Role.user),
        created_at=doc.get('created_at'),
        updated_at=doc.get('updated_at'),
    )


class UsersService:
    """Profiles: anyone authenticated can read; owners edit themselves."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.repo = UsersRepo(db)
        self.likes = LikesService(db)

    async def list_users(self) -> UserListResponse:
        try:
            docs = await self.repo.list_all()
        except PyMongoError as error:
            raise RuntimeError(f'mongo_user_list_error: {error}') from error
        return UserListResponse(
            message='Users retrieved',
            users=[to_public(d) for d in docs],
            total=len(docs),
        )

    async def get_user(self, user_id: str) -> UserResponse:
        try:
            doc = await self.repo.get_by_id(user_id)
        except PyMongoError as error:
            raise RuntimeError(f'mongo_user_get_error: {error}') from error
        if doc is None:
            raise NotFound('User not found')
        return UserResponse(message='User retrieved', user=to_public(doc))

    async def update_user(
        self,
        actor: Dict[str, Any],
        user_id: str,
        data: UserUpdateRequest,
    ) -> UserResponse:
        """Only the user themselves may change name, email or age."""
        if str(actor['_id']) != user_id:
            raise Forbidden('You are not allowed to update this user')

        fields = data.model_dump(exclude_none=True)
        if 'name' in fields:
            fields['name'] = fields['name'].strip()
            if not fields['name']:
                raise InvalidArgument('Name cannot be empty')
        try:
            if 'email' in fields:
                fields['email'] = fields['email'].strip().lower()
                other = await self.repo.get_by_email(fields['email'])
                if other is not None and str(other['_id']) != user_id:
                    raise InvalidArgument('Email is already in use')
            doc = await self.repo.update_fields(user_id, fields)
        except DuplicateKeyError as error:
            raise InvalidArgument('Email is already in use') from error
        except PyMongoError as error:
            raise RuntimeError(f'mongo_user_update_error: {error}') from error
        if doc is None:
            raise NotFound('User not found')
        return UserResponse(message='User updated', user=to_public(doc))

    async def delete_user(
        self,
        actor: Dict[str, Any],
        user_id: str,
    ) -> None:
        """Self-service or administrator removal; likes are withdrawn."""
        if (str(actor['_id']) != user_id
                and actor.get('role') != Role.admin.value):
            raise Forbidden('You are not allowed to delete this user')
        try:
            deleted = await self.repo.delete(user_id)
            if deleted is None:
                raise NotFound('User not found')
            await self.likes.withdraw_all(deleted)
        except PyMongoError as error:
            raise RuntimeError(f'mongo_user_delete_error: {error}') from error
        logger.info('user_deleted',
                    extra={'user_id': user_id,
                           'actor_id': str(actor['_id'])})
