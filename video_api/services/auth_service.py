"""Registration, login and password recovery."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from video_api.core import security
from video_api.core.config import settings
from video_api.core.errors import InvalidArgument, ServiceError
from video_api.models.auth import (
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
)
from video_api.models.common import MessageResponse
from video_api.services.mailer import LoggingMailer
from video_api.services.repositories.users_repo import UsersRepo
from video_api.services.users_service import to_public

logger = logging.getLogger(__name__)

FORGOT_PASSWORD_MESSAGE = (
    'If the email exists, you will receive a message with instructions')


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class AuthService:
    def __init__(self, db: AsyncIOMotorDatabase, mailer=None) -> None:
        self.repo = UsersRepo(db)
        self.mailer = mailer or LoggingMailer()

    async def register(self, data: RegisterRequest) -> AuthResponse:
        email = data.email.strip().lower()
        try:
            if await self.repo.get_by_email(email) is not None:
                raise InvalidArgument('A user with this email already exists')
            doc = await self.repo.insert(
                name=data.name.strip(),
                email=email,
                password_hash=security.hash_password(data.password),
                age=data.age,
            )
        except DuplicateKeyError as error:
            raise InvalidArgument(
                'A user with this email already exists') from error
        except PyMongoError as error:
            raise RuntimeError(f'mongo_register_error: {error}') from error

        logger.info('user_registered', extra={'user_id': str(doc['_id'])})
        return self._authenticated('User registered', doc)

    async def login(self, data: LoginRequest) -> AuthResponse:
        try:
            doc = await self.repo.get_by_email(data.email.strip().lower())
        except PyMongoError as error:
            raise RuntimeError(f'mongo_login_error: {error}') from error
        if doc is None or not security.verify_password(
                data.password, doc.get('password', '')):
            raise InvalidArgument('Invalid credentials')
        return self._authenticated('Login successful', doc)

    async def forgot_password(self, email: str) -> MessageResponse:
        """Issue a single-use reset token without revealing if email exists."""
        try:
            doc = await self.repo.get_by_email(email.strip().lower())
            if doc is None:
                return MessageResponse(message=FORGOT_PASSWORD_MESSAGE)

            user_id = str(doc['_id'])
            raw, token_hash = security.new_reset_token()
            expires = datetime.now(timezone.utc) + timedelta(
                minutes=settings.reset_token_ttl_minutes)
            await self.repo.set_reset_token(user_id, token_hash, expires)
        except PyMongoError as error:
            raise RuntimeError(
                f'mongo_forgot_password_error: {error}') from error

        reset_url = f'{settings.frontend_url}/reset-password/{raw}'
        try:
            await self.mailer.send_password_reset(doc['email'], reset_url)
        except Exception as error:
            logger.exception('password_reset_email_failed',
                             extra={'user_id': user_id})
            await self.repo.clear_reset_token(user_id)
            raise ServiceError(
                'Could not send the password reset email') from error
        return MessageResponse(message=FORGOT_PASSWORD_MESSAGE)

    async def reset_password(self, data: ResetPasswordRequest) -> AuthResponse:
        token_hash = security.hash_reset_token(data.token)
        try:
            doc = await self.repo.get_by_reset_token(token_hash)
            expires = doc.get('reset_password_expires') if doc else None
            if expires is None or _aware(expires) <= datetime.now(
                    timezone.utc):
                raise InvalidArgument('Invalid or expired token')

            user_id = str(doc['_id'])
            await self.repo.clear_reset_token(user_id)
            doc = await self.repo.update_fields(
                user_id,
                {'password': security.hash_password(data.new_password)})
        except PyMongoError as error:
            raise RuntimeError(
                f'mongo_reset_password_error: {error}') from error

        logger.info('password_reset', extra={'user_id': user_id})
        return self._authenticated('Password updated', doc)

    async def change_password(
        self,
        user_id: str,
        data: ChangePasswordRequest,
    ) -> MessageResponse:
        try:
            doc = await self.repo.get_by_id(user_id, with_password=True)
            if doc is None or not security.verify_password(
                    data.current_password, doc.get('password', '')):
                raise InvalidArgument('Current password is incorrect')
            await self.repo.update_fields(
                user_id,
                {'password': security.hash_password(data.new_password)})
        except PyMongoError as error:
            raise RuntimeError(
                f'mongo_change_password_error: {error}') from error
        return MessageResponse(message='Password changed')

    @staticmethod
    def _authenticated(message: str, doc: Dict[str, Any]) -> AuthResponse:
        return AuthResponse(
            message=message,
            token=security.create_access_token(str(doc['_id'])),
            user=to_public(doc),
        )
