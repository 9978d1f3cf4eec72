"""Mongo repository for users collection."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from video_api.db.mongo import object_id_or_none

NO_PASSWORD = {'password': 0}


class UsersRepo:
    """Identity records plus the liked-videos and favorites relations."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.col = db['users']

    async def insert(
        self,
        name: str,
        email: str,
        password_hash: str,
        age: int,
        role: str = 'user',
    ) -> Dict[str, Any]:
        """Insert a new user and return the stored document."""
        now = datetime.now(timezone.utc)
        doc = {
            'name': name,
            'email': email,
            'password': password_hash,
            'age': age,
            'role': role,
            'liked_videos': [],
            'favorite_videos': [],
            'created_at': now,
            'updated_at': now,
        }
        result = await self.col.insert_one(doc)
        doc['_id'] = result.inserted_id
        return doc

    async def get_by_id(
        self,
        user_id: str,
        with_password: bool = False,
    ) -> Optional[Dict[str, Any]]:
        oid = object_id_or_none(user_id)
        if oid is None:
            return None
        return await self.col.find_one(
            {'_id': oid}, None if with_password else NO_PASSWORD)

    async def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """Lookup by normalized email (password included, for login)."""
        return await self.col.find_one({'email': email})

    async def get_by_reset_token(
        self,
        token_hash: str,
    ) -> Optional[Dict[str, Any]]:
        return await self.col.find_one({'reset_password_token': token_hash})

    async def list_all(self) -> List[Dict[str, Any]]:
        cursor = self.col.find({}, NO_PASSWORD, sort=[('created_at', 1)])
        return [doc async for doc in cursor]

    async def update_fields(
        self,
        user_id: str,
        fields: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        """$set fields and return the updated document (without password)."""
        oid = object_id_or_none(user_id)
        if oid is None:
            return None
        return await self.col.find_one_and_update(
            {'_id': oid},
            {'$set': {**fields, 'updated_at': datetime.now(timezone.utc)}},
            projection=NO_PASSWORD,
            return_document=ReturnDocument.AFTER,
        )

    async def delete(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Delete user; return the removed document (for cascades)."""
        oid = object_id_or_none(user_id)
        if oid is None:
            return None
        return await self.col.find_one_and_delete(
            {'_id': oid}, projection=NO_PASSWORD)

    # ---------- reset tokens ----------

    async def set_reset_token(
        self,
        user_id: str,
        token_hash: str,
        expires: datetime,
    ) -> None:
        await self.col.update_one(
            {'_id': object_id_or_none(user_id)},
            {'$set': {'reset_password_token': token_hash,
                      'reset_password_expires': expires}},
        )

    async def clear_reset_token(self, user_id: str) -> None:
        await self.col.update_one(
            {'_id': object_id_or_none(user_id)},
            {'$unset': {'reset_password_token': '',
                        'reset_password_expires': ''}},
        )

    # ---------- liked videos ----------

    async def add_liked(self, user_id: str, video_id: str) -> bool:
        """Add like membership; False if already liked or user missing."""
        result = await self.col.update_one(
            {'_id': object_id_or_none(user_id),
             'liked_videos': {'$ne': video_id}},
            {'$push': {'liked_videos': video_id}},
        )
        return result.modified_count == 1

    async def remove_liked(self, user_id: str, video_id: str) -> bool:
        """Remove like membership; False if it was not there."""
        result = await self.col.update_one(
            {'_id': object_id_or_none(user_id), 'liked_videos': video_id},
            {'$pull': {'liked_videos': video_id}},
        )
        return result.modified_count == 1

    async def count_likes(self, video_id: str) -> int:
        """Number of users whose liked list contains the video."""
        return await self.col.count_documents({'liked_videos': video_id})

    # ---------- favorites ----------

    async def add_favorite(self, user_id: str, video_ref: str) -> bool:
        result = await self.col.update_one(
            {'_id': object_id_or_none(user_id),
             'favorite_videos': {'$ne': video_ref}},
            {'$push': {'favorite_videos': video_ref}},
        )
        return result.modified_count == 1

    async def remove_favorite(self, user_id: str, video_ref: str) -> bool:
        result = await self.col.update_one(
            {'_id': object_id_or_none(user_id), 'favorite_videos': video_ref},
            {'$pull': {'favorite_videos': video_ref}},
        )
        return result.modified_count == 1
