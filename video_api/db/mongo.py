import logging
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

logger = logging.getLogger(__name__)


class MongoStorage:
    """
    Явно создаваемый handle к Mongo: живёт на app.state,
    открывается в lifespan и закрывается там же.
    """

    def __init__(self, dsn: str, db_name: str) -> None:
        self.dsn = dsn
        self.db_name = db_name
        self._client: AsyncIOMotorClient | None = None

    async def connect(self, ping: bool = True) -> AsyncIOMotorDatabase:
        if self._client is None:
            self._client = AsyncIOMotorClient(
                self.dsn,
                appname="video-engagement-api",
                tz_aware=True,  # created_at будет aware
                uuidRepresentation="standard",
                maxPoolSize=50,
                minPoolSize=0,
                serverSelectionTimeoutMS=3000,
                connectTimeoutMS=3000,
                socketTimeoutMS=5000,
                retryWrites=True,
            )
            # быстрая проверка коннекта (не блокируем запуск дольше таймаута)
            if ping:
                try:
                    await self._client.admin.command("ping")
                except Exception as e:
                    logger.warning("mongo_ping_failed", extra={"err": str(e)})
        return self.db

    @property
    def db(self) -> AsyncIOMotorDatabase:
        if self._client is None:
            raise RuntimeError("mongo_not_connected")
        return self._client[self.db_name]

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None


def object_id_or_none(value: str) -> Optional[ObjectId]:
    """Parse a path id; malformed ids behave like unknown ones."""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None
