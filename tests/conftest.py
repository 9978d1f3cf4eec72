import os
import pytest
from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager
from mongomock_motor import AsyncMongoMockClient

from video_api.main import app
from video_api.core.config import settings
from video_api.dependencies import get_db


@pytest.fixture(scope="session", autouse=True)
def test_env():
    os.environ["SENTRY_DSN"] = ""  # отключаем Sentry
    settings.sentry_dsn = ""
    settings.mongo_ping_on_startup = False
    settings.jwt_secret = "test-secret"
    settings.pexels_api_key = "test-pexels-key"
    settings.comment_max_length = 500
    settings.debug = False


@pytest.fixture
async def mongo_db():
    """In-memory Mongo, fresh for every test."""
    mock_client = AsyncMongoMockClient()
    yield mock_client[settings.mongo_db]


@pytest.fixture
async def client(mongo_db):
    app.dependency_overrides[get_db] = lambda: mongo_db
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport,
                               base_url="http://test") as ac:
            yield ac
    app.dependency_overrides.clear()
