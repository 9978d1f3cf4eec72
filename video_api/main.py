import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from contextlib import asynccontextmanager
from video_api.db.mongo import MongoStorage

from video_api.core.logger import setup_json_logging, shutdown_logging
from video_api.core.sentry import init_sentry
from video_api.core.config import settings
from video_api.core.middleware import RequestContextMiddleware
from video_api.api.http_utils import install_error_handlers

from video_api.api.v1.auth import router as auth_router
from video_api.api.v1.users import router as users_router
from video_api.api.v1.favorites import router as favorites_router
from video_api.api.v1.videos import router as videos_router
from video_api.api.v1.likes import router as likes_router
from video_api.api.v1.ratings import router as ratings_router
from video_api.api.v1.comments import router as comments_router
from video_api.api.v1.debug import include_debug_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 1) логи до всего
    setup_json_logging(service=settings.app_name)
    init_sentry(settings.sentry_dsn, environment=settings.env,
                debug=settings.debug)

    # 2) storage handle: создаём явно, кладём в app.state
    storage = MongoStorage(settings.mongo_dsn, settings.mongo_db)
    await storage.connect(ping=settings.mongo_ping_on_startup)
    app.state.mongo = storage

    try:
        yield
    finally:
        storage.close()
        shutdown_logging()


app = FastAPI(title="Video Engagement Service", lifespan=lifespan)

# наш trace_id + access JSON
app.add_middleware(RequestContextMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
    allow_credentials=True,
)
install_error_handlers(app)

# приглушим штатный uvicorn-access, чтобы не было дублей
logging.getLogger("uvicorn.access").setLevel("WARNING")

include_debug_routes(app)


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(auth_router)
app.include_router(users_router)
app.include_router(favorites_router)
app.include_router(videos_router)
app.include_router(likes_router)
app.include_router(ratings_router)
app.include_router(comments_router)
