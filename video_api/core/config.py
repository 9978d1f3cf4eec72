# video_api/core/config.py
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "video_engagement_service"
    env: str = Field(default="local")
    debug: bool = Field(default=False, alias="DEBUG")
    host: str = "0.0.0.0"
    port: int = 3000

    mongo_dsn: str = Field(
        default="mongodb://mongo:27017/videos",
        alias="MONGO_DSN"
    )
    mongo_db: str = "videos"
    mongo_ping_on_startup: bool = True

    sentry_dsn: str = Field(default="", alias="SENTRY_DSN")
    sentry_test_enabled: bool = Field(default=False,
                                      alias="SENTRY_TEST_ENABLED")

    # bearer tokens + password reset
    jwt_secret: str = Field(default="change-me", alias="JWT_SECRET")
    jwt_algorithm: str = "HS256"
    jwt_expires_days: int = 7
    reset_token_ttl_minutes: int = 60
    frontend_url: str = Field(default="http://localhost:5173",
                              alias="FRONTEND_URL")

    # каталог видео (Pexels)
    pexels_api_key: str = Field(default="", alias="PEXELS_API_KEY")
    pexels_base_url: str = "https://api.pexels.com"
    http_timeout_seconds: float = 10.0

    comment_max_length: int = 500
    default_page_size: int = 20
    max_page_size: int = 100
    engagement_write_retries: int = 5

    cors_origins: list[str] = ["http://localhost:5173"]

    # Pydantic v2: модель конфигурации
    model_config = SettingsConfigDict(env_file="infra/.env", extra="ignore")


settings = Settings()
