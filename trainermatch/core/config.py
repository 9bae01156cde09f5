"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # PostgreSQL
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "trainermatch"
    postgres_password: str = "password"
    postgres_db: str = "trainermatch"

    # Full SQLAlchemy URL; overrides the postgres_* fields when set
    database_url: str = ""

    # MongoDB (documents collection)
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "trainermatch_docs"

    # Redis / RQ notification queue
    redis_url: str = "redis://localhost:6379/0"
    notification_queue: str = "notifications"
    notification_webhook_url: str = ""
    notification_webhook_timeout: float = 10.0

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440

    # Uploads
    upload_dir: str = "uploads"
    upload_base_url: str = "/static/uploads"
    max_upload_size_mb: int = 5

    # App
    cors_origins: str = "*"
    log_level: str = "INFO"
    debug: bool = False

    @property
    def postgres_url(self) -> str:
        """Construct PostgreSQL connection URL"""
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def sqlalchemy_url(self) -> str:
        return self.database_url or self.postgres_url

    @property
    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
