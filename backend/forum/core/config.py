"""Application settings loaded from environment variables and `.env`."""

from datetime import timedelta
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_parse_none_str="none",
        extra="ignore",
    )

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./forum.db"
    SQL_ECHO: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["console", "json"] = "console"

    # Routes
    FORUM_ROUTE_PREFIX: str = "forum"
    FORUM_API_PREFIX: str = "forum/api/v1"

    # Pagination
    THREADS_PER_PAGE: int = Field(default=20, gt=0)
    POSTS_PER_PAGE: int = Field(default=15, gt=0)

    # Threads older than this are never flagged unread/updated. None disables tracking.
    THREAD_CUTOFF_AGE: Optional[timedelta] = timedelta(days=30)


settings = Settings()
