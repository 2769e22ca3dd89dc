"""
Configuration settings for Baseball Records.

Uses Pydantic Settings to load environment variables for the storage backend,
leaderboard retention, display formatting, the optional PostgreSQL backend and
logging.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Storage
    storage_backend: str = Field("file", alias="RECORDS_BACKEND")
    storage_dir: Path = Field(Path("data"), alias="RECORDS_DIR")
    storage_key: str = Field("baseballRecordsMultiMode", alias="RECORDS_STORAGE_KEY")

    # Leaderboards
    leaderboard_size: int = Field(10, ge=1, alias="LEADERBOARD_SIZE")
    recent_records_limit: int = Field(10, ge=0, alias="RECENT_RECORDS_LIMIT")
    display_date_format: str = Field("%Y.%m.%d", alias="DISPLAY_DATE_FORMAT")

    # Database (postgres backend only)
    db_host: str = Field("localhost", alias="DB_HOST")
    db_port: int = Field(5432, alias="DB_PORT")
    db_user: str = Field("postgres", alias="DB_USER")
    db_password: str = Field("postgres", alias="DB_PASSWORD")
    db_name: str = Field("baseball_records", alias="DB_NAME")
    db_table: str = Field("record_blobs", alias="DB_TABLE")
    db_connect_timeout: int = Field(5, ge=1, alias="DB_CONNECT_TIMEOUT")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    json_logs: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
