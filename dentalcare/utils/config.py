"""Application configuration utilities."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DENTALCARE_",
    )

    app_name: str = Field(
        default="Dental Practice Manager",
    )
    app_version: str = Field(
        default="0.1.0",
    )

    storage_backend: Literal["sql", "redis"] = Field(
        default="sql",
    )
    database_url: str = Field(
        default="sqlite+pysqlite:///./dentalcare.db",
    )
    redis_url: str = Field(
        default="redis://localhost:6379/0",
    )
    storage_prefix: str = Field(
        default="dental:",
    )
    clinic_timezone: str = Field(
        default="Asia/Kolkata",
    )
    seed_on_first_load: bool = Field(
        default=True,
    )
    log_level: str = Field(
        default="INFO",
    )


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
