# app/config/settings.py

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application ---
    app_name: str = "voter-sync"
    environment: Literal["dev", "test", "prod"] = "dev"
    debug: bool = False
    version: str = "0.1.0"

    # --- Database ---
    database_url: str = "sqlite+aiosqlite:///./voters.db"
    # Logical database (SQL schema) holding the partition tables; None = connection default.
    voter_database: Optional[str] = None

    # --- Partitions ---
    default_partition: Optional[str] = "voters"
    reserved_prefix: str = Field("system_", min_length=1)

    # --- Sync ---
    export_default_page_size: int = 5000
    export_min_page_size: int = Field(1, ge=1)
    export_max_page_size: int = Field(20000, ge=1)

    # --- Redis (provisioning lock) ---
    redis_url: str = "redis://localhost:6379/0"
    provisioning_lock_enabled: bool = True
    provisioning_lock_ttl_seconds: int = 600

    # --- Logging ---
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


@lru_cache
def get_settings() -> AppSettings:
    return AppSettings()


# Singleton for direct import (e.g. in infrastructure clients)
settings = get_settings()
