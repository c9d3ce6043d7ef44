"""Runtime configuration, read from the environment and an optional .env."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    supabase_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL"),
    )
    supabase_anon_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("SUPABASE_ANON_KEY", "NEXT_PUBLIC_SUPABASE_ANON_KEY"),
    )
    orders_table: str = Field(default="orders", validation_alias="STALL_ORDERS_TABLE")
    data_dir: Path = Field(default=Path("data"), validation_alias="STALL_DATA_DIR")
    log_level: str = Field(default="INFO", validation_alias="STALL_LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def remote_configured(self) -> bool:
        return bool(self.supabase_url) and bool(self.supabase_anon_key)


def load_settings() -> Settings:
    return Settings()


def check_settings(settings: Settings) -> bool:
    """Log whether the remote store is configured.  Never raises."""
    if not settings.remote_configured:
        logger.warning(
            "SUPABASE_URL / SUPABASE_ANON_KEY are not set; "
            "orders will be kept in %s",
            settings.data_dir / "orders.json",
        )
        return False
    logger.info("Supabase URL: %s", settings.supabase_url)
    return True
