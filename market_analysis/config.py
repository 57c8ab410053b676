"""Application configuration loaded from environment variables."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central settings pulled from .env / environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_env: str = "development"
    log_level: str = "INFO"

    # Providers
    provider_backend: Literal["fixtures", "database"] = "fixtures"
    """Which adapter ``build_provider`` composes."""

    fixtures_path: Path | None = None
    """JSON fixture book read by the fixtures backend."""

    database_url: str = "sqlite:///market_analysis.db"
    peer_limit: int = 10
    """Maximum number of peer symbols returned by the database backend."""


settings = Settings()


def configure_logging(cfg: Settings | None = None) -> None:
    cfg = cfg or settings
    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
