"""Centralized application configuration using Pydantic Settings (v2).

This module exposes a single, cached `settings` instance that reads from:
- Real environment variables (highest precedence)
- `.env` files at the repository root: .env, .env.local, .env.dev/.env.test/.env.prod
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["dev", "test", "prod"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Typed application configuration loaded from env and `.env` files.

    Attributes
    ----------
    environment : EnvName
        Runtime environment flag; maps from `PATTERNLAB_ENV`.
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    cache_max_entries : int | None
        Upper bound on cached per-video entries. ``None`` keeps every entry.
        Maps from `PATTERNLAB_CACHE_MAX_ENTRIES`.
    video_api_url : str | None
        Base URL of a remote video catalogue. When unset, the in-memory demo
        library is used. Maps from `PATTERNLAB_VIDEO_API_URL`.
    video_api_key : str | None
        Optional bearer token for the remote catalogue. Maps from
        `PATTERNLAB_VIDEO_API_KEY`.
    history_dir : str | None
        Directory for exported history files. Maps from `PATTERNLAB_HISTORY_DIR`.
    """

    environment: EnvName = Field(default="dev", alias="PATTERNLAB_ENV")
    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")
    cache_max_entries: int | None = Field(
        default=None, ge=1, alias="PATTERNLAB_CACHE_MAX_ENTRIES"
    )
    video_api_url: str | None = Field(default=None, alias="PATTERNLAB_VIDEO_API_URL")
    video_api_key: str | None = Field(default=None, alias="PATTERNLAB_VIDEO_API_KEY")
    history_dir: str | None = Field(default=None, alias="PATTERNLAB_HISTORY_DIR")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local", ".env.dev", ".env.test", ".env.prod"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_dev(self) -> bool:
        """Return True if running in the development environment."""
        return self.environment == "dev"

    @property
    def is_test(self) -> bool:
        """Return True if running in the test environment."""
        return self.environment == "test"

    @property
    def is_prod(self) -> bool:
        """Return True if running in the production environment."""
        return self.environment == "prod"

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    We keep this behind an LRU cache so tests can force a rebuild via
    `load_settings.cache_clear()` after mutating `os.environ`.
    """
    os.environ.setdefault("PATTERNLAB_ENV", "dev")
    return Settings()


# Export a ready-to-use singleton (import-time read of env / .env files).
settings: Settings = load_settings()


def get_logger(name: str = "patternlab") -> logging.Logger:
    """Return a process-global logger configured to the current log level."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(load_settings().log_level_numeric())
    logger.propagate = False
    return logger
