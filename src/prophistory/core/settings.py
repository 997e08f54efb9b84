"""Centralized configuration for prophistory using Pydantic Settings (v2).

This module exposes a single, cached `settings` instance that reads from:
- Real environment variables (highest precedence)
- `.env` files in the working directory: .env, .env.local

Only the git collaborator and the CLI consult these values; the parsing and
timeline engine is configuration-free.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Typed configuration loaded from env and `.env` files.

    Attributes
    ----------
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    git_executable : str
        Name or path of the git binary; maps from `PROPHISTORY_GIT`.
    git_timeout : float
        Seconds allowed for a single git invocation; maps from
        `PROPHISTORY_GIT_TIMEOUT`.
    max_revisions : int | None
        Default cap on how many revisions are scanned per query; maps from
        `PROPHISTORY_MAX_REVISIONS`. ``None`` scans the whole history.
    """

    log_level: LogLevelName = Field(default="WARNING", alias="LOG_LEVEL")
    git_executable: str = Field(default="git", alias="PROPHISTORY_GIT")
    git_timeout: float = Field(default=30.0, gt=0, alias="PROPHISTORY_GIT_TIMEOUT")
    max_revisions: int | None = Field(default=None, ge=1, alias="PROPHISTORY_MAX_REVISIONS")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.WARNING)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    Tests force a rebuild via `load_settings.cache_clear()` after mutating
    `os.environ`.
    """
    return Settings()


settings: Settings = load_settings()


def get_logger(name: str = "prophistory") -> logging.Logger:
    """Return a process-global logger configured to the current `LOG_LEVEL`."""
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
