"""Application configuration and environment loading utilities (Pydantic v2)."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import constants

log = logging.getLogger(__name__)

# Load .env if present (non-fatal if missing)
load_dotenv(dotenv_path=Path(".env"), override=False)

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseSettings):
    """Runtime settings loaded from env with sane defaults (Pydantic v2)."""

    model_config = SettingsConfigDict(
        env_prefix="PROP_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    LOG_LEVEL: str = Field(default="INFO")

    # Lineup
    DEFAULT_ENTRY_AMOUNT: int = Field(
        default=25, ge=constants.MIN_ENTRY_AMOUNT, le=constants.MAX_ENTRY_AMOUNT
    )

    # Player-derived props generated per refresh
    PLAYER_PROP_LIMIT: int = Field(default=constants.PLAYER_PROP_LIMIT, ge=1)

    # Pick resolution (rapidfuzz WRatio, 0-100)
    MIN_MATCH_SCORE: int = Field(default=85, ge=0, le=100)

    # IO
    HTTP_TIMEOUT: float = Field(default=10.0, gt=0)

    # Seed for the player-derived synthesis path; unseeded when omitted
    RANDOM_SEED: Optional[int] = Field(default=None)

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _normalise_level(cls, v: str) -> str:
        level = str(v).strip().upper()
        if level not in _LOG_LEVELS:
            log.warning("Unknown log level %r, falling back to INFO", v)
            return "INFO"
        return level


@lru_cache()
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()
