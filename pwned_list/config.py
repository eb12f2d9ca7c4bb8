"""
Runtime settings, read from the environment (and a .env file if present).

    PWNED_LIST_FILES   default list files, separated by os.pathsep
    PWNED_LOG_LEVEL    logging level name (default WARNING)
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


class Settings(BaseModel):
    """Validated runtime configuration."""

    list_paths: list[str] = Field(default_factory=list)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level


def load_settings() -> Settings:
    """Build Settings from PWNED_* environment variables."""
    load_dotenv()

    raw_paths = os.environ.get("PWNED_LIST_FILES", "")
    paths = [p for p in raw_paths.split(os.pathsep) if p.strip()]

    return Settings(
        list_paths=paths,
        log_level=os.environ.get("PWNED_LOG_LEVEL", "WARNING"),
    )
