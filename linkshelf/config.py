"""
Runtime configuration and logging setup.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

# Relay templates: "{quoted}" is replaced by the percent-encoded target URL,
# "{url}" by the target URL as-is.
DEFAULT_RELAYS = [
    "https://api.allorigins.win/get?url={quoted}",
    "https://corsproxy.io/?{quoted}",
    "https://cors-anywhere.herokuapp.com/{url}",
]


class Settings(BaseSettings):
    """Settings loaded from LINKSHELF_* environment variables or .env."""

    state_file: Path = Path("saved_links.json")
    storage_key: str = "saved-links"

    relays: List[str] = list(DEFAULT_RELAYS)
    relay_timeout: float = 8.0

    debounce_seconds: float = 0.5

    log_level: str = "INFO"

    host: str = "127.0.0.1"
    port: int = 8765

    model_config = SettingsConfigDict(
        env_prefix="LINKSHELF_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure application-wide logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
