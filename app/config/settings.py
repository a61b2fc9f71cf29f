# app/config/settings.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

DEFAULT_COINGECKO_URL = "https://api.coingecko.com/api/v3/coins/markets"


def parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def parse_float(value: str | None, default: float) -> float:
    if value is None or value.strip() == "":
        return default
    return float(value)


def parse_log_level(value: str | None, default: str) -> str:
    """Upper-cased level name; unknown names fall back to `default`."""
    if value is None or value.strip() == "":
        return default
    name = value.strip().upper()
    # getLevelName maps registered names to their int level
    if isinstance(logging.getLevelName(name), int):
        return name
    return default


@dataclass(frozen=True)
class Settings:
    COINGECKO_URL: str
    HTTP_TIMEOUT_SECONDS: float
    REFRESH_ENABLED: bool
    LOG_LEVEL: str

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            COINGECKO_URL=os.getenv("COINGECKO_URL", DEFAULT_COINGECKO_URL),
            HTTP_TIMEOUT_SECONDS=parse_float(os.getenv("HTTP_TIMEOUT_SECONDS"), 10.0),
            REFRESH_ENABLED=parse_bool(os.getenv("REFRESH_ENABLED"), True),
            LOG_LEVEL=parse_log_level(os.getenv("LOG_LEVEL"), "INFO"),
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Drop the memoised settings so the next call re-reads the environment."""
    global _settings
    _settings = None
