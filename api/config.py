"""
api/config.py

Environment-driven settings for the analytics API.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

_DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _get_int_env(name: str, default: int, *, minimum: int = 0) -> int:
    """
    Read an integer from the environment; invalid values fail loudly.
    """

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer, got '{raw.strip()}'.") from exc
    if value < minimum:
        raise RuntimeError(f"{name} must be >= {minimum}, got {value}.")
    return value


def _get_log_level_env(name: str, default: str) -> str:
    raw = (os.getenv(name) or "").strip().upper() or default
    if raw not in _LOG_LEVELS:
        raise RuntimeError(
            f"{name} '{raw}' is not valid. "
            f"Allowed values: {sorted(_LOG_LEVELS)}."
        )
    return raw


def _get_list_env(name: str, default: str) -> Tuple[str, ...]:
    raw = os.getenv(name, default)
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    cors_origins: Tuple[str, ...]
    max_upload_bytes: int
    spectrum_default_size: int
    spectrum_max_size: int
    log_level: str


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return cached API settings.

    Raises RuntimeError when a numeric setting is malformed.
    """

    spectrum_max_size = _get_int_env("ANALYTICS_SPECTRUM_MAX_SIZE", 65536, minimum=1)
    spectrum_default_size = _get_int_env("ANALYTICS_SPECTRUM_DEFAULT_SIZE", 128)
    if spectrum_default_size > spectrum_max_size:
        raise RuntimeError("ANALYTICS_SPECTRUM_DEFAULT_SIZE must not exceed ANALYTICS_SPECTRUM_MAX_SIZE.")
    return Settings(
        cors_origins=_get_list_env("ANALYTICS_CORS_ORIGINS", _DEFAULT_CORS_ORIGINS),
        max_upload_bytes=_get_int_env("ANALYTICS_MAX_UPLOAD_MB", 20, minimum=1) * 1024 * 1024,
        spectrum_default_size=spectrum_default_size,
        spectrum_max_size=spectrum_max_size,
        log_level=_get_log_level_env("ANALYTICS_LOG_LEVEL", "INFO"),
    )
