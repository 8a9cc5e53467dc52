"""
Briefmark configuration — all environment variables in one place.

Read from environment at import time. Every value has a working default.
"""

from __future__ import annotations

import os


_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _level_env(name: str, default: str) -> str:
    value = os.environ.get(name, default).strip().upper()
    return value if value in _LOG_LEVELS else default


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


class Settings:
    """Renderer settings from environment variables."""

    # Reference syntax limits
    MAX_MENTION_LENGTH: int = _int_env("BRIEFMARK_MAX_MENTION_LENGTH", 60)
    MAX_NOTE_TITLE_LENGTH: int = _int_env("BRIEFMARK_MAX_NOTE_TITLE_LENGTH", 200)

    # CLI
    LOG_LEVEL: str = _level_env("BRIEFMARK_LOG_LEVEL", "WARNING")


# Singleton instance
settings = Settings()
