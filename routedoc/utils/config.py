"""Runtime configuration for document assembly and serving."""
from __future__ import annotations

import logging
import os
from typing import Final


def _parse_bool(value: str | None, *, default: bool = False) -> bool:
    if value is None:
        return default
    value = value.strip().lower()
    return value in {"1", "true", "yes", "on"}


def _parse_str(value: str | None, *, default: str) -> str:
    if value is None or not value.strip():
        return default
    return value.strip()


def _parse_level(value: str | None, *, default: int) -> int:
    if value is None or not value.strip():
        return default
    value = value.strip()
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else default


def _env_bool(name: str, *, default: bool = False) -> bool:
    return _parse_bool(os.getenv(name), default=default)


def _env_str(name: str, *, default: str) -> str:
    return _parse_str(os.getenv(name), default=default)


DEFAULT_API_ID: Final[str] = _env_str("ROUTEDOC_DEFAULT_API_ID", default="default")
DOCS_PATH: Final[str] = _env_str("ROUTEDOC_DOCS_PATH", default="/swagger.json")
LOG_LEVEL: Final[int] = _parse_level(os.getenv("ROUTEDOC_LOG_LEVEL"), default=logging.INFO)
DEBUG: Final[bool] = _env_bool("ROUTEDOC_DEBUG", default=False)


__all__ = [
    "DEBUG",
    "DEFAULT_API_ID",
    "DOCS_PATH",
    "LOG_LEVEL",
]
