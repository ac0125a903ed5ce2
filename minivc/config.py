"""Runtime configuration read from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

SUPPORTED_STORAGE = ("memory", "folder", "disk")


def _normalise_storage(value: str | None, *, has_path: bool) -> str:
    if value is None or value.strip() == "":
        return "folder" if has_path else "memory"
    value = value.strip().lower()
    if value not in SUPPORTED_STORAGE:
        raise ValueError(
            f"Unsupported storage '{value}'. Expected one of {SUPPORTED_STORAGE}."
        )
    return value


def _parse_log_level(raw: str | None) -> int:
    if raw is None or raw.strip() == "":
        return logging.WARNING
    name = raw.strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Invalid log level '{raw}'")
    return level


@dataclass(frozen=True)
class RuntimeConfig:
    """Settings shared by every repo opened in this process.

    ``repo_path`` plays the part of the "repository location" the user
    picks; ``storage`` selects the artifact backend used by ``open_repo``.
    ``storage_explicit`` is False when ``storage`` was derived rather
    than read from ``MINIVC_STORAGE``.
    """

    repo_path: str | None
    storage: str
    log_level: int
    storage_explicit: bool = False

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        repo_path = os.getenv("MINIVC_REPO") or None
        raw_storage = os.getenv("MINIVC_STORAGE")
        storage = _normalise_storage(raw_storage, has_path=repo_path is not None)
        return cls(
            repo_path=repo_path,
            storage=storage,
            log_level=_parse_log_level(os.getenv("MINIVC_LOG_LEVEL")),
            storage_explicit=bool(raw_storage and raw_storage.strip()),
        )


@lru_cache(maxsize=None)
def runtime_config() -> RuntimeConfig:
    """Read the environment once and apply the log level to ``minivc``."""
    config = RuntimeConfig.from_env()
    logging.getLogger("minivc").setLevel(config.log_level)
    return config


def reset_runtime_config() -> None:
    """Drop the cached configuration so the next read sees the environment."""
    runtime_config.cache_clear()
