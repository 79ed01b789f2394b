from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigError

DEFAULT_URL = "https://gitlab.com/api/v4"


@dataclass
class Settings:
    url: str = DEFAULT_URL
    token: str = ""
    timeout_s: float = 30.0
    log_level: str = "INFO"


def _timeout(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"GITLAB_HTTP_TIMEOUT_S must be a number, got {raw!r}") from None
    if not value > 0:
        raise ConfigError(f"GITLAB_HTTP_TIMEOUT_S must be positive, got {raw!r}")
    return value


def _log_level(raw: str) -> str:
    level = raw.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"GITLAB_LOG_LEVEL is not a logging level: {raw!r}")
    return level


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Read GITLAB_* variables. Raises ConfigError on unusable values."""
    env = os.environ if env is None else env
    return Settings(
        url=env.get("GITLAB_URL", DEFAULT_URL).rstrip("/"),
        token=env.get("GITLAB_TOKEN", ""),
        timeout_s=_timeout(env.get("GITLAB_HTTP_TIMEOUT_S", "30")),
        log_level=_log_level(env.get("GITLAB_LOG_LEVEL", "INFO")),
    )
