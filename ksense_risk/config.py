"""Runtime configuration, read once at startup.

Values come from the process environment, optionally seeded from a ``.env``
file in the working directory. The resulting ``Config`` is immutable and is
handed to the client explicitly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from ksense_risk.exceptions import ConfigError

DEFAULT_BASE_URL = "https://assessment.ksensetech.com/api"
DEFAULT_PAGE_SIZE = 20
DEFAULT_TIMEOUT = 30.0
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Config:
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    page_size: int = DEFAULT_PAGE_SIZE
    timeout: float = DEFAULT_TIMEOUT
    # None means wait out 429s indefinitely
    max_rate_limit_waits: Optional[int] = None
    log_level: str = "INFO"

    def __repr__(self):
        return (
            f"Config(base_url={self.base_url!r}, page_size={self.page_size}, "
            f"timeout={self.timeout}, max_rate_limit_waits={self.max_rate_limit_waits}, "
            f"log_level={self.log_level!r})"
        )


def _int_setting(env, name, default):
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ConfigError(f"{name} must not be negative, got {value}")
    return value


def load_config(env: Optional[Mapping[str, str]] = None) -> Config:
    """Build a ``Config`` from ``env`` (defaults to ``os.environ`` after loading ``.env``).

    Raises:
        ConfigError: if ``API_KEY`` is absent, a placeholder, or a numeric
            setting cannot be parsed.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    api_key = (env.get("API_KEY") or "").strip()
    if not api_key or api_key.startswith("PUT_"):
        raise ConfigError("API_KEY environment variable is required")

    base_url = (env.get("API_BASE_URL") or "").strip() or DEFAULT_BASE_URL

    page_size = _int_setting(env, "PAGE_SIZE", DEFAULT_PAGE_SIZE)
    if page_size == 0:
        raise ConfigError("PAGE_SIZE must be at least 1")

    raw_timeout = (env.get("REQUEST_TIMEOUT") or "").strip()
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
    except ValueError:
        raise ConfigError(f"REQUEST_TIMEOUT must be a number, got {raw_timeout!r}") from None

    log_level = (env.get("LOG_LEVEL") or "INFO").strip().upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")

    return Config(
        api_key=api_key,
        base_url=base_url.rstrip("/"),
        page_size=page_size,
        timeout=timeout,
        max_rate_limit_waits=_int_setting(env, "MAX_RATE_LIMIT_WAITS", None),
        log_level=log_level,
    )
