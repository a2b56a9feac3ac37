"""
Runtime settings read from the environment.

A ``.env`` file in the working directory is honoured through python-dotenv;
real environment variables take precedence over it.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_TRACE_WINDOW = 10
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _int_var(env: Mapping[str, str], name: str, default: Optional[int]) -> Optional[int]:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


@dataclass
class Settings:
    step_limit: Optional[int] = None
    log_level: str = DEFAULT_LOG_LEVEL
    trace_window: int = DEFAULT_TRACE_WINDOW

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``env`` (os.environ after loading .env by default)."""
        if env is None:
            load_dotenv(find_dotenv(usecwd=True))
            env = os.environ

        # 0 means "no limit", matching an unset variable
        step_limit = _int_var(env, "BF_STEP_LIMIT", None) or None
        trace_window = _int_var(env, "BF_TRACE_WINDOW", DEFAULT_TRACE_WINDOW)
        log_level = env.get("BF_LOG_LEVEL", "").strip().upper() or DEFAULT_LOG_LEVEL
        if log_level not in LOG_LEVELS:
            raise ValueError(f"BF_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")
        return cls(step_limit=step_limit, log_level=log_level, trace_window=trace_window)
