"""Runtime settings read from the environment (populated from .env by the entry points)."""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

_DEFAULT_NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
_DEFAULT_USER_AGENT = "SkyPhase/1.0"


class ConfigError(Exception):
    """Invalid environment setting."""


@dataclass(frozen=True)
class Settings:
    lang: str = "en"
    phase_refresh_seconds: int = 60
    clock_refresh_seconds: int = 1
    search_horizon_minutes: int = 1440
    search_step_minutes: int = 2
    nominatim_url: str = _DEFAULT_NOMINATIM_URL
    user_agent: str = _DEFAULT_USER_AGENT
    log_level: str = "WARNING"


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from SKYPHASE_* variables.

    Args:
        env: Mapping to read from. Defaults to os.environ.

    Raises:
        ConfigError: On non-numeric or non-positive interval values, or an
            unknown log level.
    """
    env = os.environ if env is None else env

    lang = env.get("SKYPHASE_LANG", "en").strip().lower() or "en"
    log_level = env.get("SKYPHASE_LOG_LEVEL", "WARNING").strip().upper() or "WARNING"
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"SKYPHASE_LOG_LEVEL is not a logging level: {log_level!r}")

    step = _positive_int(env, "SKYPHASE_SEARCH_STEP_MINUTES", 2)
    horizon = _positive_int(env, "SKYPHASE_SEARCH_HORIZON_MINUTES", 1440)
    if step > horizon:
        raise ConfigError("SKYPHASE_SEARCH_STEP_MINUTES exceeds the search horizon")

    return Settings(
        lang=lang,
        phase_refresh_seconds=_positive_int(env, "SKYPHASE_PHASE_REFRESH_SECONDS", 60),
        clock_refresh_seconds=_positive_int(env, "SKYPHASE_CLOCK_REFRESH_SECONDS", 1),
        search_horizon_minutes=horizon,
        search_step_minutes=step,
        nominatim_url=env.get("SKYPHASE_NOMINATIM_URL", _DEFAULT_NOMINATIM_URL),
        user_agent=env.get("SKYPHASE_USER_AGENT", _DEFAULT_USER_AGENT),
        log_level=log_level,
    )


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s: %(levelname)s: %(message)s",
    )
