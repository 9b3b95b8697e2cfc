import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

API_KEY_ENV_KEYS = ("GEMINI_API_KEY", "GENAI_API_KEY", "GOOGLE_API_KEY")
GEMINI_MODEL_ENV_KEY = "GEMINI_MODEL"
EXTERNAL_TIMEOUT_ENV_KEY = "EXTERNAL_CALENDAR_TIMEOUT_SECONDS"
CHECK_EXTERNAL_ENV_KEY = "CHECK_EXTERNAL_CALENDAR"
MAX_WORKERS_ENV_KEY = "AVAILABILITY_MAX_WORKERS"
LOG_LEVEL_ENV_KEY = "LOG_LEVEL"

DEFAULT_MODEL_NAME = "gemini-2.5-pro"
DEFAULT_EXTERNAL_TIMEOUT_SECONDS = 3.0
DEFAULT_MAX_WORKERS = 4
DEFAULT_LOG_LEVEL = "INFO"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    gemini_api_key: Optional[str]
    gemini_model: str
    external_calendar_timeout_seconds: float
    check_external_calendar: bool
    availability_max_workers: int
    log_level: str


def _resolve_env_key(keys: tuple[str, ...]) -> Optional[str]:
    for key in keys:
        value = os.getenv(key)
        if value:
            return value
    return None


def _read_float(key: str, default: float) -> float:
    raw = os.getenv(key)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid %s value. Falling back to %s.", key, default)
        return default
    if value <= 0:
        logger.warning("%s must be positive. Falling back to %s.", key, default)
        return default
    return value


def _read_int(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid %s value. Falling back to %s.", key, default)
        return default
    if value < 1:
        logger.warning("%s must be at least 1. Falling back to %s.", key, default)
        return default
    return value


def _read_bool(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None:
        return default
    normalized = raw.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    logger.warning("Invalid %s value '%s'. Falling back to %s.", key, raw, default)
    return default


def load_settings() -> Settings:
    """Build settings from the process environment (and a local .env file)."""
    load_dotenv()
    return Settings(
        gemini_api_key=_resolve_env_key(API_KEY_ENV_KEYS),
        gemini_model=os.getenv(GEMINI_MODEL_ENV_KEY, DEFAULT_MODEL_NAME),
        external_calendar_timeout_seconds=_read_float(
            EXTERNAL_TIMEOUT_ENV_KEY, DEFAULT_EXTERNAL_TIMEOUT_SECONDS
        ),
        check_external_calendar=_read_bool(CHECK_EXTERNAL_ENV_KEY, True),
        availability_max_workers=_read_int(MAX_WORKERS_ENV_KEY, DEFAULT_MAX_WORKERS),
        log_level=os.getenv(LOG_LEVEL_ENV_KEY, DEFAULT_LOG_LEVEL).upper(),
    )


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    return load_settings()
