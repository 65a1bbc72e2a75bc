"""Runtime settings read from the environment (after .env is loaded)."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .recommender import DEFAULT_LIMIT

DEFAULT_DB_PATH = Path("data") / "portal.db"
DEFAULT_TIMEOUT = 15.0
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    db_path: Path = DEFAULT_DB_PATH
    api_url: Optional[str] = None
    api_token: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL
    limit: int = DEFAULT_LIMIT


def _get(environ: Mapping[str, str], key: str) -> Optional[str]:
    value = environ.get(key, "").strip()
    return value or None


def _positive_float(value: Optional[str], default: float) -> float:
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


def _int(value: Optional[str], default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def get_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings from ``environ`` (defaults to ``os.environ``).

    Malformed numbers fall back to their defaults rather than failing.
    """
    env = os.environ if environ is None else environ
    db = _get(env, "SKILLMATCH_DB")
    api_url = _get(env, "SKILLMATCH_API_URL")
    return Settings(
        db_path=Path(db) if db else DEFAULT_DB_PATH,
        api_url=api_url.rstrip("/") if api_url else None,
        api_token=_get(env, "SKILLMATCH_API_TOKEN"),
        timeout=_positive_float(_get(env, "SKILLMATCH_TIMEOUT"), DEFAULT_TIMEOUT),
        log_level=(_get(env, "SKILLMATCH_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        limit=_int(_get(env, "SKILLMATCH_LIMIT"), DEFAULT_LIMIT),
    )
