from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    rate_limit: str
    scan_rate_limit: str
    rate_limit_enabled: bool
    log_level: str
    sentry_dsn: str | None
    scan_provider_timeout_s: float
    scan_max_resume_chars: int
    scan_max_job_chars: int
    field_catalog_path: str | None


settings = Settings(
    rate_limit=_get_env("RATE_LIMIT", "20/minute") or "20/minute",
    scan_rate_limit=_get_env("SCAN_RATE_LIMIT", "5/minute") or "5/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    scan_provider_timeout_s=_get_env_float("SCAN_PROVIDER_TIMEOUT_S", 60.0),
    scan_max_resume_chars=_get_env_int("SCAN_MAX_RESUME_CHARS", 50000),
    scan_max_job_chars=_get_env_int("SCAN_MAX_JOB_CHARS", 50000),
    field_catalog_path=_get_env("FIELD_CATALOG_PATH"),
)

if settings.scan_provider_timeout_s <= 0:
    raise RuntimeError("SCAN_PROVIDER_TIMEOUT_S must be greater than 0.")
