from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from resume_scan.core.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit],
    enabled=settings.rate_limit_enabled,
)


def rate_limit(limit: str | None = None):
    """Apply ``limit`` (default RATE_LIMIT) to a route; a no-op when limiting is disabled."""
    if not settings.rate_limit_enabled:
        return lambda func: func
    return limiter.limit(limit or settings.rate_limit)
