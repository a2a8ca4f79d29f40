"""Rate limiting for FastAPI endpoints using SlowAPI.

Limits are read from settings on each request, so the shared limiter can
be created at import time without loading configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request, status
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from sql_quest.api.dependencies import request_id_ctx
from sql_quest.core.config import get_settings

if TYPE_CHECKING:
    from sql_quest.core.config import Settings


def _get_key_func(request: Request) -> str:
    """Get rate limit key from the forwarded client address or the peer IP.

    Args:
        request: The incoming request.

    Returns:
        The rate limit key.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return get_remote_address(request)


def default_rate_limit() -> str:
    return get_settings().RATE_LIMIT_DEFAULT


def query_rate_limit() -> str:
    return get_settings().RATE_LIMIT_QUERY


limiter = Limiter(
    key_func=_get_key_func,
    default_limits=[default_rate_limit],
    storage_uri="memory://",
    headers_enabled=True,
)


def get_limiter(settings: Settings | None = None) -> Limiter:
    """Get the shared rate limiter, switched on or off per settings.

    Args:
        settings: Application settings.

    Returns:
        Configured Limiter instance.
    """
    settings = settings or get_settings()
    limiter.enabled = settings.RATE_LIMIT_ENABLED
    return limiter


def reset_limiter() -> None:
    """Clear all recorded hits (for testing)."""
    limiter.reset()


def get_rate_limit_exceeded_handler():
    """Get rate limit exceeded exception handler.

    Returns:
        FastAPI exception handler for RateLimitExceeded.
    """

    async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content={
                "success": False,
                "error": "rate_limit_exceeded",
                "error_code": "RATE_LIMIT_EXCEEDED",
                "message": f"Rate limit exceeded: {exc.detail}",
                "request_id": request_id_ctx.get(),
            },
            headers={"Retry-After": "60"},
        )

    return rate_limit_exceeded_handler
