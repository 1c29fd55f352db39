"""Per-client request throttling using SlowAPI."""
from __future__ import annotations

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from slateplanner.core.logging import get_logger
from slateplanner.core.settings import get_settings

logger = get_logger(__name__)

_limiter: Limiter | None = None


def default_limit() -> str:
    settings = get_settings()
    return f"{settings.rate_limit_requests}/{settings.rate_limit_window_seconds} seconds"


def get_limiter() -> Limiter:
    global _limiter
    if _limiter is None:
        settings = get_settings()
        _limiter = Limiter(
            key_func=get_remote_address,
            default_limits=[default_limit()],
            storage_uri=settings.resolved_rate_limit_storage,
        )
    return _limiter


def reset_limiter() -> None:
    """Drop the cached limiter so the next app picks up fresh settings."""
    global _limiter
    _limiter = None


def setup_rate_limiting(app: FastAPI) -> None:
    limiter = get_limiter()
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)
    app.add_middleware(SlowAPIMiddleware)


def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning("rate_limit_exceeded", client=get_remote_address(request), path=request.url.path)
    return JSONResponse(
        status_code=429,
        content={
            "detail": "Too many requests",
            "limit": exc.detail,
        },
        headers={"Retry-After": str(get_settings().rate_limit_window_seconds)},
    )


__all__ = ["default_limit", "get_limiter", "reset_limiter", "setup_rate_limiting"]
