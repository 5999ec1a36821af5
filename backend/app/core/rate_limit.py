"""
Rate limiting for the public storefront endpoints

SlowAPI with in-memory counters. Checkout and order lookup carry tighter
per-route limits (RATE_LIMIT_CHECKOUT, RATE_LIMIT_LOOKUP).
"""
import logging

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

from app.core.config import settings

logger = logging.getLogger(__name__)

RETRY_AFTER_SECONDS = 60


def get_client_ip(request: Request) -> str:
    """Shopper address; behind the load balancer, the first X-Forwarded-For hop."""
    forwarded = request.headers.get("X-Forwarded-For", "")
    first_hop = forwarded.split(",")[0].strip()
    return first_hop or get_remote_address(request)


limiter = Limiter(
    key_func=get_client_ip,
    enabled=settings.RATE_LIMIT_ENABLED,
    default_limits=[settings.RATE_LIMIT_DEFAULT],
)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """429 in the `{"error": ...}` shape the storefront reads."""
    logger.warning(
        f"Rate limit {exc.detail} hit by {get_client_ip(request)} "
        f"on {request.method} {request.url.path}"
    )
    return JSONResponse(
        status_code=429,
        content={
            "error": "Too many requests. Please wait a moment and try again.",
            "limit": exc.detail,
        },
        headers={"Retry-After": str(RETRY_AFTER_SECONDS)},
    )
