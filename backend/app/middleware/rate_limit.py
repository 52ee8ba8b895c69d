"""Rate limiting middleware for API protection"""
from slowapi import Limiter
from slowapi.util import get_remote_address
from fastapi import Request
from app.config import settings


def get_identifier(request: Request) -> str:
    """
    Get identifier for rate limiting

    Priority:
    1. First X-Forwarded-For hop (only when TRUST_PROXY_HEADERS is set)
    2. IP address
    """
    if settings.TRUST_PROXY_HEADERS:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()

    return get_remote_address(request)


# Create limiter instance
limiter = Limiter(
    key_func=get_identifier,
    default_limits=settings.RATE_LIMIT_DEFAULT,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)


# Rate limit configurations for different endpoint groups
RATE_LIMITS = {
    "recommend": "60/minute",
    "ledger": "120/minute",
    "auth": "20/minute",
    "dashboard": "120/minute",
}


def get_rate_limit(endpoint: str) -> str:
    """Get rate limit for specific endpoint"""
    return RATE_LIMITS.get(endpoint, settings.RATE_LIMIT_DEFAULT[0])


def rate_limit(endpoint: str):
    """
    Route decorator applying the limit of an endpoint group.

    The limit string is looked up on every request, so ``RATE_LIMITS`` can
    be changed at runtime. The decorated endpoint needs a ``request``
    parameter.
    """
    return limiter.limit(lambda: get_rate_limit(endpoint))
