"""
Rate limiting using slowapi.

Limits are keyed by client IP. Storage defaults to in-process memory and
can point at any ``limits`` storage backend through RATE_LIMIT_STORAGE_URI.

Rate Limits:
- Login: 5 attempts per minute
- Registration: 3 attempts per minute
- Generation: 10 requests per minute
- Default: 100 requests per minute
"""

import ipaddress
import logging

from starlette.requests import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from infrastructure.config.settings import settings

logger = logging.getLogger(__name__)


def _public_ip(value: str) -> str | None:
    """Return the address when it is a valid, non-private IP."""
    try:
        addr = ipaddress.ip_address(value.strip())
    except ValueError:
        return None
    if addr.is_private or addr.is_loopback or addr.is_link_local:
        # Spoofable from the client side
        return None
    return str(addr)


def _get_real_ip(request: Request) -> str:
    """Extract the client IP from proxy headers, falling back to the socket address."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        ip = _public_ip(forwarded.split(",")[0])
        if ip:
            return ip
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        ip = _public_ip(real_ip)
        if ip:
            return ip
    return get_remote_address(request)


# Format: "count/period" where period can be: second, minute, hour, day
RATE_LIMITS = {
    "login": "5/minute",
    "register": "3/minute",
    "generate": "10/minute",
    "default": "100/minute",
}

if settings.rate_limit_storage_uri.startswith("memory://") and settings.is_production:
    logger.warning("Rate limiter using in-memory storage; limits are per worker")

limiter = Limiter(
    key_func=_get_real_ip,
    storage_uri=settings.rate_limit_storage_uri,
    default_limits=[RATE_LIMITS["default"]],
)


def get_rate_limit(endpoint: str) -> str:
    """Rate limit string for an endpoint, falling back to the default."""
    return RATE_LIMITS.get(endpoint, RATE_LIMITS["default"])
