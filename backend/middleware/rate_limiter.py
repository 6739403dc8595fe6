"""
Rate Limiting Middleware

Protects API endpoints from abuse using SlowAPI.
Limits are keyed by bearer token when present, by client IP otherwise.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request, status
from fastapi.responses import JSONResponse
from backend.config import settings
from backend.core.security import hash_token
from backend.utils.sanitize import mask_secret
import logging

logger = logging.getLogger(__name__)


def get_token_from_request(request: Request) -> str:
    """
    Extract the bearer token from the request

    Returns:
        Token or the client IP address as fallback
    """
    auth = request.headers.get("Authorization", "")
    if auth.startswith("Bearer "):
        return auth[7:]

    return get_remote_address(request)


def rate_limit_key(request: Request) -> str:
    """
    Generate rate limit key based on token or IP

    Format: "token:{sha256}" or "ip:{address}"
    """
    token = get_token_from_request(request)

    if token and token != get_remote_address(request):
        return f"token:{hash_token(token)}"

    return f"ip:{token}"


# Initialize rate limiter
limiter = Limiter(
    key_func=rate_limit_key,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    enabled=settings.RATE_LIMIT_ENABLED
)


def custom_rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """
    Custom handler for rate limit exceeded errors

    Returns:
        JSONResponse (429) shaped like the provider rate-limit errors, so
        clients show the same "try again later" message
    """
    retry_after = "60"

    token = get_token_from_request(request)
    safe_key = mask_secret(token) if token != get_remote_address(request) else token

    logger.warning(
        f"Rate limit exceeded for {safe_key} "
        f"on {request.url.path}"
    )

    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={
            "error": "RATE_LIMITED",
            "message": "Too many requests. Please try again later.",
            "retry_after": int(retry_after),
            "limit": str(exc.detail),
            "endpoint": request.url.path
        },
        headers={"Retry-After": retry_after}
    )


def chat_rate_limit():
    """
    Rate limit for chat endpoints

    Default: 20 requests per minute
    """
    return limiter.limit(settings.RATE_LIMIT_CHAT)


# Middleware setup function
def setup_rate_limiting(app):
    """
    Setup rate limiting middleware

    Args:
        app: FastAPI application instance
    """
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, custom_rate_limit_exceeded_handler)

    if settings.RATE_LIMIT_ENABLED:
        logger.info(f"Rate limiting enabled ({settings.RATE_LIMIT_STORAGE_URI})")
    else:
        logger.warning("Rate limiting disabled")
