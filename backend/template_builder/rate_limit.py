"""
Per-client request limits for the expensive endpoints (generation and export).
"""
import logging

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request

from template_builder.config import settings
from template_builder.exceptions import error_response
from template_builder.middleware.request_id import get_request_id

logger = logging.getLogger(__name__)

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[f"{settings.RATE_LIMIT_DEFAULT_PER_MINUTE}/minute"],
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window"
)

EXPORT_RATE_LIMIT = f"{settings.RATE_LIMIT_EXPORT_PER_MINUTE}/minute"
GENERATE_RATE_LIMIT = f"{settings.RATE_LIMIT_GENERATE_PER_MINUTE}/minute"


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """429 in the app's error format, naming the limit that was hit."""
    logger.warning(
        f"Rate limit exceeded for {get_remote_address(request)}",
        extra={
            "request_id": get_request_id(request),
            "path": request.url.path,
            "method": request.method,
            "error_code": "RATE_LIMIT_EXCEEDED",
        }
    )

    return error_response(
        429,
        "RATE_LIMIT_EXCEEDED",
        "Too many requests. Please try again later.",
        {"limit": exc.detail},
    )
