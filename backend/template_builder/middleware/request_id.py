"""
Request ID tracking middleware for log correlation.
"""
import logging
import re
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
# Health checks are not logged
QUIET_PATHS = ("/healthz",)

_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")


def _incoming_request_id(request: Request) -> str:
    """Client-supplied id when it is short and header-safe, otherwise a fresh uuid4."""
    supplied = request.headers.get(REQUEST_ID_HEADER, "")
    if _VALID_REQUEST_ID.match(supplied):
        return supplied
    return str(uuid.uuid4())


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Tag each request with an id, echo it in the response headers and log
    start/completion with timing.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = _incoming_request_id(request)
        request.state.request_id = request_id
        path = request.url.path
        quiet = path in QUIET_PATHS

        start = time.time()
        if not quiet:
            logger.info(
                "Request started",
                extra={"request_id": request_id, "method": request.method, "path": path},
            )

        try:
            response: Response = await call_next(request)
        except Exception as e:
            logger.error(
                f"Request failed: {str(e)}",
                extra={
                    "request_id": request_id,
                    "path": path,
                    "duration_ms": int((time.time() - start) * 1000),
                },
                exc_info=True,
            )
            raise

        response.headers[REQUEST_ID_HEADER] = request_id
        if not quiet:
            logger.info(
                "Request completed",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": path,
                    "status": response.status_code,
                    "duration_ms": int((time.time() - start) * 1000),
                },
            )
        return response


def get_request_id(request: Request) -> str:
    """Request id set by RequestIDMiddleware, or "unknown" outside a request."""
    return getattr(request.state, "request_id", "unknown")
