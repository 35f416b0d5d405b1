from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from template_builder.config import settings
from template_builder.exceptions import error_response


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """
    Reject request bodies over max_bytes with 413. Declared lengths are checked
    up front; chunked bodies are counted while read and buffered for the route.
    """

    def __init__(self, app, max_bytes: int = None):
        super().__init__(app)
        self.max_bytes = max_bytes or settings.MAX_REQUEST_SIZE

    def _too_large(self):
        return error_response(
            413,
            "PAYLOAD_TOO_LARGE",
            "Request body too large",
            {"max_bytes": self.max_bytes},
        )

    async def dispatch(self, request: Request, call_next):
        declared = request.headers.get("content-length", "")
        if declared.isdigit():
            if int(declared) > self.max_bytes:
                return self._too_large()
            return await call_next(request)

        if request.method in ("POST", "PUT", "PATCH"):
            body = bytearray()
            async for chunk in request.stream():
                body.extend(chunk)
                if len(body) > self.max_bytes:
                    return self._too_large()
            request._body = bytes(body)
        return await call_next(request)
