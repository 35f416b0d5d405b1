"""
Centralized error handling and custom exceptions for the application.
"""
import logging
from typing import Optional, Dict, Any, Iterable, List

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base exception class for application-specific errors."""

    def __init__(
        self,
        error_code: str,
        message: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Optional[Dict[str, Any]] = None
    ):
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AppException):
    """Raised when input validation fails."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            error_code="VALIDATION_ERROR",
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details
        )


class NotFoundError(AppException):
    """Raised when resource is not found."""
    def __init__(self, resource: str, identifier: Optional[str] = None):
        message = f"{resource} not found"
        if identifier:
            message += f": {identifier}"
        super().__init__(
            error_code="NOT_FOUND",
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource": resource, "identifier": identifier}
        )


class ExportError(AppException):
    """Raised when building the theme archive fails. The message stays generic so the client just retries."""
    def __init__(self, message: str = "Failed to export template"):
        super().__init__(
            error_code="EXPORT_FAILED",
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


def field_errors(errors: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Flatten pydantic error dicts to [{field, message, type}]; the leading "body" segment is dropped."""
    result = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        result.append({
            "field": ".".join(loc) or "body",
            "message": err.get("msg", "Invalid value"),
            "type": err.get("type", "value_error"),
        })
    return result


def error_response(
    status_code: int,
    error_code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Every error leaves the API in this shape."""
    return JSONResponse(
        status_code=status_code,
        content={"error_code": error_code, "message": message, "details": details or {}},
        headers=headers,
    )


def _log_context(request: Request, **extra: Any) -> Dict[str, Any]:
    context = {
        "request_id": getattr(request.state, "request_id", None),
        "path": request.url.path,
        "method": request.method,
    }
    context.update(extra)
    return context


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle application-specific exceptions."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"{exc.error_code}: {exc.message}",
        extra=_log_context(request, error_code=exc.error_code, status=exc.status_code),
    )
    return error_response(exc.status_code, exc.error_code, exc.message, exc.details)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request body/path validation failures as 400 with field-level detail."""
    errors = field_errors(exc.errors())
    logger.warning(
        f"Request validation failed: {len(errors)} error(s)",
        extra=_log_context(request, error_code="VALIDATION_ERROR", status=400),
    )
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "VALIDATION_ERROR",
        "Invalid request data",
        {"errors": errors},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing errors (unknown path, wrong method) in the same error shape."""
    logger.warning(
        f"HTTP {exc.status_code}: {exc.detail}",
        extra=_log_context(request, error_code="HTTP_ERROR", status=exc.status_code),
    )
    return error_response(
        exc.status_code,
        "HTTP_ERROR",
        str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything unhandled: logged with traceback, reported to the client without internals."""
    logger.error(
        f"Unexpected error: {str(exc)}",
        exc_info=True,
        extra=_log_context(request, error_code="INTERNAL_ERROR", status=500),
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        "An unexpected error occurred",
    )
