import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from template_builder.config import settings
from template_builder.db import init_db
from template_builder.exceptions import (
    AppException,
    app_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    general_exception_handler
)
from template_builder.middleware.body_limit import BodySizeLimitMiddleware
from template_builder.middleware.request_id import RequestIDMiddleware
from template_builder.middleware.security_headers import SecurityHeadersMiddleware
from template_builder.rate_limit import limiter, rate_limit_exceeded_handler
from template_builder.routers import components, generate, pages, templates
from template_builder.utils.logging import configure_logging

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Build WordPress themes from ordered component lists",
    version="1.0.0"
)

# Add rate limiting state
app.state.limiter = limiter

# Register exception handlers
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition", "X-Request-ID"],
    max_age=3600,
)

app.add_middleware(RequestIDMiddleware)
app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.MAX_REQUEST_SIZE)
app.add_middleware(SecurityHeadersMiddleware)


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize application on startup"""
    logger.info(f"Starting {settings.APP_NAME} ({settings.ENVIRONMENT})...")
    if settings.STORE_BACKEND == "sql":
        init_db()
        logger.info("Database tables verified/created")
    else:
        logger.info(f"Using {settings.STORE_BACKEND} template store")


# Register routers
app.include_router(templates.router)
app.include_router(pages.router)
app.include_router(components.router)
app.include_router(generate.router)


@app.get("/healthz")
def healthz():
    return {"status": "ok"}
