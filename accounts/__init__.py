"""
Main application package initialization.
This package contains the FastAPI application and all its components.
"""

import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from accounts.core.cache import check_redis_health
from accounts.core.config import settings
from accounts.core.errors import ServiceError
from accounts.routes import user

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="User registration, authentication and account management",
    version="0.1.0"
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Single translation point from service errors to HTTP responses."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=exc.headers,
    )


@app.middleware("http")
async def log_requests(request: Request, call_next) -> Response:
    """Log method, path, status and latency; bodies are never logged."""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s | status=%d latency=%.1fms",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


@app.get("/health")
def health():
    cache_status = "disabled"
    if settings.CACHE_ENABLED:
        cache_status = "ok" if check_redis_health() else "unavailable"
    return {"status": "ok", "cache": cache_status}


# Include routers
app.include_router(user.router, prefix=settings.API_PREFIX)
