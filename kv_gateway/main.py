"""
KV Gateway Application Entry Point

FastAPI application main entry, including router registration and application configuration.
"""

import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from kv_gateway.api import kv_router
from kv_gateway.api.deps import KVServiceDep
from kv_gateway.common.errors import AppError, StoreError, ValidationError
from kv_gateway.config import get_settings
from kv_gateway.db.redis import close_redis, init_redis
from kv_gateway.logging_config import setup_logging

logger = logging.getLogger(__name__)

# Initialize logging configuration
setup_logging()

VERSION = "0.1.0"


# Application Lifecycle Management
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application Lifecycle Management

    Open the Redis connection pool on startup, close it on shutdown.
    """
    settings = get_settings()
    if settings.KV_STORE_TYPE == "redis":
        await init_redis()
    else:
        logger.warning("Using in-memory KV store; data is lost on restart")
    yield
    if settings.KV_STORE_TYPE == "redis":
        await close_redis()


# Create FastAPI application
settings = get_settings()

app = FastAPI(
    title=settings.APP_NAME,
    description="HTTP facade over a Redis key-value store",
    version=VERSION,
    lifespan=lifespan,
)

# Configure CORS
# Parse ALLOWED_ORIGINS from comma-separated string to list
allowed_origins_str = settings.ALLOWED_ORIGINS.strip()
if allowed_origins_str:
    allowed_origins = [origin.strip() for origin in allowed_origins_str.split(",") if origin.strip()]
else:
    allowed_origins = []

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Global Exception Handlers
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """
    Handle application custom exceptions

    In production mode, error details are hidden to prevent information leakage.
    """
    include_details = get_settings().DEBUG
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(include_details=include_details),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """
    Handle malformed request bodies and parameters

    Reported as 400 with the same error envelope as ValidationError.
    """
    error = ValidationError(
        message="Invalid JSON",
        code="invalid_request",
        details={"errors": [
            {"loc": list(e.get("loc", ())), "msg": e.get("msg", "")}
            for e in exc.errors()
        ]},
    )
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_dict(include_details=get_settings().DEBUG),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """
    Handle uncaught exceptions

    Stack traces are logged but only returned to clients in debug mode.
    """
    settings = get_settings()
    logger.error(
        "Uncaught exception: %s\nPath: %s\nTraceback:\n%s",
        str(exc),
        request.url.path,
        traceback.format_exc(),
    )

    if settings.DEBUG:
        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "message": str(exc),
                    "type": type(exc).__name__,
                    "code": "internal_error",
                    "traceback": traceback.format_exc().split("\n"),
                }
            },
        )

    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "message": "Internal server error",
                "type": "internal_error",
                "code": "internal_error",
            }
        },
    )


# Health Check Endpoint
@app.get("/health", tags=["Health"])
async def health_check(service: KVServiceDep):
    """
    Health Check

    Reports whether the key-value store answers.
    """
    try:
        await service.ping()
    except StoreError as e:
        logger.warning("Health check failed: %s", e.message)
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "store": e.code},
        )
    return {"status": "healthy", "store": "ok"}


@app.get("/", tags=["Health"])
async def root():
    """Root Path"""
    return {
        "name": settings.APP_NAME,
        "version": VERSION,
        "description": "KV Gateway - HTTP access to a TTL-bounded key-value store",
    }


app.include_router(kv_router)
