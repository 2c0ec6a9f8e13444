"""
FastAPI application entry point for the Vapi sync service.

This module:
- Configures the FastAPI application with middleware and routers
- Sets up structured logging with structlog
- Implements global exception handlers for consistent error responses
- Manages application lifecycle (startup/shutdown hooks)

Every error response is a JSON object with an "error" field and, for some
errors, a "details" field.
"""

import logging
import time
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from vapi_sync import __version__
from vapi_sync.api.routes import assistants, phone_numbers
from vapi_sync.config import settings
from vapi_sync.core.deps import close_vapi_client
from vapi_sync.core.exceptions import GenericFailure, SyncError

# ===== Structured Logging Configuration =====

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer() if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        logging.getLevelName(settings.log_level.upper())
    ),
)

logger = structlog.get_logger()

# Body validation errors that mean "field not supplied"
_MISSING_ERROR_TYPES = {"missing", "string_too_short"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup configuration; close the shared Vapi client on shutdown."""
    logger.info(
        "application_starting",
        service="Vapi Sync",
        version=__version__,
        environment=settings.app_env,
        log_level=settings.log_level,
        data_file=settings.data_file,
        vapi_base_url=settings.vapi_base_url,
        vapi_key_configured=bool(settings.vapi_api_key)
    )

    yield

    logger.info("application_shutting_down")
    await close_vapi_client()
    logger.info("shutdown_complete")


app = FastAPI(
    title="Vapi Sync",
    description="Local assistant and phone number records mirrored to Vapi",
    version=__version__,
    lifespan=lifespan,
)

# ===== Middleware Configuration =====

if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["*"],
        max_age=600,
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request with timing and add an X-Process-Time header."""
    start_time = time.time()

    logger.info(
        "request_started",
        method=request.method,
        path=request.url.path,
        client_ip=request.client.host if request.client else "unknown"
    )

    response = await call_next(request)

    process_time = time.time() - start_time

    logger.info(
        "request_completed",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        process_time_ms=round(process_time * 1000, 2)
    )

    response.headers["X-Process-Time"] = str(round(process_time, 3))
    return response


# ===== Global Exception Handlers =====


@app.exception_handler(SyncError)
async def sync_error_handler(request: Request, exc: SyncError):
    """
    Translate service errors into their HTTP status and JSON body.

    Response format:
    {
        "error": "Assistant not found",
        "details": ...          # only when present
    }
    """
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "request_failed",
        kind=exc.kind.value,
        message=exc.message,
        status_code=exc.status_code,
        path=request.url.path
    )

    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def _required_fields_message(errors: list[dict]) -> str:
    """'name and firstMessage are required' style message for body errors."""
    if not errors or any(err.get("type") not in _MISSING_ERROR_TYPES for err in errors):
        return "Invalid request data"

    fields: list[str] = []
    for err in errors:
        field = str(err["loc"][-1]) if err.get("loc") else "body"
        if field not in fields:
            fields.append(field)

    verb = "is" if len(fields) == 1 else "are"
    return f"{' and '.join(fields)} {verb} required"


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Missing or malformed body fields are a 400, like any other validation error."""
    errors = exc.errors()

    logger.warning(
        "validation_error",
        errors=errors,
        body=str(exc.body)[:500],
        path=request.url.path
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": _required_fields_message(errors),
            "details": jsonable_encoder(errors),
        }
    )


@app.exception_handler(Exception)
async def generic_error_handler(request: Request, exc: Exception):
    """Catch-all handler for unexpected exceptions."""
    logger.exception(
        "unexpected_error",
        error_type=type(exc).__name__,
        error_message=str(exc),
        path=request.url.path
    )

    failure = GenericFailure("Internal server error", details=str(exc))
    return JSONResponse(status_code=failure.status_code, content=failure.to_dict())


# ===== Router Registration =====

app.include_router(assistants.router)
app.include_router(phone_numbers.router)

# ===== Core Endpoints =====


@app.get("/", response_class=PlainTextResponse)
async def root():
    """Liveness check."""
    return "Hello World"


@app.get("/health")
async def health():
    """Health check endpoint for load balancers and monitoring."""
    return {
        "status": "healthy",
        "environment": settings.app_env,
        "version": __version__,
        "timestamp": int(time.time())
    }
