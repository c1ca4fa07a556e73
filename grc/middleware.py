"""Application middleware — CORS, rate limiting, request logging, error mapping."""

from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from grc.config import Settings
from grc.errors import GRCError

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


def _caller_or_address(request: Request) -> str:
    """Rate-limit key: the forwarded user id, else the client address."""
    header = request.app.state.settings.caller_header
    user_id = (request.headers.get(header) or "").strip()
    return f"user:{user_id}" if user_id else get_remote_address(request)


def get_limiter(settings: Settings) -> Limiter:
    """Create a rate limiter applying the default limit per caller."""
    return Limiter(key_func=_caller_or_address, default_limits=[settings.rate_limit_default])


def configure_cors(app: FastAPI, settings: Settings) -> None:
    """Allow the dashboard frontend to call the API."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER, "X-RateLimit-Remaining"],
    )


def configure_rate_limiting(app: FastAPI, settings: Settings) -> None:
    """Enforce the default limit on every route; excess requests get 429."""
    app.state.limiter = get_limiter(settings)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)


async def grc_error_handler(request: Request, exc: GRCError) -> JSONResponse:
    """Render a service failure with the status code of its class."""
    logger.info(
        "request_failed",
        path=request.url.path,
        error=exc.code,
        status_code=exc.status_code,
        detail=exc.message,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.code},
    )


def configure_error_handlers(app: FastAPI) -> None:
    """Map the service error taxonomy onto HTTP responses."""
    app.add_exception_handler(GRCError, grc_error_handler)


async def logging_middleware(request: Request, call_next) -> Response:
    """Bind a request id to the log context and log each request once."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id)

    started = time.monotonic()
    response = await call_next(request)

    logger.info(
        "http_request",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round((time.monotonic() - started) * 1000, 2),
        client_ip=request.client.host if request.client else "unknown",
    )
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


def configure_structured_logging(settings: Settings) -> None:
    """Route structlog through stdlib logging, rendered as JSON or console text."""
    logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if settings.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: configure logging on startup, log shutdown."""
    settings = app.state.settings
    configure_structured_logging(settings)
    logger.info(
        "application_starting",
        version=settings.app_version,
        environment=settings.environment,
        api_prefix=settings.api_prefix,
    )
    yield
    logger.info("application_shutting_down")
