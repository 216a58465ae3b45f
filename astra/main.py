"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from astra import __version__
from astra.config import get_settings
from astra.logging import configure_logging
from astra.middleware import (
    FixedWindowRateLimiter,
    rate_limit_middleware,
    security_headers_middleware,
)
from astra.models import ErrorResponse
from astra.policy import DEFAULT_POLICY
from astra.routes import router

logger = logging.getLogger(__name__)

INVALID_MESSAGE = "Invalid message."


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create application resources during startup and clean up on shutdown."""

    async with httpx.AsyncClient() as client:
        app.state.http_client = client
        yield
        del app.state.http_client


async def invalid_request_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info(
        "Rejected invalid chat request",
        extra={"path": request.url.path, "errors": len(exc.errors())},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(error=INVALID_MESSAGE).model_dump(),
    )


def create_app() -> FastAPI:
    """Application factory."""

    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Astra Assistant",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.policy = DEFAULT_POLICY
    app.state.rate_limiter = FixedWindowRateLimiter(
        max_requests=settings.rate_limit_max,
        window_s=settings.rate_limit_window,
    )

    app.add_exception_handler(RequestValidationError, invalid_request_handler)

    # Last added runs first: security headers, then CORS, then rate limiting.
    app.middleware("http")(rate_limit_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_methods=["POST"],
        allow_headers=["Content-Type"],
    )
    app.middleware("http")(security_headers_middleware)

    app.include_router(router)

    return app


def run() -> None:
    """Serve the application with uvicorn on the configured port."""

    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Astra Assistant starting", extra={"port": settings.port})
    uvicorn.run(
        "astra.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )
