"""badgerelay FastAPI application factory + lifespan lifecycle.

This module implements:
  - create_app() — testable application factory
  - lifespan — @asynccontextmanager startup/shutdown sequence
  - /        route  — service discovery root
  - app = create_app() — module-level instance for uvicorn

Startup sequence:
  1. load_config()      → raises ConfigError if GITHUB_ACCESS_TOKEN is missing
  2. create_provider()  → authenticated GitHub client, shared by all requests
  3. app.state.context  = RelayContext(config, provider)

Shutdown: app.state.context = None → provider.aclose()

Run with:
  badgerelay                          # badgerelay.run:main, hardened defaults
  uvicorn badgerelay.main:app --host 127.0.0.1 --port 80 --timeout-keep-alive 15
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.routing import APIRouter

from badgerelay.config import Config, load_config
from badgerelay.context import RelayContext
from badgerelay.errors import RelayError
from badgerelay.health import router as health_router
from badgerelay.middleware import RequestIdMiddleware
from badgerelay.providers.factory import create_provider
from badgerelay.providers.protocol import CIProvider
from badgerelay.status import router as status_router
from badgerelay.utils.logger import configure_logging, get_logger

# ─── Logging Setup ────────────────────────────────────────────────────────────
DEBUG = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO" if not DEBUG else "DEBUG")
JSON_LOGS = os.getenv("JSON_LOGS", "true").lower() == "true"

configure_logging(log_level=LOG_LEVEL, json_output=JSON_LOGS)
logger = get_logger(__name__)


root_router = APIRouter(tags=["root"])


@root_router.get("/")
async def root() -> dict[str, str]:
    """Root endpoint: service identity and discovery."""
    return {
        "service": "badgerelay",
        "health": "/health",
        "status": "/ci/status/{user}/{repo}/{branch}/",
    }


# ─── Lifespan ─────────────────────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: build the relay context, tear it down on exit.

    ConfigError from load_config() or create_provider() propagates, so the
    server never starts serving without a credential.
    """
    logger.info("badgerelay starting up...")

    config: Config = load_config()
    provider: CIProvider = create_provider(config)
    app.state.context = RelayContext(config=config, provider=provider)

    logger.info(
        "badgerelay ready",
        provider=config.provider,
        allowlist_size=len(config.allowed_users),
    )

    yield

    logger.info("badgerelay shutting down...")
    app.state.context = None

    try:
        await provider.aclose()
        logger.info("CI provider client closed")
    except Exception as exc:
        logger.warning("CI provider close error (non-fatal)", error=str(exc))

    logger.info("badgerelay shutdown complete")


# ─── Application Factory ──────────────────────────────────────────────────────


def create_app() -> FastAPI:
    """Create and configure the badgerelay FastAPI application.

    Call this directly in tests to get an isolated app instance. The
    module-level ``app`` is the instance uvicorn serves.
    """
    application = FastAPI(
        title="badgerelay",
        description="GitHub Actions build status as shields.io endpoint badges",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if DEBUG else None,
        redoc_url="/redoc" if DEBUG else None,
        openapi_url="/openapi.json" if DEBUG else None,
    )

    application.state.context = None

    application.add_middleware(RequestIdMiddleware)

    application.include_router(root_router)
    application.include_router(health_router)
    application.include_router(status_router)

    @application.exception_handler(RelayError)
    async def relay_error_handler(request: Request, exc: RelayError) -> PlainTextResponse:
        logger.warning(
            "Request failed",
            kind=exc.kind.value,
            error=exc.message,
            status_code=exc.status_code,
            path=str(request.url.path),
        )
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @application.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request, exc: HTTPException
    ) -> JSONResponse:
        logger.warning(
            "HTTP exception",
            status_code=exc.status_code,
            detail=exc.detail,
            path=str(request.url.path),
        )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @application.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.error(
            "Unhandled exception",
            error=str(exc),
            error_type=type(exc).__name__,
            path=str(request.url.path),
        )
        return JSONResponse(
            status_code=500, content={"error": "Internal server error"}
        )

    return application


app = create_app()


# ─── Dev Entrypoint ───────────────────────────────────────────────────────────

if __name__ == "__main__":
    import uvicorn

    from badgerelay.constants import SERVER_TIMEOUT_KEEP_ALIVE

    _startup_config = load_config()
    logger.info(
        "Starting badgerelay (dev mode)",
        host=_startup_config.server.host,
        port=_startup_config.server.port,
    )

    uvicorn.run(
        "badgerelay.main:app",
        host=_startup_config.server.host,
        port=_startup_config.server.port,
        reload=DEBUG,
        log_level=LOG_LEVEL.lower(),
        timeout_keep_alive=SERVER_TIMEOUT_KEEP_ALIVE,
    )
