"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings, resolve_session_secret
from shared.exceptions import PortalError
from shared.rate_limiter import RateLimiter

from .dependencies import get_container
from .routes import health
from modules.auth.routes import admin_router, user_router
from modules.chat.routes import router as chat_router

logger = logging.getLogger(__name__)


async def reap_rate_limit_buckets(
    limiter: RateLimiter,
    interval_seconds: float,
    grace_seconds: float,
) -> None:
    """Periodically evict rate-limit buckets whose window has long passed."""
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            limiter.reap_expired(grace_seconds)
        except Exception:
            logger.exception("Rate-limit bucket sweep failed")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Starts the rate-limit reaper and stops it on shutdown.
    """
    # Startup
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")
    reaper = asyncio.create_task(
        reap_rate_limit_buckets(
            get_container().rate_limiter,
            settings.rate_limit_reap_interval_seconds,
            settings.rate_limit_reap_grace_seconds,
        )
    )
    yield
    # Shutdown
    reaper.cancel()
    try:
        await reaper
    except asyncio.CancelledError:
        pass
    logger.info(f"Shutting down {settings.app_name}")


async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    """Fallback for domain errors a route did not translate itself."""
    logger.error(f"Unhandled {exc.code} on {request.url.path}: {exc.message}")
    return JSONResponse({"detail": "server error"}, status_code=500)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Raises:
        ConfigurationError: If SESSION_SECRET is missing in production

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    resolve_session_secret(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Session auth, login rate limiting and artist/gallery chat",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(PortalError, portal_error_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(admin_router, prefix="/api/admin", tags=["admin"])
    app.include_router(user_router, prefix="/api/auth", tags=["auth"])
    app.include_router(chat_router, prefix="/api/chat", tags=["chat"])

    return app


# Application instance for uvicorn
app = create_app()
