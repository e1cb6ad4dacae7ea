"""Main FastAPI application entry point."""

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager, suppress

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.routes.auth import router as auth_router
from api.routes.health import router as health_router
from api.routes.users import router as users_router
from api.v1 import router as v1_router
from api.v1.dependencies import get_uow_factory
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import limiter, rate_limit_exceeded_handler

logger = structlog.get_logger()

# Initialize structured logging
setup_logging()


async def keepalive_ping() -> int:
    """Touch the profiles table so an idle free-tier project is not paused."""
    async with get_uow_factory()() as uow:
        return await uow.profiles.count()


async def keepalive_loop(
    interval: float, ping: Callable[[], Awaitable[int]] = keepalive_ping
) -> None:
    """Ping every ``interval`` seconds until cancelled; a failed ping is logged, not fatal."""
    while True:
        await asyncio.sleep(interval)
        try:
            profiles = await ping()
            logger.info("keepalive_ping_completed", profiles=profiles)
        except Exception:
            logger.exception("keepalive_ping_failed")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager for startup/shutdown tasks."""
    keepalive_task = None
    if settings.keepalive_interval_seconds > 0:
        keepalive_task = asyncio.create_task(
            keepalive_loop(settings.keepalive_interval_seconds)
        )
    yield
    if keepalive_task:
        keepalive_task.cancel()
        with suppress(asyncio.CancelledError):
            await keepalive_task


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=(
            "## Thoughts\n\n"
            "A small social network for short text posts, backed by Supabase.\n\n"
            "### Features\n"
            "- **Profiles**: one profile per account, created on first contact "
            "with a unique handle\n"
            "- **Thoughts**: posts of up to 280 characters and a global feed\n"
            "- **Follows, bookmarks and notifications**\n\n"
            "### Authentication\n"
            "Endpoints under `/api/v1` (except public profile and feed reads) "
            "require a Supabase JWT in the Authorization header:\n"
            "```\nAuthorization: Bearer <your_token>\n```\n\n"
            "### Rate Limits\n"
            "- GET endpoints: 30 requests/minute\n"
            "- POST/PATCH/PUT/DELETE: 10 requests/minute"
        ),
        version="1.0.0",
        debug=settings.debug,
        contact={
            "name": "Thoughts Support",
        },
        license_info={
            "name": "MIT",
        },
        openapi_tags=[
            {
                "name": "health",
                "description": "Health check endpoints",
            },
            {
                "name": "auth",
                "description": "Sign-in callback",
            },
            {
                "name": "users",
                "description": "Profile creation after sign-up",
            },
            {
                "name": "me",
                "description": "The caller's profile, graph and bookmarks",
            },
            {
                "name": "profiles",
                "description": "Public profiles",
            },
            {
                "name": "thoughts",
                "description": "Posting and reading thoughts",
            },
            {
                "name": "follows",
                "description": "Follow relationships",
            },
            {
                "name": "notifications",
                "description": "Notification management operations",
            },
        ],
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # Security & tracking middleware (LIFO order - last added = outermost)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # GZip compression for responses > 1KB
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Include routers
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
