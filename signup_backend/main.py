import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

import logfire
import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.responses import Response

from signup_backend.api.admin import router as admin_router
from signup_backend.api.signup import router as signup_router
from signup_backend.core.config import settings
from signup_backend.core.database import create_tables, dispose_engine, engine
from signup_backend.core.errors import internal_error_response, setup_exception_handlers
from signup_backend.core.rate_limiter import (
    SlidingWindowRateLimiter,
    build_rate_limiter,
    run_cleanup_loop,
)
from signup_backend.core.static import STATIC_DIR, CachedStaticFiles

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(),
    ],
)

# Completely disable SQLAlchemy logging
logging.getLogger("sqlalchemy").setLevel(logging.CRITICAL)
logging.getLogger("sqlalchemy.engine").setLevel(logging.CRITICAL)
logging.getLogger("sqlalchemy.pool").setLevel(logging.CRITICAL)

logger = logging.getLogger(__name__)

if settings.SENTRY_DSN:
    sentry_sdk.init(dsn=settings.SENTRY_DSN, environment=settings.ENVIRONMENT)


def cors_headers() -> dict:
    return {
        "Access-Control-Allow-Origin": settings.CORS_ALLOW_ORIGIN,
        "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type, Authorization",
    }


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting up {settings.PROJECT_NAME}...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(
        f"Database URL: {settings.DATABASE_URL.split('@')[-1] if '@' in settings.DATABASE_URL else 'local'}"
    )
    logger.info(f"Admin path: {settings.ADMIN_PATH}")

    try:
        await create_tables()
        logger.info("Database tables created/verified")
    except Exception as e:
        logger.error(f"Database initialization failed: {str(e)}")
        raise

    cleanup_task = asyncio.create_task(
        run_cleanup_loop(
            app.state.rate_limiter, settings.RATE_LIMIT_CLEANUP_INTERVAL_SECONDS
        )
    )

    yield

    logger.info(f"Shutting down {settings.PROJECT_NAME}...")
    cleanup_task.cancel()
    try:
        await cleanup_task
    except asyncio.CancelledError:
        pass

    await dispose_engine()


async def cors_and_errors_middleware(request: Request, call_next):
    """Answer preflights, attach CORS/security headers and contain failures."""
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=cors_headers())

    try:
        response = await call_next(request)
    except Exception:
        # Full detail stays in the server log; the client gets a generic body
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        response = internal_error_response()

    response.headers.update(cors_headers())
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response


def create_app(rate_limiter: Optional[SlidingWindowRateLimiter] = None) -> FastAPI:
    """Build the application.

    Args:
        rate_limiter: Limiter instance to use; a configured one is built when omitted
    """
    app = FastAPI(
        title=settings.PROJECT_NAME,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.rate_limiter = rate_limiter or build_rate_limiter()

    # configure logfire only if a token is present
    if settings.LOGFIRE_TOKEN:
        try:
            logfire.configure(token=settings.LOGFIRE_TOKEN)
            logfire.instrument_fastapi(app, excluded_urls="/healthz")
            logfire.instrument_sqlalchemy(engine)
        except Exception as e:
            logger.warning(f"Failed to configure Logfire: {e}")

    app.middleware("http")(cors_and_errors_middleware)
    setup_exception_handlers(app)

    app.include_router(signup_router)
    app.include_router(admin_router, prefix=settings.ADMIN_PATH)

    @app.get("/healthz", include_in_schema=False)
    async def healthz():
        return {"status": "ok"}

    # Admin stylesheet; registered after the admin routes so they match first
    app.mount(
        settings.ADMIN_PATH,
        CachedStaticFiles(
            directory=str(STATIC_DIR), max_age=settings.ADMIN_STATIC_MAX_AGE
        ),
        name="admin-static",
    )

    return app


app = create_app()
