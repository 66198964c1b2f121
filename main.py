"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager

from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from storefront.api import (
    admin_router,
    checkout_router,
    orders_router,
    tracking_router,
    verification_router,
)
from storefront.api.limiter import limiter
from storefront.core.config import settings
from storefront.db.migrations import run_migrations
from storefront.db.session import verify_connection


logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Verify the database and apply migrations before serving requests."""
    try:
        logger.info("Startup: verifying database connection")
        verify_connection()
        logger.info("Startup: database connection verified")
        app.state.database_url = settings.database_url

        logger.info("Startup: running database migrations")
        try:
            run_migrations()
            logger.info("Startup: migrations completed")
        except Exception as migration_exc:
            logger.error("Startup: migration failed", exc_info=True)
            raise migration_exc
    except Exception:
        logger.error("Startup failure", exc_info=True)
        raise

    yield

    logger.info("Shutdown: application stopped")


logger.info("Creating FastAPI application instance")
app = FastAPI(title="Storefront API", lifespan=lifespan)

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

logger.info("Configuring CORS middleware")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_origin_regex=settings.cors_allowed_origin_regex,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(SQLAlchemyError)
async def persistence_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Last-resort mapping for persistence errors no route handled itself."""
    logger.error(
        "Unhandled persistence error on %s %s: %s",
        request.method,
        request.url.path,
        type(exc).__name__,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"detail": "Server error"})


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


logger.info("Registering API routers")
app.include_router(verification_router, prefix="/api/v1")
app.include_router(tracking_router, prefix="/api/v1")
app.include_router(checkout_router, prefix="/api/v1")
app.include_router(orders_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")
logger.info("Routers registered; application ready to accept requests")
