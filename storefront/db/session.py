"""Database session and engine helpers."""

import logging
from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
import time
from sqlalchemy.orm import Session, sessionmaker

from storefront.core.config import settings

logger = logging.getLogger(__name__)


def engine_options(database_url: str, timeout_seconds: int) -> dict[str, Any]:
    """Build engine keyword arguments that bound every persistence call.

    Connection checkout is limited by ``pool_timeout``; PostgreSQL also gets a
    connect timeout and a server-side ``statement_timeout``; SQLite waits at
    most ``timeout_seconds`` on a locked database.
    """

    backend = make_url(database_url).get_backend_name()
    options: dict[str, Any] = {"future": True, "pool_pre_ping": True}
    if backend == "postgresql":
        options["pool_timeout"] = timeout_seconds
        options["connect_args"] = {
            "connect_timeout": timeout_seconds,
            "options": f"-c statement_timeout={timeout_seconds * 1000}",
        }
    elif backend == "sqlite":
        options["connect_args"] = {"timeout": timeout_seconds}
    return options


engine = create_engine(
    settings.database_url,
    **engine_options(settings.database_url, settings.database_timeout_seconds),
)
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    future=True,
)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for FastAPI dependencies."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def verify_connection(max_attempts: int = 20, delay_seconds: float = 1.0) -> None:
    """Ensure the database connection is reachable with simple retries.

    Args:
        max_attempts: Maximum number of attempts before failing.
        delay_seconds: Base delay between attempts; will use linear backoff.
    """

    last_exc: Exception | None = None
    for attempt in range(1, max_attempts + 1):
        try:
            with engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            if attempt > 1:
                logger.info(
                    "Database connection established after %d attempt(s)", attempt
                )
            return
        except SQLAlchemyError as exc:
            last_exc = exc
            logger.warning(
                "Database not ready (attempt %d/%d): %s",
                attempt,
                max_attempts,
                type(exc).__name__,
            )
            time.sleep(delay_seconds * attempt)  # linear backoff

    logger.error(
        "Database connection verification failed after %d attempts",
        max_attempts,
        exc_info=last_exc,
    )
    raise (
        last_exc
        if last_exc
        else RuntimeError("Database connection verification failed")
    )


__all__ = ["engine", "engine_options", "SessionLocal", "get_db", "verify_connection"]
