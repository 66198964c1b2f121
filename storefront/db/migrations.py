"""Apply the storefront schema with Alembic at startup or from tooling."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import create_engine
from sqlalchemy.engine import Connection
from sqlalchemy.pool import NullPool

from storefront.core.config import settings

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def alembic_config(database_url: Optional[str] = None) -> Config:
    """Alembic config for this checkout; ``alembic/env.py`` reads the URL attribute."""

    cfg = Config(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    cfg.attributes["database_url"] = database_url or settings.database_url
    return cfg


def pending_head(cfg: Config, connection: Connection) -> Optional[str]:
    """Return the head revision still to apply, or ``None`` when up to date."""

    head = ScriptDirectory.from_config(cfg).get_current_head()
    current = MigrationContext.configure(connection).get_current_revision()
    logger.info("Schema revision: current=%s head=%s", current, head)
    return None if current == head else head


def run_migrations(database_url: Optional[str] = None) -> None:
    """Upgrade the database to the storefront head revision.

    Without an explicit URL the application engine is used, and its pooled
    connections are dropped first so they hold no locks during the upgrade.
    """

    cfg = alembic_config(database_url)
    if database_url is None:
        from storefront.db.session import engine as target

        target.dispose()
    else:
        target = create_engine(database_url, poolclass=NullPool)

    with target.connect() as connection:
        head = pending_head(cfg, connection)

    if head is None:
        logger.info("Schema is current, no migrations to apply")
        return

    logger.info("Upgrading schema to %s", head)
    try:
        command.upgrade(cfg, "head")
    except Exception:
        logger.exception("Schema upgrade to %s failed", head)
        raise


__all__ = ["alembic_config", "pending_head", "run_migrations"]
