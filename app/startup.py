"""
startup.py — Database Startup Migrations (Idempotent)

Tables are defined in the ORM models and created via
Base.metadata.create_all(checkfirst=True). Alembic owns schema changes
after the baseline; this only guarantees a fresh database is usable.

Called by: main.py lifespan
Depends on: database.py (engine), models (Base)
"""

import logging
import os

from .database import engine
from .models import Base

log = logging.getLogger(__name__)


def run_startup_migrations() -> None:
    """Create missing tables. Safe to call on every app boot."""
    if os.environ.get("TESTING"):
        log.info("TESTING mode — skipping startup migrations")
        return

    Base.metadata.create_all(bind=engine, checkfirst=True)
    log.info("ORM schema sync complete (create_all checkfirst=True)")
