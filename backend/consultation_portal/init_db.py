# backend/consultation_portal/init_db.py
"""
Create every table on the configured database.

Usage:
    python -m consultation_portal.init_db
"""

import logging

from .core.config import settings
from .database import Base, check_database_connection, engine
from .models import Booking, FacultyProfile, User  # noqa: F401  registers tables on Base

logger = logging.getLogger(__name__)


def init_db() -> None:
    check_database_connection()
    Base.metadata.create_all(bind=engine)
    logger.info("Tables ready: %s", ", ".join(sorted(Base.metadata.tables)))


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    logger.info(f"Initializing database at {settings.get_database_url()}")
    init_db()
