"""
Bootstrap script - creates the first admin user.

Run once after the database is reachable:
    python scripts/seed_admin.py

Reads FIRST_ADMIN_NAME, FIRST_ADMIN_EMAIL and FIRST_ADMIN_PASSWORD from the
environment or .env. Promotes the account if it already exists.
"""

import logging

from accounts.core.config import settings
from accounts.core.database import SessionLocal, init_db
from accounts.services import store

logger = logging.getLogger("seed_admin")


def seed() -> None:
    if not settings.FIRST_ADMIN_EMAIL or not settings.FIRST_ADMIN_PASSWORD:
        logger.warning("FIRST_ADMIN_EMAIL or FIRST_ADMIN_PASSWORD not set - nothing to do")
        return

    init_db()
    db = SessionLocal()
    try:
        user = store.find_by_email(db, settings.FIRST_ADMIN_EMAIL)
        if user is None:
            user = store.create(
                db,
                settings.FIRST_ADMIN_NAME,
                settings.FIRST_ADMIN_EMAIL,
                settings.FIRST_ADMIN_PASSWORD,
            )
        elif user.is_admin:
            logger.info(f"Admin '{user.email}' already exists - skipping")
            return
        user.is_admin = True
        store.save(db, user)
        logger.info(f"Admin '{user.email}' ready")
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    seed()
