# coursehub/seed.py
"""
Create the initial admin account.

    SEED_ADMIN_EMAIL=root@example.com SEED_ADMIN_PASSWORD=... python -m coursehub.seed
"""
from sqlalchemy.orm import Session
import logging
import os
import sys

from .database.base import Base
from .database.models.admin import Admin
from .database.models.course import Course  # noqa: F401 (mapper registration)
from .database.models.enrollment import Enrollment  # noqa: F401
from .database.models.user import UserRole, UserType
from .database.session import SessionLocal, engine
from .logging_config import setup_logging
from .services.auth.credential_service import CredentialService

logger = logging.getLogger(__name__)

def seed_admin(
    db: Session,
    email: str,
    password: str,
    first_name: str = "Super",
    last_name: str = "Admin",
    role: UserRole = UserRole.SUPERADMIN
) -> Admin:
    """Return the existing admin for `email`, or create it"""
    existing = CredentialService.find_by_email(db, UserType.ADMIN, email)
    if existing:
        logger.info(f"[Seed] Admin {existing.email} already exists")
        return existing

    return CredentialService.create(
        db,
        UserType.ADMIN,
        first_name=first_name,
        last_name=last_name,
        email=email,
        password=password,
        role=UserRole(role).value
    )

def main() -> int:
    setup_logging()
    email = os.environ.get("SEED_ADMIN_EMAIL")
    password = os.environ.get("SEED_ADMIN_PASSWORD")
    if not email or not password:
        logger.error("[Seed] SEED_ADMIN_EMAIL and SEED_ADMIN_PASSWORD must be set")
        return 1

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_admin(db, email, password)
    finally:
        db.close()
    return 0

if __name__ == "__main__":
    sys.exit(main())
