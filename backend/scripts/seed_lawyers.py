"""
Seed the lawyer directory and, optionally, an admin account.

    python backend/scripts/seed_lawyers.py
    python backend/scripts/seed_lawyers.py --admin-email admin@example.in --admin-password 'S3cure-pass'
    python backend/scripts/seed_lawyers.py --refresh
"""

import os
import sys
import argparse
import logging
from datetime import datetime
from dotenv import load_dotenv

load_dotenv()

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from vidhisahayak.core.constants import VERIFICATION_VERIFIED  # noqa: E402
from vidhisahayak.core.database import SessionLocal, create_tables  # noqa: E402
from vidhisahayak.models import LawyerProfile, User  # noqa: E402
from vidhisahayak.services.lawyer_service import LAWYERS  # noqa: E402
from vidhisahayak.api.v1.auth import get_password_hash  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger("seed")


def seed_lawyers(db, refresh: bool) -> int:
    """Insert the sample directory as verified profiles. Existing names are skipped unless refreshing."""
    if refresh:
        deleted = db.query(LawyerProfile).filter(LawyerProfile.user_id.is_(None)).delete()
        logger.info(f"Removed {deleted} unlinked lawyer profiles")

    added = 0
    now = datetime.utcnow().isoformat()
    for lawyer in LAWYERS:
        if db.query(LawyerProfile).filter(LawyerProfile.full_name == lawyer.name).first():
            logger.info(f"Skipping {lawyer.name}: already present")
            continue
        db.add(LawyerProfile(
            full_name=lawyer.name,
            practices=list(lawyer.practices),
            experience_years=lawyer.experience_years,
            office_location=lawyer.location,
            fee=lawyer.fee,
            verification_status=VERIFICATION_VERIFIED,
            created_at=now,
            updated_at=now,
        ))
        added += 1

    db.commit()
    return added


def seed_admin(db, email: str, password: str) -> None:
    email = email.lower()
    if db.query(User).filter(User.email == email).first():
        logger.info(f"Admin {email} already exists")
        return
    now = datetime.utcnow().isoformat()
    db.add(User(
        email=email,
        full_name="Administrator",
        hashed_password=get_password_hash(password),
        role="admin",
        is_active=True,
        created_at=now,
        updated_at=now,
    ))
    db.commit()
    logger.info(f"Created admin {email}")


def main(refresh: bool, admin_email: str = None, admin_password: str = None):
    if SessionLocal is None:
        logger.error("DATABASE_URL is not set; nothing to seed")
        sys.exit(1)

    create_tables()
    db = SessionLocal()
    try:
        added = seed_lawyers(db, refresh)
        logger.info(f"Added {added} lawyer profiles")
        if admin_email and admin_password:
            seed_admin(db, admin_email, admin_password)
    except Exception as e:
        db.rollback()
        logger.error(f"Seeding failed: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the VidhiSahayak lawyer directory.")
    parser.add_argument("--refresh", action="store_true", help="Remove unlinked profiles before seeding.")
    parser.add_argument("--admin-email", help="Also create an admin account with this email.")
    parser.add_argument("--admin-password", help="Password for the admin account.")
    args = parser.parse_args()
    main(args.refresh, args.admin_email, args.admin_password)
