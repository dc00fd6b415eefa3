"""
Seed script for Taskee — creates a demo organization with a manager and two staff members.

Run: python -m taskee.seed  (from the backend directory)
"""
import logging
import sys
from datetime import time

from taskee.database import Base, SessionLocal, engine
from taskee.models.availability import Availability
from taskee.models.user import Organization, User, ROLE_MANAGER, ROLE_STAFF
from taskee.services.auth import hash_password

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEFAULT_ORG_NAME = "Taskee Zorgteam"
DEFAULT_ORG_CODE = "taskee"
MANAGER_EMAIL = "manager@taskee.local"
DEFAULT_PASSWORD = "Welkom123!"

STAFF = [
    # email, name, weekday (0 = Sunday), start, end, location
    ("anna@taskee.local", "Anna", 1, time(9, 0), time(17, 0), "Clinic North"),
    ("bram@taskee.local", "Bram", 1, time(10, 0), time(12, 0), "Clinic South"),
]


def _ensure_user(db, org, email, name, role):
    user = db.query(User).filter(User.email == email).first()
    if user:
        logger.info("User %s already exists, skipping.", email)
        return user, False
    user = User(
        org_id=org.org_id,
        email=email,
        name=name,
        role=role,
        password_hash=hash_password(DEFAULT_PASSWORD),
    )
    db.add(user)
    db.flush()
    logger.info("Created %s %s (%s)", role.lower(), name, email)
    return user, True


def seed_demo_org(db):
    org = db.query(Organization).filter(Organization.org_code == DEFAULT_ORG_CODE).first()
    if not org:
        org = Organization(name=DEFAULT_ORG_NAME, org_code=DEFAULT_ORG_CODE)
        db.add(org)
        db.flush()
        logger.info("Created organization: %s (%s)", DEFAULT_ORG_NAME, DEFAULT_ORG_CODE)
    else:
        logger.info("Organization already exists, skipping.")

    _ensure_user(db, org, MANAGER_EMAIL, "Manager", ROLE_MANAGER)
    for email, name, weekday, start, end, location in STAFF:
        staff, created = _ensure_user(db, org, email, name, ROLE_STAFF)
        if created:
            db.add(Availability(
                org_id=org.org_id,
                user_id=staff.user_id,
                weekday=weekday,
                start_time=start,
                end_time=end,
                location=location,
            ))
    db.commit()
    logger.info("  Password for all demo users: %s", DEFAULT_PASSWORD)


def run_seed():
    Base.metadata.create_all(bind=engine, checkfirst=True)
    db = SessionLocal()
    try:
        seed_demo_org(db)
        logger.info("Seed complete.")
    except Exception:
        logger.exception("Seed failed")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    run_seed()
