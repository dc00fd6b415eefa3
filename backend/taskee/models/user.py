import uuid

from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Uuid
from sqlalchemy.sql import func

from taskee.database import Base


# ---------------------------------------------------
# Roles
# ---------------------------------------------------

ROLE_MANAGER = "MANAGER"
ROLE_STAFF = "MEDEWERKER"
ROLES = (ROLE_MANAGER, ROLE_STAFF)

USER_ROLE_ENUM = String(20)  # keep String to avoid enum migration issues


# ---------------------------------------------------
# Organization
# ---------------------------------------------------

class Organization(Base):
    __tablename__ = "orgs"

    org_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, nullable=False)
    name = Column(String(200), nullable=False)
    org_code = Column(String(50), nullable=False, unique=True, index=True)

    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


# ---------------------------------------------------
# User (employee)
# ---------------------------------------------------

class User(Base):
    __tablename__ = "users"

    user_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, nullable=False)

    org_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("orgs.org_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)

    role = Column(USER_ROLE_ENUM, nullable=False, default=ROLE_STAFF)

    name = Column(String(200), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
