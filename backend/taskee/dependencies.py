"""
Authentication and authorization dependencies.

Supports JWT auth (production) with demo-header fallback when AUTH_MODE=demo.
Every router receives an Actor: who is calling, in which org, with which role.
The core services trust this context and do no credential checks themselves.
"""

import uuid
from dataclasses import dataclass
from fastapi import HTTPException, Header, Depends
from sqlalchemy.orm import Session
from typing import Optional

from taskee import config
from taskee.database import get_db
from taskee.models.user import User, ROLE_MANAGER, ROLE_STAFF, ROLES
from taskee.services.auth import decode_access_token

# Demo placeholders, used only when AUTH_MODE=demo and no token is provided
DEMO_ORG_ID = "00000000-0000-0000-0000-000000000000"
DEMO_USER_ID = "00000000-0000-0000-0000-000000000000"
DEMO_ROLE = ROLE_STAFF


@dataclass(frozen=True)
class Actor:
    user_id: uuid.UUID
    org_id: uuid.UUID
    role: str

    @property
    def is_manager(self) -> bool:
        return self.role == ROLE_MANAGER


def _as_uuid(value) -> uuid.UUID:
    if value is None:
        raise ValueError("None is not a UUID")
    if isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


def get_current_user(
    authorization: Optional[str] = Header(default=None),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Extract user from Bearer token. Returns None if no token is sent."""
    if not authorization:
        return None

    token = authorization.removeprefix("Bearer ").strip()
    if not token:
        return None

    payload = decode_access_token(token)
    if not payload:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    sub = payload.get("sub")
    if not sub:
        raise HTTPException(status_code=401, detail="Invalid token payload")

    try:
        user_uuid = _as_uuid(sub)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid token subject (user id)")

    user = db.query(User).filter(User.user_id == user_uuid).first()
    if not user or user.is_active is False:
        raise HTTPException(status_code=401, detail="User not found or disabled")

    return user


def get_current_actor(
    user: Optional[User] = Depends(get_current_user),
    x_user_id: Optional[str] = Header(default=None),
    x_org_id: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
) -> Actor:
    """Actor from the JWT user, or from demo headers when AUTH_MODE=demo."""
    if user:
        return Actor(user_id=user.user_id, org_id=user.org_id, role=str(user.role))

    if config.AUTH_MODE == "demo":
        try:
            user_id = _as_uuid(x_user_id or DEMO_USER_ID)
            org_id = _as_uuid(x_org_id or DEMO_ORG_ID)
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid X-User-Id / X-Org-Id (must be UUID)")
        role = (x_user_role or DEMO_ROLE).upper()
        if role not in ROLES:
            raise HTTPException(status_code=400, detail=f"Invalid X-User-Role (one of {', '.join(ROLES)})")
        return Actor(user_id=user_id, org_id=org_id, role=role)

    raise HTTPException(status_code=401, detail="Not authenticated")


def require_manager(actor: Actor = Depends(get_current_actor)) -> Actor:
    """Require the MANAGER role. Returns the actor."""
    if not actor.is_manager:
        raise HTTPException(status_code=403, detail="Manager access required")
    return actor
