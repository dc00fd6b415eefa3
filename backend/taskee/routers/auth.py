"""
Authentication router — login and current user.
"""

from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from taskee.config import JWT_EXPIRY_HOURS
from taskee.database import get_db
from taskee.dependencies import get_current_user
from taskee.models.user import Organization, User
from taskee.services.auth import create_access_token, verify_password

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


# ---------- helpers ----------

def _create_token(user: User) -> str:
    """JWT 'sub' is the UUID user_id as a string."""
    return create_access_token(
        data={"sub": str(user.user_id), "org": str(user.org_id), "role": str(user.role)},
        expires_delta=timedelta(hours=JWT_EXPIRY_HOURS),
    )


def _user_out(user: User) -> "UserOut":
    return UserOut(
        user_id=str(user.user_id),
        email=user.email,
        full_name=user.name,
        role=str(user.role),
        org_id=str(user.org_id),
    )


# ---------- schemas ----------

class LoginRequest(BaseModel):
    email: str
    password: str
    org_code: str | None = None


class UserOut(BaseModel):
    user_id: str
    email: str
    full_name: str | None
    role: str
    org_id: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut


# ---------- endpoints ----------

@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, db: Session = Depends(get_db)):
    email = body.email.strip().lower()
    user = db.query(User).filter(User.email == email).first()

    if not user or not verify_password(body.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    if user.is_active is False:
        raise HTTPException(status_code=403, detail="Account disabled")

    # If org_code provided, verify the user belongs to that org
    if body.org_code:
        org = db.query(Organization).filter(Organization.org_code == body.org_code.strip()).first()
        if not org:
            raise HTTPException(status_code=404, detail="Company code not found")
        if user.org_id != org.org_id:
            raise HTTPException(status_code=403, detail="You do not belong to this organization")

    return LoginResponse(access_token=_create_token(user), user=_user_out(user))


@router.get("/me", response_model=UserOut)
def me(user: Optional[User] = Depends(get_current_user)):
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return _user_out(user)
