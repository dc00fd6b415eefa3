"""Availability router — recurring weekly windows per employee."""

import logging
import uuid
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from taskee.database import get_db
from taskee.dependencies import Actor, get_current_actor
from taskee.errors import Forbidden, InvalidWindow, NotFound
from taskee.models.availability import Availability
from taskee.models.user import User
from taskee.schemas.availability import AvailabilityReplace, AvailabilityResponse
from taskee.services.audit import log_action

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/availability", tags=["Availability"])


def _target_user(actor: Actor, user_id: Optional[uuid.UUID], action: str) -> uuid.UUID:
    target = user_id or actor.user_id
    if target != actor.user_id and not actor.is_manager:
        raise Forbidden(f"Only managers can {action} availability of other employees")
    return target


def _ensure_user(db: Session, org_id: uuid.UUID, user_id: uuid.UUID) -> None:
    exists = db.query(User.user_id).filter(User.user_id == user_id, User.org_id == org_id).first()
    if not exists:
        raise NotFound("User not found")


def _windows(db: Session, org_id: uuid.UUID, user_id: uuid.UUID) -> list[Availability]:
    return (
        db.query(Availability)
        .filter(Availability.org_id == org_id, Availability.user_id == user_id)
        .order_by(Availability.weekday, Availability.start_time)
        .all()
    )


@router.get("/", response_model=list[AvailabilityResponse])
def list_availability(
    user_id: Optional[uuid.UUID] = Query(None),
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    target = _target_user(actor, user_id, "view")
    _ensure_user(db, actor.org_id, target)
    return _windows(db, actor.org_id, target)


@router.put("/", response_model=list[AvailabilityResponse])
def replace_availability(
    body: AvailabilityReplace,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    target = _target_user(actor, body.user_id, "change")
    _ensure_user(db, actor.org_id, target)

    for entry in body.entries:
        if entry.start_time >= entry.end_time:
            raise InvalidWindow()

    db.query(Availability).filter(
        Availability.org_id == actor.org_id,
        Availability.user_id == target,
    ).delete(synchronize_session=False)
    for entry in body.entries:
        db.add(Availability(
            org_id=actor.org_id,
            user_id=target,
            weekday=entry.weekday,
            start_time=entry.start_time,
            end_time=entry.end_time,
            location=(entry.location or "").strip() or None,
        ))
    log_action(db, actor.org_id, actor.user_id, "replace", "availability", target,
               details={"windows": len(body.entries)})
    logger.info("Availability of %s replaced by %s (%d windows)", target, actor.user_id, len(body.entries))
    return _windows(db, actor.org_id, target)
