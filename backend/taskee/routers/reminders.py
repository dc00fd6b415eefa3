"""Reminders router — personal reminders, scoped to the calling user."""

import uuid
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from taskee.database import get_db
from taskee.dependencies import Actor, get_current_actor
from taskee.errors import NotFound
from taskee.models.reminder import Reminder
from taskee.schemas.reminders import ReminderCreate, ReminderUpdate, ReminderResponse

router = APIRouter(prefix="/api/v1/reminders", tags=["Reminders"])


def _own_reminder(db: Session, reminder_id: uuid.UUID, actor: Actor) -> Reminder:
    # someone else's reminder looks the same as a missing one
    reminder = db.query(Reminder).filter(
        Reminder.id == reminder_id,
        Reminder.user_id == actor.user_id,
        Reminder.org_id == actor.org_id,
    ).first()
    if not reminder:
        raise NotFound("Reminder not found")
    return reminder


@router.get("/", response_model=list[ReminderResponse])
def list_reminders(
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return (
        db.query(Reminder)
        .filter(Reminder.user_id == actor.user_id, Reminder.org_id == actor.org_id)
        .order_by(Reminder.remind_at)
        .all()
    )


@router.post("/", response_model=ReminderResponse)
def create_reminder(
    body: ReminderCreate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    reminder = Reminder(
        org_id=actor.org_id,
        user_id=actor.user_id,
        text=body.text,
        remind_at=body.remind_at,
        sent=body.sent,
    )
    db.add(reminder)
    db.commit()
    db.refresh(reminder)
    return reminder


@router.patch("/{reminder_id}", response_model=ReminderResponse)
def update_reminder(
    reminder_id: uuid.UUID,
    body: ReminderUpdate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    reminder = _own_reminder(db, reminder_id, actor)
    for field, val in body.model_dump(exclude_unset=True).items():
        setattr(reminder, field, val)
    db.commit()
    db.refresh(reminder)
    return reminder


@router.delete("/{reminder_id}")
def delete_reminder(
    reminder_id: uuid.UUID,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    reminder = _own_reminder(db, reminder_id, actor)
    db.delete(reminder)
    db.commit()
    return {"ok": True}
