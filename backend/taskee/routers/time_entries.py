"""Time registration router."""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from taskee.database import get_db
from taskee.dependencies import Actor, get_current_actor
from taskee.models.entries import TimeEntry
from taskee.routers.entry_routes import register_entry_routes
from taskee.schemas.entries import TimeEntryCreate, TimeEntryResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/time", tags=["Time"])


@router.post("/", response_model=TimeEntryResponse)
def create_entry(
    body: TimeEntryCreate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    duration = round((body.end_time - body.start_time).total_seconds() / 60)
    entry = TimeEntry(
        org_id=actor.org_id,
        user_id=actor.user_id,
        date=body.date,
        start_time=body.start_time,
        end_time=body.end_time,
        duration_minutes=duration,
        project_id=(body.project_id or "").strip() or None,
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    logger.info("Time entry %s (%d min) created by %s", entry.id, duration, actor.user_id)
    return entry


register_entry_routes(router, TimeEntry, TimeEntryResponse)
