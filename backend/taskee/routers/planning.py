"""Planning router — who can take a requested time slot."""

import logging
from datetime import datetime, time, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func as sa_func
from sqlalchemy.orm import Session

from taskee.database import get_db
from taskee.dependencies import Actor, require_manager
from taskee.models.availability import Availability
from taskee.models.task import Task
from taskee.models.user import User, ROLE_STAFF
from taskee.schemas.planning import PlanningRequestBody, PlanningSuggestionResponse, SuggestedUser
from taskee.services.planning import PlanningRequest, suggest, weekday_index

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/planning", tags=["Planning"])


@router.post("/suggest", response_model=list[PlanningSuggestionResponse])
def suggest_employees(
    body: PlanningRequestBody,
    limit: Optional[int] = Query(None, ge=1, le=100),
    actor: Actor = Depends(require_manager),
    db: Session = Depends(get_db),
):
    request = PlanningRequest(
        date=body.date,
        start_time=body.start_time,
        end_time=body.end_time,
        preferred_user_ids=frozenset(body.preferred_user_ids),
        location=body.location,
    )

    employees = db.query(User).filter(
        User.org_id == actor.org_id,
        User.role == ROLE_STAFF,
        User.is_active == True,
    ).all()
    employee_ids = [e.user_id for e in employees]

    windows = []
    counts = {}
    if employee_ids:
        windows = db.query(Availability).filter(
            Availability.org_id == actor.org_id,
            Availability.weekday == weekday_index(body.date),
            Availability.user_id.in_(employee_ids),
        ).all()

        day_start = datetime.combine(body.date, time.min)
        day_end = day_start + timedelta(days=1)
        rows = (
            db.query(Task.assignee_id, sa_func.count(Task.id))
            .filter(
                Task.org_id == actor.org_id,
                Task.assignee_id.in_(employee_ids),
                Task.due_date >= day_start,
                Task.due_date < day_end,
            )
            .group_by(Task.assignee_id)
            .all()
        )
        counts = {assignee_id: count for assignee_id, count in rows}

    suggestions = suggest(request, employees, windows, counts)
    logger.info(
        "Planning %s %s-%s: %d candidates for org %s",
        body.date, body.start_time, body.end_time, len(suggestions), actor.org_id,
    )
    if limit:
        suggestions = suggestions[:limit]

    return [
        PlanningSuggestionResponse(
            user=SuggestedUser.model_validate(s.employee),
            available_from=s.available_from,
            available_until=s.available_until,
            location=s.location,
            assigned_tasks_that_day=s.assigned_tasks_that_day,
            location_matches=s.location_matches,
        )
        for s in suggestions
    ]
