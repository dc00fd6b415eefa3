"""Tasks router — assignments with a due date, used for planning load."""

import uuid
from datetime import date, datetime, time, timedelta
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from taskee.database import get_db
from taskee.dependencies import Actor, get_current_actor
from taskee.errors import Forbidden, NotFound
from taskee.models.task import Task
from taskee.models.user import User
from taskee.schemas.tasks import TaskCreate, TaskUpdate, TaskResponse

router = APIRouter(prefix="/api/v1/tasks", tags=["Tasks"])


def _check_assignee(db: Session, org_id: uuid.UUID, assignee_id: Optional[uuid.UUID]) -> None:
    if assignee_id is None:
        return
    found = db.query(User.user_id).filter(User.user_id == assignee_id, User.org_id == org_id).first()
    if not found:
        raise NotFound("Assignee not found")


def _get_task(db: Session, task_id: uuid.UUID, org_id: uuid.UUID) -> Task:
    task = db.query(Task).filter(Task.id == task_id, Task.org_id == org_id).first()
    if not task:
        raise NotFound("Task not found")
    return task


@router.post("/", response_model=TaskResponse)
def create_task(
    body: TaskCreate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    _check_assignee(db, actor.org_id, body.assignee_id)
    task = Task(
        org_id=actor.org_id,
        title=body.title.strip(),
        description=body.description,
        assignee_id=body.assignee_id,
        due_date=body.due_date,
        created_by=actor.user_id,
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


@router.get("/", response_model=list[TaskResponse])
def list_tasks(
    assignee_id: Optional[uuid.UUID] = Query(None),
    due_on: Optional[date] = Query(None),
    status: Optional[str] = Query(None),
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    q = db.query(Task).filter(Task.org_id == actor.org_id)
    if assignee_id:
        q = q.filter(Task.assignee_id == assignee_id)
    if due_on:
        day_start = datetime.combine(due_on, time.min)
        q = q.filter(Task.due_date >= day_start, Task.due_date < day_start + timedelta(days=1))
    if status:
        q = q.filter(Task.status == status)
    return q.order_by(Task.due_date.is_(None), Task.due_date, Task.created_at).all()


@router.patch("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: uuid.UUID,
    body: TaskUpdate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    task = _get_task(db, task_id, actor.org_id)
    changes = body.model_dump(exclude_unset=True)
    if "assignee_id" in changes:
        _check_assignee(db, actor.org_id, changes["assignee_id"])
    for field, val in changes.items():
        setattr(task, field, val)
    db.commit()
    db.refresh(task)
    return task


@router.delete("/{task_id}")
def delete_task(
    task_id: uuid.UUID,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    task = _get_task(db, task_id, actor.org_id)
    if task.created_by != actor.user_id and not actor.is_manager:
        raise Forbidden("Only the creator or a manager can delete this task")
    db.delete(task)
    db.commit()
    return {"ok": True}
