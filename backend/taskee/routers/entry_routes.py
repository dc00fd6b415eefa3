"""
Routes shared by the time, trip and expense routers.

Owners list their own entries; managers list the whole organization and
decide on approval. Fixed paths are registered before /{entry_id}.
"""

import uuid
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from taskee.database import get_db
from taskee.dependencies import Actor, get_current_actor
from taskee.models.entries import ApprovalStatus
from taskee.schemas.entries import ApprovalDecision, EntrySummary
from taskee.services import approvals, entries


def register_entry_routes(router: APIRouter, model, response_model) -> None:

    @router.get("/me", response_model=list[response_model])
    def list_mine(
        start: Optional[date] = Query(None),
        end: Optional[date] = Query(None),
        status: Optional[ApprovalStatus] = Query(None),
        actor: Actor = Depends(get_current_actor),
        db: Session = Depends(get_db),
    ):
        return entries.list_own(db, model, actor, start, end, status)

    @router.get("/me/summary", response_model=EntrySummary)
    def summary_mine(
        start: Optional[date] = Query(None),
        end: Optional[date] = Query(None),
        actor: Actor = Depends(get_current_actor),
        db: Session = Depends(get_db),
    ):
        return entries.summarize(entries.list_own(db, model, actor, start, end), model)

    @router.get("/all", response_model=list[response_model])
    def list_all(
        start: Optional[date] = Query(None),
        end: Optional[date] = Query(None),
        status: Optional[ApprovalStatus] = Query(None),
        user_id: Optional[uuid.UUID] = Query(None),
        actor: Actor = Depends(get_current_actor),
        db: Session = Depends(get_db),
    ):
        return entries.list_org(db, model, actor, start, end, status, user_id)

    @router.post("/{entry_id}/approval", response_model=response_model)
    def set_approval(
        entry_id: uuid.UUID,
        body: ApprovalDecision,
        actor: Actor = Depends(get_current_actor),
        db: Session = Depends(get_db),
    ):
        return approvals.decide(db, model, entry_id, actor, body.approve)

    @router.post("/{entry_id}/approve", response_model=response_model)
    def approve(
        entry_id: uuid.UUID,
        actor: Actor = Depends(get_current_actor),
        db: Session = Depends(get_db),
    ):
        return approvals.decide(db, model, entry_id, actor, True)

    @router.post("/{entry_id}/reject", response_model=response_model)
    def reject(
        entry_id: uuid.UUID,
        actor: Actor = Depends(get_current_actor),
        db: Session = Depends(get_db),
    ):
        return approvals.decide(db, model, entry_id, actor, False)

    @router.delete("/{entry_id}")
    def delete(
        entry_id: uuid.UUID,
        actor: Actor = Depends(get_current_actor),
        db: Session = Depends(get_db),
    ):
        entries.delete_entry(db, model, entry_id, actor)
        return {"ok": True}
