"""Listing, summarizing and deleting approvable entries (time, trips, expenses)."""

import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from taskee.dependencies import Actor
from taskee.errors import NotFound
from taskee.models.entries import ApprovalStatus
from taskee.services.approvals import ensure_manager
from taskee.services.audit import log_action

logger = logging.getLogger(__name__)

MAX_LIST_ROWS = 500


def filter_entries(q, model, start: Optional[date] = None, end: Optional[date] = None,
                   status: Optional[ApprovalStatus] = None):
    if start:
        q = q.filter(model.date >= start)
    if end:
        q = q.filter(model.date <= end)
    if status:
        q = q.filter(model.status == ApprovalStatus(status).value)
    return q


def list_own(db: Session, model, actor: Actor, start=None, end=None, status=None) -> list:
    q = db.query(model).filter(model.org_id == actor.org_id, model.user_id == actor.user_id)
    q = filter_entries(q, model, start, end, status)
    return q.order_by(model.date.desc(), model.created_at.desc()).all()


def list_org(db: Session, model, actor: Actor, start=None, end=None, status=None,
             user_id: Optional[uuid.UUID] = None) -> list:
    ensure_manager(actor, "view all entries")
    q = db.query(model).filter(model.org_id == actor.org_id)
    if user_id:
        q = q.filter(model.user_id == user_id)
    q = filter_entries(q, model, start, end, status)
    return q.order_by(model.date.desc(), model.created_at.desc()).limit(MAX_LIST_ROWS).all()


def summarize(entries: list, model) -> dict:
    """Totals per approval status, summed at read time."""
    totals = {s.value: Decimal(0) for s in ApprovalStatus}
    for e in entries:
        totals[e.status] += Decimal(str(getattr(e, model.quantity_field)))
    return {
        "quantity": model.quantity_field,
        "total": float(sum(totals.values())),
        "by_status": {k: float(v) for k, v in totals.items()},
        "entries": len(entries),
    }


def delete_entry(db: Session, model, entry_id: uuid.UUID, actor: Actor) -> None:
    ensure_manager(actor, "delete entries")
    entry = db.query(model).filter(model.id == entry_id, model.org_id == actor.org_id).first()
    if not entry:
        raise NotFound("Entry not found")
    db.delete(entry)
    log_action(db, actor.org_id, actor.user_id, "delete", model.resource_type, entry_id,
               details={"owner": str(entry.user_id), "status": entry.status})
    logger.info("%s %s deleted by %s", model.resource_type, entry_id, actor.user_id)
