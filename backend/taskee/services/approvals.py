"""
Approval of time entries, trips and expenses.

Entries start as pending. A manager of the same organization moves them to
approved or rejected, and may reverse that decision later through the same
call. Repeating a decision is a no-op. Anyone else gets Forbidden, before the
entry is even looked up; entries of other organizations look like they don't
exist (NotFound).
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from taskee.dependencies import Actor
from taskee.errors import Forbidden, NotFound
from taskee.models.entries import ApprovalStatus
from taskee.services.audit import log_action

logger = logging.getLogger(__name__)


def ensure_manager(actor: Actor, action: str = "approve entries") -> None:
    if not actor.is_manager:
        raise Forbidden(f"Only managers can {action}")


def target_status(approve: bool) -> ApprovalStatus:
    return ApprovalStatus.approved if approve else ApprovalStatus.rejected


def apply_decision(entry, actor: Actor, approve: bool, now: Optional[datetime] = None) -> bool:
    """Set the entry's status for this decision. Returns False when nothing changed."""
    ensure_manager(actor)
    if entry is None or entry.org_id != actor.org_id:
        raise NotFound("Entry not found")

    new_status = target_status(approve).value
    if entry.status == new_status:
        return False

    now = now or datetime.now(timezone.utc)
    entry.status = new_status
    entry.decided_by = actor.user_id
    entry.decided_at = now
    entry.updated_at = now
    return True


def decide(db: Session, model, entry_id: uuid.UUID, actor: Actor, approve: bool):
    """Load, decide and persist a single entry of the given model."""
    ensure_manager(actor)
    entry = db.query(model).filter(model.id == entry_id, model.org_id == actor.org_id).first()

    previous = entry.status if entry is not None else None
    changed = apply_decision(entry, actor, approve)
    if not changed:
        return entry

    logger.info(
        "%s %s: %s -> %s by %s", model.resource_type, entry.id, previous, entry.status, actor.user_id,
    )
    log_action(
        db, actor.org_id, actor.user_id,
        "approve" if approve else "reject",
        model.resource_type, entry.id,
        details={"from": previous, "to": entry.status},
    )
    db.refresh(entry)
    return entry
