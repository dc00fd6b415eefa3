import uuid
import logging
from typing import Any

from sqlalchemy.orm import Session

from taskee.models.audit_log import AuditLog

logger = logging.getLogger(__name__)


def log_action(
    db: Session,
    org_id: uuid.UUID,
    user_id: uuid.UUID,
    action: str,
    resource_type: str,
    resource_id: Any = None,
    details: dict | None = None,
):
    """Record an action and commit it together with any pending changes in the session."""
    entry = AuditLog(
        org_id=org_id,
        user_id=user_id,
        action=action,
        resource_type=resource_type,
        resource_id=str(resource_id) if resource_id is not None else None,
        details=details.copy() if isinstance(details, dict) else None,
    )
    db.add(entry)
    db.commit()
    logger.debug("audit %s %s/%s by %s", action, resource_type, resource_id, user_id)
    return entry
