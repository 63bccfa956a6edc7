"""
Audit logging helpers and enums.

Centralized helper to persist normalized audit records, plus the listener
that records content lifecycle events as audit rows.
"""
from __future__ import annotations
from enum import Enum
from typing import Any, Optional, Dict
from sqlalchemy.orm import Session

from location_admin.db import schemas
from location_admin.db.repositories import audits as audit_repo
from location_admin.events import ContentEvent, ContentEventPayload


class AuditAction(str, Enum):
    CONTENT_CREATE = "content_create"
    CONTENT_UPDATE = "content_update"
    CONTENT_DELETE = "content_delete"


class AuditStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


_EVENT_ACTIONS = {
    ContentEvent.CREATED: AuditAction.CONTENT_CREATE,
    ContentEvent.UPDATED: AuditAction.CONTENT_UPDATE,
    ContentEvent.DELETED: AuditAction.CONTENT_DELETE,
}


def log(
    db: Session,
    *,
    action: AuditAction | str,
    status: AuditStatus | str = AuditStatus.SUCCESS,
    target_type: str,
    target_id: Optional[int] = None,
    metadata: Optional[Dict[str, Any]] = None,
):
    """Central audit logging helper."""
    # Persist pure string values, not Enum reprs
    action_value = action.value if isinstance(action, AuditAction) else str(action)
    status_value = status.value if isinstance(status, AuditStatus) else str(status)
    audit_log = schemas.AuditLogCreate(
        action_type=action_value,
        status=status_value,
        target_type=target_type,
        target_id=target_id,
        metadata=metadata or {},
    )
    return audit_repo.create_audit_log(db, audit_log=audit_log)


class AuditTrailListener:
    """Records created/updated/deleted content events in `audit_logs`."""

    def __init__(self, db: Session):
        self.db = db

    def register(self, dispatcher) -> None:
        for event in _EVENT_ACTIONS:
            dispatcher.listen(event, self._handler(event))

    def _handler(self, event: ContentEvent):
        def _record(payload: ContentEventPayload) -> None:
            item = payload.item
            log(
                self.db,
                action=_EVENT_ACTIONS[event],
                target_type=payload.screen,
                target_id=getattr(item, "id", None),
                metadata={"name": getattr(item, "name", None)},
            )
        return _record


__all__ = ["AuditAction", "AuditStatus", "AuditTrailListener", "log"]
