"""
Audit log repository functions.

Implements create and query functions for audit logs.
"""
from __future__ import annotations

from typing import Optional
from sqlalchemy.orm import Session

from location_admin.db import schemas, models


def create_audit_log(db: Session, audit_log: schemas.AuditLogCreate):
    data = audit_log.model_dump()
    metadata_payload = data.pop('metadata', None)
    db_audit_log = models.AuditLog(**data, metadata_json=metadata_payload)
    db.add(db_audit_log)
    db.commit()
    db.refresh(db_audit_log)
    return db_audit_log


def get_audit_logs(
    db: Session,
    target_type: Optional[str] = None,
    target_id: Optional[int] = None,
    action_type: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
):
    query = db.query(models.AuditLog)
    if target_type:
        query = query.filter(models.AuditLog.target_type == target_type)
    if target_id is not None:
        query = query.filter(models.AuditLog.target_id == target_id)
    if action_type:
        query = query.filter(models.AuditLog.action_type == action_type)
    return query.order_by(models.AuditLog.created_at.desc(), models.AuditLog.id.desc()).offset(skip).limit(limit).all()
