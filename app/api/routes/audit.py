from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.deps import get_db
from app.models.audit_log import AuditLog
from app.schemas.audit import AuditLogOut

router = APIRouter()


@router.get("/audit-logs", response_model=list[AuditLogOut])
def list_audit_logs(
    from_: datetime | None = Query(default=None, alias="from"),
    to: datetime | None = None,
    action_type: str | None = None,
    target_type: str | None = None,
    target_id: str | None = None,
    db: Session = Depends(get_db),
):
    q = select(AuditLog).order_by(AuditLog.created_at.desc())
    if from_:
        q = q.where(AuditLog.created_at >= from_)
    if to:
        q = q.where(AuditLog.created_at <= to)
    if action_type:
        q = q.where(AuditLog.action_type == action_type)
    if target_type:
        q = q.where(AuditLog.target_type == target_type)
    if target_id:
        q = q.where(AuditLog.target_id == target_id)

    logs = db.execute(q.limit(500)).scalars().all()
    return logs
