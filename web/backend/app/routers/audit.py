"""Audit router -- read the compliance audit log.

Prefix: ``/api/audit``
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from ahpra_check.security.audit_log import ComplianceAuditLog

from web.backend.app.models.api import AuditEntryResponse

router = APIRouter(prefix="/api/audit", tags=["audit"])

# Shared log instance
_audit: Optional[ComplianceAuditLog] = None


def get_audit_log() -> ComplianceAuditLog:
    """Return the singleton ComplianceAuditLog instance."""
    global _audit
    if _audit is None:
        _audit = ComplianceAuditLog()
    return _audit


@router.get("/events", response_model=list[AuditEntryResponse])
def list_events(
    actor: Optional[str] = Query(None),
    content_type: Optional[str] = Query(None),
    valid: Optional[bool] = Query(None),
    limit: int = Query(200, ge=1, le=10000),
    audit: ComplianceAuditLog = Depends(get_audit_log),
):
    """Return audit entries, newest first."""
    entries = audit.get_events(actor=actor, content_type=content_type, valid=valid, limit=limit)
    return [AuditEntryResponse(**asdict(e)) for e in entries]


@router.get("/export", response_class=PlainTextResponse)
def export_events(
    fmt: str = Query("json", pattern="^(json|csv)$"),
    audit: ComplianceAuditLog = Depends(get_audit_log),
):
    return audit.export_events(fmt)
