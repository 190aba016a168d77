"""Validation router -- structured form validation with an audit trail."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ahpra_check.forms.input_validator import validate_healthcare_input
from ahpra_check.security.audit_log import ComplianceAuditLog

from web.backend.app.models.api import InputValidationRequest, ValidationResultResponse
from web.backend.app.routers.audit import get_audit_log

router = APIRouter(tags=["validation"])


@router.post(
    "/api/validate/input",
    response_model=ValidationResultResponse,
    summary="Validate a structured healthcare form",
)
def validate_input(
    request: InputValidationRequest,
    audit: ComplianceAuditLog = Depends(get_audit_log),
):
    """Run the form schema, compliance rules and security scan for one payload.

    Always answers 200; rejection is reported through ``is_valid`` and
    ``errors``.  Every call is recorded in the audit log.
    """
    result = validate_healthcare_input(request.data, request.type, request.check_compliance)
    audit.record(
        actor=request.actor,
        action="validate_input",
        content_type=request.type,
        result=result,
        content_id=request.content_id,
    )
    return ValidationResultResponse(**result.to_dict())
