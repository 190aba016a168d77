"""Compliance router -- sanitizer, AHPRA rule engine, real-time report and security scan."""

from __future__ import annotations

from fastapi import APIRouter

from ahpra_check.realtime.checker import validate_content_in_real_time
from ahpra_check.rules.engine import check_compliance, compliance_score
from ahpra_check.sanitizer import sanitize_healthcare_text
from ahpra_check.security.scanner import validate_security

from web.backend.app.models.api import (
    ComplianceCheckResponse,
    RealTimeIssueResponse,
    RealTimeReportResponse,
    SanitizeResponse,
    TextRequest,
    ValidationResultResponse,
)

router = APIRouter(tags=["compliance"])


@router.post("/api/sanitize", response_model=SanitizeResponse, summary="Sanitize free text")
async def sanitize(request: TextRequest):
    """Strip markup, collapse whitespace and redact sensitive numbers."""
    return SanitizeResponse(sanitized=sanitize_healthcare_text(request.content))


@router.post(
    "/api/compliance/check",
    response_model=ComplianceCheckResponse,
    summary="Run the AHPRA/TGA rule engine",
)
async def compliance_check(request: TextRequest):
    """Sanitize the content, then check every rule category.

    The returned ``compliance_score`` deducts 20 points per violation.
    """
    result = check_compliance(sanitize_healthcare_text(request.content))
    return ComplianceCheckResponse(**result.to_dict(), compliance_score=compliance_score(result))


@router.post(
    "/api/compliance/realtime",
    response_model=RealTimeReportResponse,
    summary="Live-editor compliance report",
)
async def compliance_realtime(request: TextRequest):
    """Combined compliance and security report, 25 points per error.

    Scans the raw editor text, not its sanitized form.
    """
    report = validate_content_in_real_time(request.content)
    return RealTimeReportResponse(
        is_compliant=report.is_compliant,
        issues=[RealTimeIssueResponse(type=i.type.value, message=i.message) for i in report.issues],
        score=report.score,
    )


@router.post(
    "/api/security/scan",
    response_model=ValidationResultResponse,
    summary="Scan content for injection patterns",
)
async def security_scan(request: TextRequest):
    """Scan the raw content; ``sanitized_value`` is always safe to store."""
    return ValidationResultResponse(**validate_security(request.content).to_dict())
