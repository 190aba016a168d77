"""Pydantic models for API request/response serialization.

These models mirror the ahpra_check dataclasses and provide proper JSON
serialization for the FastAPI endpoints.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class TextRequest(BaseModel):
    """Free text to sanitize or check."""

    content: str = ""


class FieldRequest(BaseModel):
    """A single structured field value."""

    value: str = ""


class InputValidationRequest(BaseModel):
    type: Literal["ahpra_registration", "practice_details", "patient_content", "team_member", "appointment_info"]
    data: Any = None
    check_compliance: bool = True
    actor: str = "anonymous"
    content_id: str = ""


class AnonymizeRequest(BaseModel):
    record: dict[str, Any] = Field(default_factory=dict)
    level: Literal["basic", "enhanced", "maximum"] = "enhanced"


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class SanitizeResponse(BaseModel):
    sanitized: str


class ValidationResultResponse(BaseModel):
    """Mirrors ahpra_check.models.results.ValidationResult."""

    is_valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    sanitized_value: Any = None
    compliance_score: Optional[int] = None
    security_risk: Optional[str] = None
    details: dict[str, Any] = Field(default_factory=dict)


class ComplianceCheckResponse(BaseModel):
    """Mirrors ahpra_check.models.results.ComplianceCheck plus its score."""

    has_prohibited_terms: bool = False
    has_therapeutic_claims: bool = False
    has_patient_testimonials: bool = False
    has_boundary_violations: bool = False
    has_misleading_claims: bool = False
    missing_disclaimers: bool = False
    risk_level: str = "low"
    violations: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    compliance_score: int = 100


class RealTimeIssueResponse(BaseModel):
    type: str
    message: str


class RealTimeReportResponse(BaseModel):
    """Mirrors ahpra_check.models.results.RealTimeReport."""

    is_compliant: bool
    issues: list[RealTimeIssueResponse] = Field(default_factory=list)
    score: int


class AbnResponse(BaseModel):
    abn: str
    is_valid: bool


class AuditEntryResponse(BaseModel):
    """Mirrors ahpra_check.security.audit_log.AuditEntry."""

    id: str
    timestamp: str
    actor: str
    action: str
    content_type: str
    content_id: str = ""
    is_valid: bool = True
    compliance_score: Optional[int] = None
    security_risk: str = ""
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
