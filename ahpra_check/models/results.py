"""Data models for validation and compliance results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class SecurityRisk(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskLevel(Enum):
    """Escalation level derived from which compliance categories fired."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class IssueType(Enum):
    ERROR = "error"  # Counts against the real-time score
    WARNING = "warning"


@dataclass
class ValidationResult:
    """Outcome of a single validation operation."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    sanitized_value: Any = None
    compliance_score: Optional[int] = None  # 0-100, content validations only
    security_risk: Optional[SecurityRisk] = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "sanitized_value": self.sanitized_value,
            "compliance_score": self.compliance_score,
            "security_risk": self.security_risk.value if self.security_risk else None,
            "details": dict(self.details),
        }


@dataclass
class ComplianceCheck:
    """Outcome of the AHPRA/TGA rule engine.

    One violation and one suggestion are recorded for every category that
    fired, so ``len(violations)`` equals the number of true category flags.
    ``has_misleading_claims`` is derived from the prohibited and therapeutic
    flags and is not a category of its own.
    """

    has_prohibited_terms: bool = False
    has_therapeutic_claims: bool = False
    has_patient_testimonials: bool = False
    has_boundary_violations: bool = False
    has_misleading_claims: bool = False
    missing_disclaimers: bool = False
    risk_level: RiskLevel = RiskLevel.LOW
    violations: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    @property
    def is_publishable(self) -> bool:
        return self.risk_level != RiskLevel.CRITICAL

    def to_dict(self) -> dict[str, Any]:
        return {
            "has_prohibited_terms": self.has_prohibited_terms,
            "has_therapeutic_claims": self.has_therapeutic_claims,
            "has_patient_testimonials": self.has_patient_testimonials,
            "has_boundary_violations": self.has_boundary_violations,
            "has_misleading_claims": self.has_misleading_claims,
            "missing_disclaimers": self.missing_disclaimers,
            "risk_level": self.risk_level.value,
            "violations": list(self.violations),
            "suggestions": list(self.suggestions),
        }


@dataclass
class RealTimeIssue:
    """A single issue surfaced to a live editor."""

    type: IssueType
    message: str


@dataclass
class RealTimeReport:
    """Result of the combined compliance + security check for live editing."""

    is_compliant: bool = True
    issues: list[RealTimeIssue] = field(default_factory=list)
    score: int = 100

    @property
    def errors(self) -> list[RealTimeIssue]:
        return [i for i in self.issues if i.type == IssueType.ERROR]

    @property
    def warnings(self) -> list[RealTimeIssue]:
        return [i for i in self.issues if i.type == IssueType.WARNING]

    def summary(self) -> str:
        status = "COMPLIANT" if self.is_compliant else "NON-COMPLIANT"
        return f"[{status}] score {self.score}, {len(self.errors)} error(s), {len(self.warnings)} warning(s)"
