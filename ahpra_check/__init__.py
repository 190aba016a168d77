"""AHPRA/TGA compliance checking for Australian healthcare practice content.

Sanitizes free text, scans it for prohibited advertising language,
therapeutic claims, testimonials, boundary violations, missing disclaimers
and injection patterns, and validates structured practice fields.
"""

__version__ = "0.1.0"

from ahpra_check.fields.validators import (
    validate_abn,
    validate_ahpra_registration,
    validate_australian_phone,
    validate_healthcare_email,
)
from ahpra_check.forms.input_validator import validate_healthcare_input
from ahpra_check.forms.schemas import InputType
from ahpra_check.models.results import (
    ComplianceCheck,
    RealTimeReport,
    RiskLevel,
    SecurityRisk,
    ValidationResult,
)
from ahpra_check.realtime.checker import validate_content_in_real_time
from ahpra_check.rules.engine import check_compliance, compliance_score
from ahpra_check.sanitizer import sanitize_healthcare_text
from ahpra_check.security.scanner import validate_security

__all__ = [
    "ComplianceCheck",
    "InputType",
    "RealTimeReport",
    "RiskLevel",
    "SecurityRisk",
    "ValidationResult",
    "check_compliance",
    "compliance_score",
    "sanitize_healthcare_text",
    "validate_abn",
    "validate_ahpra_registration",
    "validate_australian_phone",
    "validate_content_in_real_time",
    "validate_healthcare_email",
    "validate_healthcare_input",
    "validate_security",
]
