"""Comprehensive validator for structured healthcare input.

Runs the form schema for the requested input type, the AHPRA/TGA rule
engine for patient content, and the security scanner over every string
field, merging everything into one ``ValidationResult``.  Nothing here
raises for invalid input; unexpected failures become a single
``Validation error: ...`` entry.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable

from pydantic import ValidationError

from ahpra_check.exceptions import HealthcareValidationError
from ahpra_check.forms.schemas import InputType, get_form
from ahpra_check.models.results import RiskLevel, SecurityRisk, ValidationResult
from ahpra_check.rules.engine import check_compliance, compliance_score
from ahpra_check.sanitizer import sanitize_healthcare_text
from ahpra_check.security.scanner import validate_security

logger = logging.getLogger(__name__)

CRITICAL_CONTENT_ERROR = "CRITICAL: Content violates AHPRA guidelines and cannot be published"

_FIELD_PREFIX = re.compile(r"^([^:]+):")


def format_validation_errors(error: ValidationError) -> list[str]:
    """Render pydantic errors as ``"<field.path>: <message>"`` strings."""
    messages: list[str] = []
    for err in error.errors():
        path = ".".join(str(part) for part in err["loc"])
        if err["type"] == "value_error" and "error" in err.get("ctx", {}):
            message = str(err["ctx"]["error"])
        else:
            message = err["msg"]
        messages.append(f"{path}: {message}" if path else message)
    return messages


def _risk_for(errors: list[str], warnings: list[str]) -> SecurityRisk:
    if errors:
        return SecurityRisk.HIGH
    if warnings:
        return SecurityRisk.MEDIUM
    return SecurityRisk.LOW


def validate_healthcare_input(
    data: Any,
    input_type: InputType | str,
    check_compliance_rules: bool = True,
) -> ValidationResult:
    """Validate a structured healthcare payload.

    Args:
        data: The submitted payload, keyed by camelCase field names.
        input_type: Which form schema to apply.
        check_compliance_rules: Run the AHPRA/TGA rule engine on the
            ``content`` field of patient content.

    Returns:
        ValidationResult whose ``sanitized_value`` is the transformed payload
        when the schema passed, otherwise the raw input.
    """
    errors: list[str] = []
    warnings: list[str] = []
    sanitized_value: Any = data
    score = 100

    try:
        kind = InputType(input_type) if isinstance(input_type, str) else input_type
        form = get_form(kind)

        try:
            parsed = form.model_validate(data)
        except ValidationError as e:
            errors.extend(format_validation_errors(e))
        else:
            sanitized_value = parsed.model_dump(by_alias=True, exclude_unset=True)

        content = sanitized_value.get("content") if isinstance(sanitized_value, dict) else None
        if check_compliance_rules and kind == InputType.PATIENT_CONTENT and isinstance(content, str) and content:
            check = check_compliance(sanitize_healthcare_text(content))
            if check.violations:
                errors.extend(check.violations)
                score = compliance_score(check)
            warnings.extend(check.suggestions)
            if check.risk_level == RiskLevel.CRITICAL:
                logger.info("[Input] critical compliance risk, blocking publication")
                errors.append(CRITICAL_CONTENT_ERROR)

        if isinstance(sanitized_value, dict):
            for key, value in sanitized_value.items():
                if isinstance(value, str) and value:
                    security = validate_security(value)
                    if not security.is_valid:
                        errors.append(f"{key}: {', '.join(security.errors)}")
                    warnings.extend(f"{key}: {w}" for w in security.warnings)

    except Exception as e:
        logger.warning(f"[Input] validation of {input_type!r} failed: {e}")
        errors.append(f"Validation error: {e}")
        return ValidationResult(
            errors=errors,
            warnings=warnings,
            sanitized_value=sanitized_value,
            compliance_score=score,
            security_risk=SecurityRisk.HIGH,
        )

    return ValidationResult(
        errors=errors,
        warnings=warnings,
        sanitized_value=sanitized_value,
        compliance_score=score,
        security_risk=_risk_for(errors, warnings),
    )


def field_of(message: str) -> str:
    """Return the top-level field a ``"field.sub: message"`` string refers to."""
    match = _FIELD_PREFIX.match(message)
    if not match:
        return "general"
    return match.group(1).split(".")[0]


def group_messages_by_field(messages: list[str]) -> dict[str, list[str]]:
    """Group ``"field: message"`` strings by field, stripping the prefix.

    Messages without a prefix are collected under ``general``.
    """
    grouped: dict[str, list[str]] = {}
    for message in messages:
        match = _FIELD_PREFIX.match(message)
        name = match.group(1) if match else "general"
        text = message[match.end():].strip() if match else message
        grouped.setdefault(name, []).append(text)
    return grouped


def validate_field(input_type: InputType | str, field_name: str, value: Any) -> ValidationResult:
    """Validate one field of a form in isolation.

    Other fields of the form are reported missing by the schema, so only
    messages that refer to *field_name* are kept.  Patient ``content`` is
    also run through the rule engine.
    """
    result = validate_healthcare_input({field_name: value}, input_type, check_compliance_rules=False)
    errors = [e for e in result.errors if field_of(e) == field_name]
    warnings = [w for w in result.warnings if field_of(w) == field_name]

    kind = InputType(input_type) if isinstance(input_type, str) else input_type
    if kind == InputType.PATIENT_CONTENT and field_name == "content" and isinstance(value, str):
        check = check_compliance(sanitize_healthcare_text(value))
        errors.extend(f"content: {v}" for v in check.violations)
        warnings.extend(f"content: {s}" for s in check.suggestions)

    return ValidationResult(
        errors=errors,
        warnings=warnings,
        sanitized_value=value,
        security_risk=_risk_for(errors, warnings),
    )


def create_validator(input_type: InputType | str) -> Callable[[Any], Any]:
    """Return a callable that yields the sanitized payload or raises.

    Raises (from the returned callable):
        HealthcareValidationError: when the payload fails validation.
    """

    def validator(value: Any) -> Any:
        result = validate_healthcare_input(value, input_type, True)
        if not result.is_valid:
            raise HealthcareValidationError(result)
        return result.sanitized_value

    return validator
