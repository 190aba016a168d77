"""Validators for discrete Australian healthcare fields.

ABN checksum, healthcare email, Australian phone numbers and AHPRA
registration numbers.  Each returns normalized values only when the input
is valid, except email which always returns the trimmed lower-cased address.
"""

from __future__ import annotations

import re
from typing import Optional

from ahpra_check.models.results import SecurityRisk, ValidationResult

ABN_WEIGHTS = (10, 1, 3, 5, 7, 9, 11, 13, 15, 17, 19)

DISPOSABLE_EMAIL_DOMAINS = frozenset({"10minutemail.com", "tempmail.org", "guerrillamail.com"})
PERSONAL_EMAIL_DOMAINS = frozenset({"gmail.com", "yahoo.com", "hotmail.com", "outlook.com"})

_ABN_RE = re.compile(r"^[0-9]{11}$")
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_AHPRA_RE = re.compile(r"^[A-Z]{3}[0-9]{10}$")
_NON_DIGITS = re.compile(r"\D")

# Checked in order, first match wins
_PHONE_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    ("mobile", re.compile(r"^04\d{8}$")),
    ("landline", re.compile(r"^0[2-8]\d{8}$")),
    ("international_mobile", re.compile(r"^614\d{8}$")),
]


def validate_abn(abn: Optional[str]) -> bool:
    """Return True if *abn* is an 11-digit Australian Business Number with a valid checksum."""
    if not abn or not _ABN_RE.fullmatch(abn):
        return False
    digits = [int(c) for c in abn]
    digits[0] -= 1
    total = sum(d * w for d, w in zip(digits, ABN_WEIGHTS))
    return total % 89 == 0


def validate_healthcare_email(email: Optional[str]) -> ValidationResult:
    email = email or ""
    errors: list[str] = []
    warnings: list[str] = []

    if not _EMAIL_RE.fullmatch(email):
        errors.append("Invalid email format")

    parts = email.split("@")
    domain = parts[1].strip().lower() if len(parts) > 1 else ""

    if domain in DISPOSABLE_EMAIL_DOMAINS:
        errors.append("Disposable email addresses not allowed for healthcare accounts")

    if domain in PERSONAL_EMAIL_DOMAINS:
        warnings.append("Consider using a professional email address for healthcare practice")

    risk = SecurityRisk.LOW
    if "+" in email:
        warnings.append("Plus-sign emails may cause delivery issues")
        risk = SecurityRisk.MEDIUM

    return ValidationResult(
        errors=errors,
        warnings=warnings,
        sanitized_value=email.strip().lower(),
        security_risk=risk,
    )


def _format_phone(digits: str, phone_type: str) -> str:
    if phone_type == "mobile":
        return f"{digits[:2]} {digits[2:4]} {digits[4:7]} {digits[7:]}"
    if phone_type == "landline":
        return f"{digits[:2]} {digits[2:6]} {digits[6:]}"
    # 614XXXXXXXX -> +61 4 XX XXX XXX
    return f"+61 4 {digits[3:5]} {digits[5:8]} {digits[8:]}"


def classify_phone(phone: Optional[str]) -> Optional[str]:
    """Return ``mobile``, ``landline``, ``international_mobile`` or None."""
    digits = _NON_DIGITS.sub("", phone or "")
    for phone_type, pattern in _PHONE_PATTERNS:
        if pattern.fullmatch(digits):
            return phone_type
    return None


def validate_australian_phone(phone: Optional[str]) -> ValidationResult:
    digits = _NON_DIGITS.sub("", phone or "")
    phone_type = classify_phone(digits)

    if phone_type is None:
        return ValidationResult(
            errors=["Invalid Australian phone number format"],
            sanitized_value="",
            security_risk=SecurityRisk.LOW,
        )

    return ValidationResult(
        sanitized_value=_format_phone(digits, phone_type),
        security_risk=SecurityRisk.LOW,
        details={"phone_type": phone_type},
    )


def normalize_ahpra_registration(value: str) -> str:
    """Upper-case and check an AHPRA registration number.

    Raises:
        ValueError: with a user-facing message when the format is wrong.
    """
    normalized = value.strip().upper()
    if len(normalized) < 8:
        raise ValueError("AHPRA registration must be at least 8 characters")
    if len(normalized) > 15:
        raise ValueError("AHPRA registration number too long")
    if not _AHPRA_RE.fullmatch(normalized):
        raise ValueError("Invalid AHPRA registration format (e.g., MED1234567890)")
    return normalized


def validate_ahpra_registration(value: Optional[str]) -> ValidationResult:
    try:
        normalized = normalize_ahpra_registration(value or "")
    except ValueError as e:
        return ValidationResult(errors=[str(e)], sanitized_value="", security_risk=SecurityRisk.LOW)
    return ValidationResult(sanitized_value=normalized, security_risk=SecurityRisk.LOW)
