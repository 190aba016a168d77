"""Security scanner for injection-style content.

XSS patterns are blocking errors; SQL metacharacters and oversized content
are advisory warnings.  Only the first matching pattern of each group is
reported.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from ahpra_check.config import settings
from ahpra_check.models.results import SecurityRisk, ValidationResult
from ahpra_check.sanitizer import sanitize_healthcare_text

logger = logging.getLogger(__name__)

MALICIOUS_CONTENT_ERROR = "Potentially malicious content detected"
SUSPICIOUS_CHARACTERS_WARNING = "Content contains characters that may cause issues"
LONG_CONTENT_WARNING = "Content is very long and may impact performance"

_XSS_PATTERNS: list[re.Pattern[str]] = [
    re.compile(p, re.IGNORECASE)
    for p in [
        r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>",
        r"javascript:",
        r"on\w+\s*=",
        r"<iframe\b[^>]*>",
        r"<object\b[^>]*>",
        r"<embed\b[^>]*>",
    ]
]

_SQL_PATTERNS: list[re.Pattern[str]] = [
    re.compile(
        r"(\bselect\b|\binsert\b|\bupdate\b|\bdelete\b|\bdrop\b|\bunion\b).*(\bfrom\b|\binto\b|\bset\b|\bwhere\b)",
        re.IGNORECASE,
    ),
    re.compile(r"('|\"|`|;|--|/\*|\*/)"),
]


def _first_match(patterns: list[re.Pattern[str]], content: str) -> Optional[re.Pattern[str]]:
    for pattern in patterns:
        if pattern.search(content):
            return pattern
    return None


def validate_security(content: Optional[str], max_length: Optional[int] = None) -> ValidationResult:
    """Scan *content* for XSS and SQL-injection style patterns.

    ``sanitized_value`` always holds the sanitized text so callers can store
    or render it even when the content is rejected.
    """
    content = content or ""
    max_length = settings.max_content_length if max_length is None else max_length
    errors: list[str] = []
    warnings: list[str] = []

    xss = _first_match(_XSS_PATTERNS, content)
    if xss:
        logger.debug(f"[Security] XSS pattern matched: {xss.pattern[:40]}")
        errors.append(MALICIOUS_CONTENT_ERROR)

    if _first_match(_SQL_PATTERNS, content):
        warnings.append(SUSPICIOUS_CHARACTERS_WARNING)

    if len(content) > max_length:
        warnings.append(LONG_CONTENT_WARNING)

    if errors:
        risk = SecurityRisk.HIGH
    elif warnings:
        risk = SecurityRisk.MEDIUM
    else:
        risk = SecurityRisk.LOW

    return ValidationResult(
        errors=errors,
        warnings=warnings,
        sanitized_value=sanitize_healthcare_text(content),
        security_risk=risk,
    )
