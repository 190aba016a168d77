"""Plain-text sanitizer for free-text healthcare content.

Strips all markup, collapses whitespace and redacts card, SSN-style and
Medicare numbers.  Every other validator expects text that has already been
through :func:`sanitize_healthcare_text`, so violation messages never quote
raw identifiers.
"""

from __future__ import annotations

import re
from typing import Optional

import bleach

CARD_PLACEHOLDER = "[CARD_REDACTED]"
SSN_PLACEHOLDER = "[SSN_REDACTED]"
MEDICARE_PLACEHOLDER = "[MEDICARE_REDACTED]"

_WHITESPACE = re.compile(r"\s+")

# Element bodies that are never text; an unclosed element runs to the end
_NON_TEXT_ELEMENTS = re.compile(
    r"<(script|style)\b[^>]*>.*?(?:</\1\s*>|$)",
    re.IGNORECASE | re.DOTALL,
)

# Applied in order
_REDACTIONS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\b\d{4}\s?\d{4}\s?\d{4}\s?\d{4}\b"), CARD_PLACEHOLDER),
    (re.compile(r"\b\d{3}-?\d{2}-?\d{4}\b"), SSN_PLACEHOLDER),
    (re.compile(r"medicare\s*#?\s*\d+", re.IGNORECASE), MEDICARE_PLACEHOLDER),
]


def strip_markup(text: str) -> str:
    """Remove every tag and attribute, keeping only text content.

    ``script`` and ``style`` elements are dropped together with their bodies.
    """
    text = _NON_TEXT_ELEMENTS.sub(" ", text)
    return bleach.clean(text, tags=set(), attributes={}, strip=True, strip_comments=True)


def redact_sensitive(text: str) -> str:
    for pattern, placeholder in _REDACTIONS:
        text = pattern.sub(placeholder, text)
    return text


def sanitize_healthcare_text(text: Optional[str]) -> str:
    """Return *text* as safe plain text with sensitive numbers redacted.

    ``None`` and the empty string both yield ``""``.  The function is
    idempotent: sanitizing an already sanitized string returns it unchanged.
    """
    if not text:
        return ""
    sanitized = strip_markup(str(text))
    sanitized = _WHITESPACE.sub(" ", sanitized).strip()
    return redact_sensitive(sanitized)
