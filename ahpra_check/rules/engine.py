"""AHPRA/TGA compliance rule engine.

Scans free text against the rule tables in :mod:`ahpra_check.rules.terms`
and derives a categorical risk level.  The risk level is a priority ladder,
not a weighted sum:

1. ``critical`` - patient testimonial or professional-boundary term
2. ``high`` - therapeutic claim, or health advice without a disclaimer
3. ``medium`` - prohibited advertising term
4. ``low`` - nothing fired
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from ahpra_check.config import settings
from ahpra_check.models.results import ComplianceCheck, RiskLevel
from ahpra_check.rules.terms import DEFAULT_RULES, RECOMMENDED_DISCLAIMER, RuleSet, load_rules

logger = logging.getLogger(__name__)

MISSING_DISCLAIMER_VIOLATION = "Health advice provided without appropriate disclaimer"
MISSING_DISCLAIMER_SUGGESTION = f'Add disclaimer: "{RECOMMENDED_DISCLAIMER}"'

POINTS_PER_VIOLATION = 20


@lru_cache(maxsize=1)
def get_active_rules() -> RuleSet:
    """Return the configured rule set (``AHPRA_CHECK_RULES``) or the defaults."""
    if settings.rules_path is None:
        return DEFAULT_RULES
    logger.info(f"[Rules] loading rule tables from {settings.rules_path}")
    return load_rules(settings.rules_path)


def derive_risk_level(
    *,
    has_prohibited_terms: bool,
    has_therapeutic_claims: bool,
    has_patient_testimonials: bool,
    has_boundary_violations: bool,
    missing_disclaimers: bool,
) -> RiskLevel:
    if has_patient_testimonials or has_boundary_violations:
        return RiskLevel.CRITICAL
    if has_therapeutic_claims or missing_disclaimers:
        return RiskLevel.HIGH
    if has_prohibited_terms:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def check_compliance(content: Optional[str], rules: Optional[RuleSet] = None) -> ComplianceCheck:
    """Check *content* against every AHPRA/TGA rule category.

    Args:
        content: Sanitized free text (see ``sanitize_healthcare_text``).
        rules: Rule tables to use; defaults to the active rule set.

    Returns:
        ComplianceCheck with one violation and one suggestion per fired category.
    """
    rules = rules or get_active_rules()
    content = content or ""
    content_lower = content.lower()

    violations: list[str] = []
    suggestions: list[str] = []
    fired: dict[str, bool] = {}

    for category in rules.categories:
        found = category.matches(content_lower)
        fired[category.key] = bool(found)
        if found:
            violations.append(f"{category.label}: {', '.join(found)}")
            suggestions.append(category.suggestion)

    has_health_advice = bool(rules.advice_regex().search(content))
    has_disclaimer = bool(rules.disclaimer_regex().search(content))
    missing_disclaimers = has_health_advice and not has_disclaimer
    if missing_disclaimers:
        violations.append(MISSING_DISCLAIMER_VIOLATION)
        suggestions.append(MISSING_DISCLAIMER_SUGGESTION)

    risk_level = derive_risk_level(
        has_prohibited_terms=fired["prohibited"],
        has_therapeutic_claims=fired["therapeutic"],
        has_patient_testimonials=fired["testimonial"],
        has_boundary_violations=fired["boundary"],
        missing_disclaimers=missing_disclaimers,
    )

    if violations:
        logger.debug(f"[Compliance] {len(violations)} violation(s), risk {risk_level.value}")

    return ComplianceCheck(
        has_prohibited_terms=fired["prohibited"],
        has_therapeutic_claims=fired["therapeutic"],
        has_patient_testimonials=fired["testimonial"],
        has_boundary_violations=fired["boundary"],
        has_misleading_claims=fired["prohibited"] or fired["therapeutic"],
        missing_disclaimers=missing_disclaimers,
        risk_level=risk_level,
        violations=violations,
        suggestions=suggestions,
    )


def compliance_score(check: ComplianceCheck) -> int:
    """Score a check out of 100, deducting 20 points per violation."""
    return max(0, 100 - POINTS_PER_VIOLATION * len(check.violations))
