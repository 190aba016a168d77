"""Combined compliance + security check for live content editors.

The score here deducts 25 points per error, unlike the 20 points per
violation of ``compliance_score``; both scores are in use.
"""

from __future__ import annotations

from typing import Optional

from ahpra_check.models.results import IssueType, RealTimeIssue, RealTimeReport
from ahpra_check.rules.engine import check_compliance
from ahpra_check.security.scanner import validate_security

POINTS_PER_ERROR = 25


def validate_content_in_real_time(content: Optional[str]) -> RealTimeReport:
    content = content or ""
    compliance = check_compliance(content)
    security = validate_security(content)

    issues: list[RealTimeIssue] = []
    issues.extend(RealTimeIssue(IssueType.ERROR, v) for v in compliance.violations)
    issues.extend(RealTimeIssue(IssueType.WARNING, s) for s in compliance.suggestions)
    issues.extend(RealTimeIssue(IssueType.ERROR, e) for e in security.errors)
    issues.extend(RealTimeIssue(IssueType.WARNING, w) for w in security.warnings)

    error_count = sum(1 for i in issues if i.type == IssueType.ERROR)
    return RealTimeReport(
        is_compliant=error_count == 0,
        issues=issues,
        score=max(0, 100 - POINTS_PER_ERROR * error_count),
    )
