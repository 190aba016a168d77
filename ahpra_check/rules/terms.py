"""Rule tables for AHPRA advertising and TGA therapeutic-claim checks.

The tables are plain data.  ``DEFAULT_RULES`` holds the built-in set; a YAML
rule file can extend or replace individual tables (see :func:`load_rules`)::

    mode: extend            # or "replace"
    prohibited_terms: [world-class]
    testimonial_indicator_terms: [five stars]
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from pathlib import Path

import yaml

from ahpra_check.exceptions import RuleConfigError

# AHPRA prohibited advertising terms
PROHIBITED_TERMS: tuple[str, ...] = (
    "miracle", "cure", "guaranteed", "instant", "breakthrough", "revolutionary",
    "amazing results", "incredible", "unbelievable", "life-changing miracle",
    "painless", "risk-free", "completely safe", "no side effects", "forever",
    "permanent solution", "magic", "secret", "exclusive", "medically proven",
)

# TGA restricted therapeutic claims
THERAPEUTIC_CLAIM_TERMS: tuple[str, ...] = (
    "treats", "cures", "heals", "eliminates", "reverses", "fixes",
    "stops all", "prevents all", "diagnoses", "therapeutic",
    "medical grade", "clinical strength", "prescription strength",
)

TESTIMONIAL_INDICATOR_TERMS: tuple[str, ...] = (
    "testimonial", "patient says", "review", "cured me", "healed me",
    "my doctor", "personal experience", "success story", "patient story",
    "before and after", "transformation", "changed my life",
)

BOUNDARY_VIOLATION_TERMS: tuple[str, ...] = (
    "personal relationship", "friendship", "dating", "romantic",
    "outside consultation", "private meeting", "personal contact",
    "social media friend", "personal phone", "home address",
)

ADVICE_PATTERN = r"should|must|recommend|advise|treatment|diagnosis"
DISCLAIMER_PATTERN = r"disclaimer|consult|seek professional|individual circumstances"

RECOMMENDED_DISCLAIMER = (
    "This information is general. Consult your healthcare provider for advice "
    "specific to your situation."
)

TABLE_NAMES = (
    "prohibited_terms",
    "therapeutic_claim_terms",
    "testimonial_indicator_terms",
    "boundary_violation_terms",
)


@dataclass(frozen=True)
class RuleCategory:
    """A term table with the message and remediation hint it produces."""

    key: str
    label: str
    suggestion: str
    terms: tuple[str, ...] = field(default_factory=tuple)

    def matches(self, content_lower: str) -> list[str]:
        return [term for term in self.terms if term in content_lower]


@dataclass(frozen=True)
class RuleSet:
    prohibited_terms: tuple[str, ...] = PROHIBITED_TERMS
    therapeutic_claim_terms: tuple[str, ...] = THERAPEUTIC_CLAIM_TERMS
    testimonial_indicator_terms: tuple[str, ...] = TESTIMONIAL_INDICATOR_TERMS
    boundary_violation_terms: tuple[str, ...] = BOUNDARY_VIOLATION_TERMS
    advice_pattern: str = ADVICE_PATTERN
    disclaimer_pattern: str = DISCLAIMER_PATTERN

    @property
    def categories(self) -> list[RuleCategory]:
        """Term categories in the order their violations are reported."""
        return [
            RuleCategory(
                key="prohibited",
                label="Prohibited advertising terms found",
                suggestion="Remove exaggerated claims and use evidence-based language",
                terms=self.prohibited_terms,
            ),
            RuleCategory(
                key="therapeutic",
                label="TGA therapeutic claims detected",
                suggestion="Avoid making direct therapeutic claims without proper evidence",
                terms=self.therapeutic_claim_terms,
            ),
            RuleCategory(
                key="testimonial",
                label="Potential patient testimonials detected",
                suggestion="Remove patient testimonials as they are prohibited by AHPRA",
                terms=self.testimonial_indicator_terms,
            ),
            RuleCategory(
                key="boundary",
                label="Professional boundary concerns",
                suggestion="Maintain appropriate professional boundaries in all communications",
                terms=self.boundary_violation_terms,
            ),
        ]

    def advice_regex(self) -> re.Pattern[str]:
        return re.compile(self.advice_pattern, re.IGNORECASE)

    def disclaimer_regex(self) -> re.Pattern[str]:
        return re.compile(self.disclaimer_pattern, re.IGNORECASE)


DEFAULT_RULES = RuleSet()


def check_disjoint(rules: RuleSet) -> list[str]:
    """Return a description of every term listed in more than one table."""
    issues: list[str] = []
    seen: dict[str, str] = {}
    for name in TABLE_NAMES:
        for term in getattr(rules, name):
            if term in seen and seen[term] != name:
                issues.append(f"'{term}' appears in both {seen[term]} and {name}")
            seen.setdefault(term, name)
    return issues


def _normalize_terms(values, table: str) -> tuple[str, ...]:
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise RuleConfigError(f"'{table}' must be a list of strings")
    terms: list[str] = []
    for value in values:
        term = value.strip().lower()
        if term and term not in terms:
            terms.append(term)
    return tuple(terms)


def rules_from_dict(data: dict, base: RuleSet = DEFAULT_RULES) -> RuleSet:
    """Build a rule set from a parsed rule-file mapping."""
    if not isinstance(data, dict):
        raise RuleConfigError("Rule file must contain a mapping")

    mode = data.get("mode", "extend")
    if mode not in ("extend", "replace"):
        raise RuleConfigError(f"Invalid mode '{mode}'. Must be 'extend' or 'replace'")

    changes: dict[str, object] = {}
    for name in TABLE_NAMES:
        if name not in data:
            continue
        terms = _normalize_terms(data[name], name)
        if mode == "extend":
            current = getattr(base, name)
            terms = current + tuple(t for t in terms if t not in current)
        changes[name] = terms

    for name in ("advice_pattern", "disclaimer_pattern"):
        if name in data:
            try:
                re.compile(data[name])
            except (re.error, TypeError) as e:
                raise RuleConfigError(f"Invalid {name}: {e}") from e
            changes[name] = data[name]

    rules = replace(base, **changes)
    overlaps = check_disjoint(rules)
    if overlaps:
        raise RuleConfigError("Rule tables must be disjoint: " + "; ".join(overlaps))
    return rules


def load_rules(path: str | Path) -> RuleSet:
    """Load a rule set from a YAML file."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise RuleConfigError(f"Cannot read rule file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise RuleConfigError(f"Invalid YAML in {path}: {e}") from e
    return rules_from_dict(data or {})
