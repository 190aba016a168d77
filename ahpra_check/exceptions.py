"""Exceptions raised by the ahpra_check package.

Validators report problems through result objects; these exceptions are only
raised for configuration mistakes and by callers that explicitly ask for
raise-on-invalid behaviour.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ahpra_check.models.results import ValidationResult


class AhpraCheckError(Exception):
    """Base class for all ahpra_check errors."""


class RuleConfigError(AhpraCheckError):
    """A rule file could not be loaded or produced an invalid rule set."""


class HealthcareValidationError(AhpraCheckError, ValueError):
    """Raised by validators built with ``create_validator`` on invalid input."""

    def __init__(self, result: ValidationResult) -> None:
        self.result = result
        super().__init__("; ".join(result.errors))
