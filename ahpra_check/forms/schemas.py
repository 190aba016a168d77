"""Pydantic schemas for the structured healthcare forms.

Payloads arrive with camelCase keys (``registrationNumber``); models expose
snake_case attributes and dump back to camelCase.  Length and charset checks
run on the submitted value, then free-text fields are sanitized as the final
transform.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Annotated, Callable, Literal, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, StrictBool, StrictInt
from pydantic.alias_generators import to_camel

from ahpra_check.fields.validators import normalize_ahpra_registration, validate_abn
from ahpra_check.sanitizer import sanitize_healthcare_text


class InputType(Enum):
    AHPRA_REGISTRATION = "ahpra_registration"
    PRACTICE_DETAILS = "practice_details"
    PATIENT_CONTENT = "patient_content"
    TEAM_MEMBER = "team_member"
    APPOINTMENT_INFO = "appointment_info"


HEALTHCARE_PROFESSIONS = (
    "general_practice", "mental_health", "cardiology", "dermatology", "orthopedics",
    "pediatrics", "obstetrics_gynecology", "neurology", "oncology", "radiology",
    "pathology", "surgery", "emergency_medicine", "anesthesiology", "psychiatry",
    "psychology", "physiotherapy", "occupational_therapy", "speech_therapy",
    "dietetics", "pharmacy", "nursing", "dentistry", "optometry", "podiatry",
)
AUSTRALIAN_STATES = ("NSW", "VIC", "QLD", "SA", "WA", "TAS", "NT", "ACT")
PRACTICE_TYPES = ("solo_practice", "group_practice", "healthcare_network", "hospital", "clinic")
CONTENT_TYPES = (
    "patient_education", "practice_update", "health_tip",
    "appointment_reminder", "emergency_notice",
)
TARGET_AUDIENCES = ("patients", "professionals", "general_public")
TEAM_ROLES = ("admin", "practitioner", "nurse", "receptionist", "practice_manager")
PATIENT_TYPES = ("new", "returning", "follow_up", "urgent", "emergency")

_POSTCODE_RE = re.compile(r"[0-9]{4}")
_PRACTICE_NAME_RE = re.compile(r"[a-zA-Z0-9\s\-&.,()]+")
_PERSON_NAME_RE = re.compile(r"[a-zA-Z\s\-']+")
_ABN_FORMAT_RE = re.compile(r"[0-9]{11}")
_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


# ---------------------------------------------------------------------------
# Reusable field checks
# ---------------------------------------------------------------------------


def _length(minimum: int, maximum: int, too_short: str, too_long: str) -> Callable[[str], str]:
    def check(value: str) -> str:
        if len(value) < minimum:
            raise ValueError(too_short)
        if len(value) > maximum:
            raise ValueError(too_long)
        return value

    return check


def _max_length(maximum: int, message: str) -> Callable[[str], str]:
    def check(value: str) -> str:
        if len(value) > maximum:
            raise ValueError(message)
        return value

    return check


def _pattern(regex: re.Pattern[str], message: str) -> Callable[[str], str]:
    def check(value: str) -> str:
        if not regex.fullmatch(value):
            raise ValueError(message)
        return value

    return check


def _choice(options: tuple[str, ...], message: str) -> Callable[[str], str]:
    def check(value: str) -> str:
        if value not in options:
            raise ValueError(message)
        return value

    return check


def _must_be_true(message: str) -> Callable[[bool], bool]:
    def check(value: bool) -> bool:
        if value is not True:
            raise ValueError(message)
        return value

    return check


def _postcode_in_range(value: str) -> str:
    if not 1000 <= int(value) <= 9999:
        raise ValueError("Invalid Australian postcode range")
    return value


def _abn_checksum(value: str) -> str:
    if not validate_abn(value):
        raise ValueError("Invalid ABN checksum")
    return value


def _non_empty(message: str) -> Callable[[list], list]:
    def check(value: list) -> list:
        if not value:
            raise ValueError(message)
        return value

    return check


def _no_plus_sign(value: str) -> str:
    if "+" in value:
        raise ValueError("Plus-sign emails not allowed for healthcare team members")
    return value


def _duration_range(value: int) -> int:
    if not 5 <= value <= 240:
        raise ValueError("Appointment duration must be between 5-240 minutes")
    return value


Sanitized = AfterValidator(sanitize_healthcare_text)


def _person_name(label: str):
    return Annotated[
        str,
        AfterValidator(_length(2, 50, f"{label} must be at least 2 characters", f"{label} too long")),
        AfterValidator(_pattern(_PERSON_NAME_RE, f"{label} contains invalid characters")),
    ]


FirstName = _person_name("First name")
LastName = _person_name("Last name")


# ---------------------------------------------------------------------------
# Form models
# ---------------------------------------------------------------------------


class HealthcareForm(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class AhpraRegistrationForm(HealthcareForm):
    registration_number: Annotated[str, AfterValidator(normalize_ahpra_registration)]
    profession: Annotated[
        str, AfterValidator(_choice(HEALTHCARE_PROFESSIONS, "Please select a valid healthcare profession"))
    ]
    speciality: Optional[Annotated[str, Sanitized]] = None
    practice_state: Annotated[
        str, AfterValidator(_choice(AUSTRALIAN_STATES, "Please select a valid Australian state/territory"))
    ]
    practice_postcode: Annotated[
        str,
        AfterValidator(_pattern(_POSTCODE_RE, "Australian postcode must be 4 digits")),
        AfterValidator(_postcode_in_range),
    ]


class PracticeDetailsForm(HealthcareForm):
    practice_name: Annotated[
        str,
        AfterValidator(_length(2, 100, "Practice name must be at least 2 characters", "Practice name too long")),
        AfterValidator(_pattern(_PRACTICE_NAME_RE, "Practice name contains invalid characters")),
        Sanitized,
    ]
    abn: Annotated[
        str,
        AfterValidator(_pattern(_ABN_FORMAT_RE, "ABN must be 11 digits")),
        AfterValidator(_abn_checksum),
    ]
    practice_type: Annotated[str, AfterValidator(_choice(PRACTICE_TYPES, "Please select a valid practice type"))]
    services_offered: Annotated[list[str], AfterValidator(_non_empty("Please select at least one service"))]
    bulk_billing: Optional[StrictBool] = None
    telehealth: Optional[StrictBool] = None


class PatientContentForm(HealthcareForm):
    title: Annotated[
        str,
        AfterValidator(_length(5, 200, "Title must be at least 5 characters", "Title too long")),
        Sanitized,
    ]
    content: Annotated[
        str,
        AfterValidator(_length(10, 5000, "Content must be at least 10 characters", "Content too long")),
        Sanitized,
    ]
    content_type: Annotated[str, AfterValidator(_choice(CONTENT_TYPES, "Please select a valid content type"))]
    target_audience: Annotated[
        str, AfterValidator(_choice(TARGET_AUDIENCES, "Please select a valid target audience"))
    ]
    medical_disclaimer: Annotated[
        StrictBool, AfterValidator(_must_be_true("Medical disclaimer must be acknowledged"))
    ]
    ahpra_compliant: Annotated[StrictBool, AfterValidator(_must_be_true("Content must be AHPRA compliant"))]


class TeamMemberForm(HealthcareForm):
    email: Annotated[
        str,
        AfterValidator(_pattern(_EMAIL_RE, "Invalid email address")),
        AfterValidator(_no_plus_sign),
        AfterValidator(str.lower),
    ]
    role: Annotated[str, AfterValidator(_choice(TEAM_ROLES, "Please select a valid team role"))]
    permissions: list[Literal["view", "edit", "publish", "admin"]]
    first_name: FirstName
    last_name: LastName


class AppointmentInfoForm(HealthcareForm):
    patient_type: Annotated[str, AfterValidator(_choice(PATIENT_TYPES, "Please select a valid patient type"))]
    appointment_type: Annotated[
        str,
        AfterValidator(_length(1, 200, "Appointment type required", "Appointment type too long")),
        Sanitized,
    ]
    duration: Annotated[StrictInt, AfterValidator(_duration_range)]
    notes: Optional[
        Annotated[str, AfterValidator(_max_length(1000, "Notes too long")), Sanitized]
    ] = None
    requires_preparation: Optional[StrictBool] = None
    telehealth: Optional[StrictBool] = None
    bulk_billed: Optional[StrictBool] = None


FORMS: dict[InputType, type[HealthcareForm]] = {
    InputType.AHPRA_REGISTRATION: AhpraRegistrationForm,
    InputType.PRACTICE_DETAILS: PracticeDetailsForm,
    InputType.PATIENT_CONTENT: PatientContentForm,
    InputType.TEAM_MEMBER: TeamMemberForm,
    InputType.APPOINTMENT_INFO: AppointmentInfoForm,
}


def get_form(input_type: InputType | str) -> type[HealthcareForm]:
    """Return the form model for *input_type*.

    Raises:
        ValueError: if *input_type* is not a known form type.
    """
    kind = InputType(input_type) if isinstance(input_type, str) else input_type
    return FORMS[kind]
