"""Privacy anonymization for practice analytics payloads.

Three levels:

- ``basic``: an untouched deep copy.
- ``enhanced``: booking-funnel entries lose direct identifiers (patient id,
  full postcode, session id).
- ``maximum``: only aggregate totals survive.
"""

from __future__ import annotations

import copy
import hashlib
from enum import Enum
from typing import Any


class AnonymizationLevel(Enum):
    BASIC = "basic"
    ENHANCED = "enhanced"
    MAXIMUM = "maximum"


def _session_token(entry: dict[str, Any], index: int) -> str:
    source = str(entry.get("session_id") or f"{entry.get('id', '')}:{index}")
    return "anon_session_" + hashlib.sha256(source.encode("utf-8")).hexdigest()[:12]


def _mask_postcode(postcode: Any) -> Any:
    if not postcode:
        return None
    return str(postcode)[:2] + "XX"


def _section(record: Any, key: str) -> dict[str, Any]:
    value = record.get(key) if isinstance(record, dict) else None
    return value if isinstance(value, dict) else {}


def _items(section: dict[str, Any], key: str) -> list[Any]:
    value = section.get(key)
    return value if isinstance(value, list) else []


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _sum(items: list[Any], key: str) -> int | float:
    """Sum numeric ``key`` values; non-numeric and missing values are skipped."""
    return sum(
        item[key] for item in items
        if isinstance(item, dict) and _is_number(item.get(key))
    )


def _enhanced(record: dict[str, Any]) -> dict[str, Any]:
    anonymized = copy.deepcopy(record)
    appointments = _section(anonymized, "appointments")
    funnel = appointments.get("booking_funnel")
    if isinstance(funnel, list):
        appointments["booking_funnel"] = [
            {
                **entry,
                "patient_identifier": f"anon_{entry.get('id')}",
                "patient_location_postcode": _mask_postcode(entry.get("patient_location_postcode")),
                "session_id": _session_token(entry, i),
            }
            for i, entry in enumerate(funnel)
            if isinstance(entry, dict)
        ]
    return anonymized


def _maximum(record: dict[str, Any]) -> dict[str, Any]:
    social = _section(record, "social_media")
    website = _section(record, "website")
    appointments = _section(record, "appointments")
    content = _section(record, "content")
    social_items = _items(social, "facebook") + _items(social, "instagram")
    return {
        "social_media": {
            "total_reach": _sum(social_items, "patient_reach"),
            "total_engagement": _sum(social_items, "engagement"),
        },
        "website": {
            "total_visitors": _sum(_items(website, "google_analytics"), "unique_visitors"),
            "total_page_views": _sum(_items(website, "google_analytics"), "page_views"),
        },
        "appointments": {
            "total_bookings": len(_items(appointments, "booking_funnel")),
            "total_inquiries": _sum(_items(appointments, "booking_metrics"), "inquiries"),
        },
        "content": {
            "total_posts": len(_items(content, "posts")),
            "total_interactions": _sum(_items(content, "performance"), "interactions"),
        },
    }


def anonymize(record: dict[str, Any], level: AnonymizationLevel | str = AnonymizationLevel.ENHANCED) -> dict[str, Any]:
    """Return an anonymized copy of an analytics *record*; the input is never mutated."""
    level = AnonymizationLevel(level) if isinstance(level, str) else level
    if level == AnonymizationLevel.MAXIMUM:
        return _maximum(record)
    if level == AnonymizationLevel.ENHANCED:
        return _enhanced(record)
    return copy.deepcopy(record)
