"""Tests for analytics anonymization."""

import copy

import pytest

from ahpra_check.privacy.anonymize import AnonymizationLevel, anonymize


def _record() -> dict:
    return {
        "social_media": {
            "facebook": [{"patient_reach": 120, "engagement": 14}],
            "instagram": [{"patient_reach": 80, "engagement": 6}, {"patient_reach": 20}],
        },
        "website": {
            "google_analytics": [
                {"unique_visitors": 300, "page_views": 900},
                {"unique_visitors": 50, "page_views": 110},
            ],
        },
        "appointments": {
            "booking_funnel": [
                {"id": "b1", "patient_identifier": "P-001", "patient_location_postcode": "2031",
                 "session_id": "sess-abc", "stage": "booked"},
                {"id": "b2", "patient_identifier": "P-002", "patient_location_postcode": None,
                 "session_id": "sess-def", "stage": "inquiry"},
            ],
            "booking_metrics": [{"inquiries": 7}, {"inquiries": 3}],
        },
        "content": {
            "posts": [{"id": 1}, {"id": 2}, {"id": 3}],
            "performance": [{"interactions": 40}, {"interactions": 2}],
        },
    }


def test_basic_is_a_copy():
    record = _record()
    result = anonymize(record, "basic")
    assert result == record
    assert result is not record
    result["content"]["posts"].clear()
    assert len(record["content"]["posts"]) == 3


def test_enhanced_strips_identifiers():
    funnel = anonymize(_record(), AnonymizationLevel.ENHANCED)["appointments"]["booking_funnel"]
    assert funnel[0]["patient_identifier"] == "anon_b1"
    assert funnel[0]["patient_location_postcode"] == "20XX"
    assert funnel[0]["session_id"].startswith("anon_session_")
    assert "sess-abc" not in funnel[0]["session_id"]
    assert funnel[0]["stage"] == "booked"
    assert funnel[1]["patient_location_postcode"] is None


def test_enhanced_is_the_default_and_deterministic():
    assert anonymize(_record()) == anonymize(_record(), "enhanced")


def test_enhanced_keeps_other_sections():
    result = anonymize(_record(), "enhanced")
    assert result["website"] == _record()["website"]


def test_input_is_never_mutated():
    record = _record()
    before = copy.deepcopy(record)
    for level in AnonymizationLevel:
        anonymize(record, level)
    assert record == before


def test_maximum_keeps_only_totals():
    result = anonymize(_record(), "maximum")
    assert result == {
        "social_media": {"total_reach": 220, "total_engagement": 20},
        "website": {"total_visitors": 350, "total_page_views": 1010},
        "appointments": {"total_bookings": 2, "total_inquiries": 10},
        "content": {"total_posts": 3, "total_interactions": 42},
    }


def test_maximum_of_empty_record():
    result = anonymize({}, "maximum")
    assert result["appointments"] == {"total_bookings": 0, "total_inquiries": 0}


def test_unknown_level():
    with pytest.raises(ValueError):
        anonymize(_record(), "partial")


def test_maximum_keeps_float_metrics():
    record = {"social_media": {"facebook": [{"patient_reach": 12.7}, {"patient_reach": 3}]}}
    assert anonymize(record, "maximum")["social_media"]["total_reach"] == pytest.approx(15.7)


def test_maximum_skips_non_numeric_metrics():
    record = {
        "social_media": {"facebook": [{"patient_reach": 12.7}, {"patient_reach": "n/a"}, {"engagement": True}]},
        "content": {"performance": [{"interactions": None}, "not a dict", {"interactions": 5}]},
    }
    result = anonymize(record, "maximum")
    assert result["social_media"] == {"total_reach": 12.7, "total_engagement": 0}
    assert result["content"]["total_interactions"] == 5


def test_maximum_tolerates_wrong_container_types():
    record = {
        "social_media": {"facebook": "none", "instagram": [{"patient_reach": 4}]},
        "website": ["not", "a", "dict"],
        "appointments": "closed",
        "content": {"posts": {"id": 1}},
    }
    result = anonymize(record, "maximum")
    assert result["social_media"]["total_reach"] == 4
    assert result["website"] == {"total_visitors": 0, "total_page_views": 0}
    assert result["appointments"] == {"total_bookings": 0, "total_inquiries": 0}
    assert result["content"]["total_posts"] == 0


def test_enhanced_tolerates_wrong_container_types():
    record = {"appointments": ["b1", "b2"], "website": {"google_analytics": []}}
    assert anonymize(record, "enhanced") == record
