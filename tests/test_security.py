"""Tests for the security scanner and the compliance audit log."""

import csv
import io
import json
import tempfile
from pathlib import Path

from ahpra_check.models.results import SecurityRisk, ValidationResult
from ahpra_check.security.audit_log import ComplianceAuditLog
from ahpra_check.security.scanner import (
    LONG_CONTENT_WARNING,
    MALICIOUS_CONTENT_ERROR,
    SUSPICIOUS_CHARACTERS_WARNING,
    validate_security,
)


# --- Scanner ---


def test_script_tag_is_high_risk():
    result = validate_security("<script>alert(1)</script>")
    assert result.errors == [MALICIOUS_CONTENT_ERROR]
    assert result.security_risk == SecurityRisk.HIGH
    assert not result.is_valid
    assert result.sanitized_value == ""


def test_javascript_url():
    result = validate_security("javascript:void(0)")
    assert result.errors == [MALICIOUS_CONTENT_ERROR]


def test_event_handler_attribute():
    result = validate_security("<img src=x onerror=alert(1)>")
    assert result.errors == [MALICIOUS_CONTENT_ERROR]
    assert result.security_risk == SecurityRisk.HIGH


def test_iframe_is_case_insensitive():
    result = validate_security("<IFRAME src=x>")
    assert result.errors == [MALICIOUS_CONTENT_ERROR]


def test_only_first_xss_match_reported():
    result = validate_security("<script>x</script> javascript: <embed src=x>")
    assert result.errors == [MALICIOUS_CONTENT_ERROR]


def test_sql_keywords_are_a_warning():
    result = validate_security("SELECT name FROM patients")
    assert result.errors == []
    assert result.warnings == [SUSPICIOUS_CHARACTERS_WARNING]
    assert result.security_risk == SecurityRisk.MEDIUM
    assert result.is_valid


def test_quote_characters_are_a_warning():
    result = validate_security("Dr O'Brien is available")
    assert result.warnings == [SUSPICIOUS_CHARACTERS_WARNING]


def test_clean_content_is_low_risk():
    result = validate_security("Book your annual health check today")
    assert result.errors == []
    assert result.warnings == []
    assert result.security_risk == SecurityRisk.LOW
    assert result.sanitized_value == "Book your annual health check today"


def test_long_content_warning():
    result = validate_security("a" * 10_001)
    assert result.warnings == [LONG_CONTENT_WARNING]
    assert result.security_risk == SecurityRisk.MEDIUM


def test_content_at_limit_is_not_long():
    assert validate_security("a" * 10_000).warnings == []


def test_custom_max_length():
    result = validate_security("hello world", max_length=5)
    assert result.warnings == [LONG_CONTENT_WARNING]


def test_empty_content():
    result = validate_security("")
    assert result.is_valid
    assert result.security_risk == SecurityRisk.LOW
    assert result.sanitized_value == ""


def test_risk_follows_errors_and_warnings():
    for sample in ["plain", "a;b", "<script>x</script>", "javascript: DROP TABLE x; --"]:
        result = validate_security(sample)
        if result.errors:
            assert result.security_risk == SecurityRisk.HIGH
        elif result.warnings:
            assert result.security_risk == SecurityRisk.MEDIUM
        else:
            assert result.security_risk == SecurityRisk.LOW


# --- Audit log ---


def _audit_log() -> ComplianceAuditLog:
    return ComplianceAuditLog(Path(tempfile.mkdtemp()))


def _rejected() -> ValidationResult:
    return ValidationResult(
        errors=["Potential patient testimonials detected: testimonial"],
        compliance_score=80,
        security_risk=SecurityRisk.HIGH,
    )


def test_record_and_read_back():
    log = _audit_log()
    entry = log.record("dr.smith", "validate_input", "patient_content", _rejected(), content_id="post-1")
    events = log.get_events()
    assert len(events) == 1
    assert events[0].id == entry.id
    assert events[0].actor == "dr.smith"
    assert events[0].content_id == "post-1"
    assert not events[0].is_valid
    assert events[0].compliance_score == 80
    assert events[0].security_risk == "high"


def test_filters():
    log = _audit_log()
    log.record("dr.smith", "validate_input", "patient_content", _rejected())
    log.record("reception", "validate_input", "appointment_info", ValidationResult(security_risk=SecurityRisk.LOW))
    assert len(log.get_events(actor="reception")) == 1
    assert len(log.get_events(content_type="patient_content")) == 1
    assert [e.actor for e in log.get_events(valid=False)] == ["dr.smith"]
    assert [e.actor for e in log.get_events(valid=True)] == ["reception"]
    assert len(log.get_events(limit=1)) == 1


def test_events_newest_first():
    base = Path(tempfile.mkdtemp())
    rows = [
        {"id": "a", "timestamp": "2026-01-01T09:00:00+00:00", "actor": "x", "action": "validate_input",
         "content_type": "team_member"},
        {"id": "b", "timestamp": "2026-01-02T09:00:00+00:00", "actor": "x", "action": "validate_input",
         "content_type": "team_member"},
    ]
    (base / "2026-01-01.jsonl").write_text("\n".join(json.dumps(r) for r in rows) + "\n")
    log = ComplianceAuditLog(base)
    assert [e.id for e in log.get_events()] == ["b", "a"]
    assert [e.id for e in log.get_events(start_date="2026-01-02")] == ["b"]
    assert [e.id for e in log.get_events(end_date="2026-01-01T23:59:59")] == ["a"]


def test_malformed_lines_are_skipped():
    base = Path(tempfile.mkdtemp())
    (base / "2026-01-01.jsonl").write_text("not json\n{\"unexpected\": 1}\n")
    log = ComplianceAuditLog(base)
    log.record("dr.smith", "validate_input", "patient_content", _rejected())
    assert len(log.get_events()) == 1


def test_export_json():
    log = _audit_log()
    log.record("dr.smith", "validate_input", "patient_content", _rejected())
    data = json.loads(log.export_events("json"))
    assert data[0]["actor"] == "dr.smith"
    assert data[0]["errors"] == ["Potential patient testimonials detected: testimonial"]


def test_export_csv():
    log = _audit_log()
    log.record("dr.smith", "validate_input", "patient_content", _rejected(), content_id="post-1")
    lines = log.export_events("csv").splitlines()
    assert lines[0].startswith("id,timestamp,actor,action,content_type")
    assert len(lines) == 2
    assert ",dr.smith,validate_input,patient_content,post-1,False,80,high,1" in lines[1]


def test_export_empty_log():
    log = _audit_log()
    assert json.loads(log.export_events()) == []
    assert len(log.export_events("csv").splitlines()) == 1


def test_export_csv_quotes_awkward_values():
    log = _audit_log()
    log.record("Smith, Dr\nJones", "validate_input", "team_member", ValidationResult(), content_id='id "7"')
    rows = list(csv.reader(io.StringIO(log.export_events("csv"))))
    assert len(rows) == 2
    assert rows[1][2] == "Smith, Dr\nJones"
    assert rows[1][5] == 'id "7"'
    assert rows[1][7] == ""
