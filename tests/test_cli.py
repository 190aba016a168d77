"""Tests for the ahpra-check command line."""

import json
import tempfile
from pathlib import Path

import yaml
from click.testing import CliRunner

from ahpra_check.cli import main
from ahpra_check.models.results import ValidationResult
from ahpra_check.security.audit_log import ComplianceAuditLog


def _write_payload(data: dict) -> str:
    f = tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False)
    yaml.dump(data, f)
    f.close()
    return f.name


def test_sanitize():
    result = CliRunner().invoke(main, ["sanitize", "<b>Card</b> 4111 1111 1111 1111"])
    assert result.exit_code == 0
    assert result.output.strip() == "Card [CARD_REDACTED]"


def test_sanitize_from_stdin():
    result = CliRunner().invoke(main, ["sanitize"], input="<p>hello</p>")
    assert result.output.strip() == "hello"


def test_check_json():
    result = CliRunner().invoke(main, ["check", "--json", "Our miracle treatment cures all patients instantly"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["risk_level"] == "high"
    assert data["compliance_score"] == 40
    assert len(data["violations"]) == 3


def test_check_panel():
    result = CliRunner().invoke(main, ["check", "Read this success story."])
    assert result.exit_code == 0
    assert "CRITICAL" in result.output
    assert "Potential patient testimonials detected" in result.output


def test_check_clean_content():
    result = CliRunner().invoke(main, ["check", "Plain text"])
    assert "No compliance issues found" in result.output


def test_check_from_file():
    f = tempfile.NamedTemporaryFile(mode="w", suffix=".txt", delete=False)
    f.write("An incredible new clinic")
    f.close()
    result = CliRunner().invoke(main, ["check", "--json", "--file", f.name])
    assert json.loads(result.output)["risk_level"] == "medium"


def test_scan():
    result = CliRunner().invoke(main, ["scan", "<script>alert(1)</script>"])
    assert "INVALID" in result.output
    assert "Potentially malicious content detected" in result.output


def test_realtime():
    result = CliRunner().invoke(main, ["realtime", "You should book a follow-up appointment"])
    assert result.exit_code == 0
    assert "NON-COMPLIANT" in result.output


def test_abn():
    runner = CliRunner()
    assert runner.invoke(main, ["abn", "51824753556"]).exit_code == 0
    assert runner.invoke(main, ["abn", "12345678901"]).exit_code == 1


def test_phone():
    result = CliRunner().invoke(main, ["phone", "0412345678"])
    assert result.exit_code == 0
    assert "04 12 345 678" in result.output
    assert CliRunner().invoke(main, ["phone", "12345"]).exit_code == 1


def test_email():
    assert CliRunner().invoke(main, ["email", "x@10minutemail.com"]).exit_code == 1
    result = CliRunner().invoke(main, ["email", "dr.jones@gmail.com"])
    assert result.exit_code == 0
    assert "professional email" in result.output


def test_validate_payload():
    path = _write_payload({
        "patientType": "new",
        "appointmentType": "Initial consult",
        "duration": 30,
    })
    result = CliRunner().invoke(main, ["validate", path, "--type", "appointment_info"])
    assert result.exit_code == 0
    assert "VALID" in result.output


def test_validate_rejected_payload():
    path = _write_payload({"patientType": "walk_in", "appointmentType": "Consult", "duration": 30})
    result = CliRunner().invoke(main, ["validate", path, "-t", "appointment_info"])
    assert result.exit_code == 1
    assert "Please select a valid patient type" in result.output


def test_validate_missing_file():
    result = CliRunner().invoke(main, ["validate", "/nonexistent.yaml", "-t", "team_member"])
    assert result.exit_code == 1
    assert "Failed to parse" in result.output


def test_rules():
    result = CliRunner().invoke(main, ["rules"])
    assert result.exit_code == 0
    assert "miracle" in result.output
    assert "Professional boundary concerns" in result.output


def test_audit_list_and_export():
    audit_dir = tempfile.mkdtemp()
    log = ComplianceAuditLog(Path(audit_dir))
    log.record("dr.smith", "validate_input", "patient_content", ValidationResult(errors=["content: x"]))
    log.record("reception", "validate_input", "team_member", ValidationResult())

    runner = CliRunner()
    listed = runner.invoke(main, ["audit", "list", "--audit-dir", audit_dir, "--invalid-only"])
    assert listed.exit_code == 0
    assert "dr.smith" in listed.output
    assert "reception" not in listed.output

    exported = runner.invoke(main, ["audit", "export", "--audit-dir", audit_dir, "--format", "csv"])
    assert exported.output.splitlines()[0].startswith("id,timestamp")
    assert len(exported.output.splitlines()) == 3


def test_audit_list_empty():
    result = CliRunner().invoke(main, ["audit", "list", "--audit-dir", tempfile.mkdtemp()])
    assert "No audit entries" in result.output
