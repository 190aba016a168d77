"""Tests for the real-time report and the debounced validator."""

import asyncio

import pytest

from ahpra_check.models.results import IssueType
from ahpra_check.realtime.checker import validate_content_in_real_time
from ahpra_check.realtime.debounce import DebouncedValidator
from ahpra_check.security.scanner import MALICIOUS_CONTENT_ERROR, SUSPICIOUS_CHARACTERS_WARNING


# --- Report ---


def test_miracle_claims_report():
    report = validate_content_in_real_time("Our miracle treatment cures all patients instantly")
    assert not report.is_compliant
    assert len(report.errors) == 3
    assert len(report.warnings) == 3
    assert report.score == 25
    assert report.issues[0].type == IssueType.ERROR
    assert report.issues[0].message.startswith("Prohibited advertising terms found")


def test_issue_order():
    report = validate_content_in_real_time("You should book a follow-up appointment")
    assert [i.type for i in report.issues] == [IssueType.ERROR, IssueType.WARNING]
    assert report.score == 75


def test_compliant_content():
    report = validate_content_in_real_time("Regular exercise supports wellbeing. Consult your GP.")
    assert report.is_compliant
    assert report.issues == []
    assert report.score == 100


def test_security_errors_count():
    report = validate_content_in_real_time("<script>x</script> hello")
    assert [i.message for i in report.errors] == [MALICIOUS_CONTENT_ERROR]
    assert report.score == 75


def test_security_warnings_do_not_affect_score():
    report = validate_content_in_real_time("Dr O'Brien is available")
    assert report.is_compliant
    assert [i.message for i in report.warnings] == [SUSPICIOUS_CHARACTERS_WARNING]
    assert report.score == 100


def test_score_floors_at_zero():
    report = validate_content_in_real_time("miracle heals testimonial dating, you should act")
    assert len(report.errors) == 5
    assert report.score == 0


def test_empty_content():
    report = validate_content_in_real_time(None)
    assert report.is_compliant
    assert report.score == 100


def test_summary():
    report = validate_content_in_real_time("Our miracle treatment cures all patients instantly")
    assert report.summary() == "[NON-COMPLIANT] score 25, 3 error(s), 3 warning(s)"


# --- Debounce ---


def test_burst_validates_latest_content_once():
    seen: list[str] = []
    results = []

    def validator(content):
        seen.append(content)
        return validate_content_in_real_time(content)

    async def run():
        debounced = DebouncedValidator(results.append, delay=0.01, validator=validator)
        debounced.submit("Our")
        debounced.submit("Our miracle")
        returned = debounced.submit("<b>Our miracle</b>   cure")
        assert returned == "Our miracle cure"
        assert debounced.is_pending
        await asyncio.sleep(0.1)
        return debounced

    debounced = asyncio.run(run())
    assert seen == ["<b>Our miracle</b>   cure"]
    assert len(results) == 1
    assert debounced.last_result is results[0]
    assert debounced.content == "Our miracle cure"
    assert not debounced.is_pending


def test_cancel_drops_pending_validation():
    results = []

    async def run():
        debounced = DebouncedValidator(results.append, delay=0.01)
        debounced.submit("Our miracle cure")
        debounced.cancel()
        assert not debounced.is_pending
        await asyncio.sleep(0.05)

    asyncio.run(run())
    assert results == []


def test_close_cancels():
    results = []

    async def run():
        debounced = DebouncedValidator(results.append, delay=0.01)
        debounced.submit("text")
        debounced.close()
        await asyncio.sleep(0.05)

    asyncio.run(run())
    assert results == []


def test_default_delay_from_settings():
    from ahpra_check.config import settings

    debounced = DebouncedValidator(lambda r: None)
    assert debounced._delay == settings.debounce_seconds


def test_submit_requires_running_loop():
    debounced = DebouncedValidator(lambda r: None, delay=0.01)
    with pytest.raises(RuntimeError):
        debounced.submit("text")


def test_debounced_validation_reports_markup_xss():
    results = []

    async def run():
        debounced = DebouncedValidator(results.append, delay=0.01)
        returned = debounced.submit("<img src=x onerror=alert(1)>Book today")
        assert returned == "Book today"
        await asyncio.sleep(0.05)

    asyncio.run(run())
    assert [i.message for i in results[0].errors] == [MALICIOUS_CONTENT_ERROR]
    assert results[0].score == 75
