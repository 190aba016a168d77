"""ahpra-check CLI: compliance and field validation from the terminal."""

from __future__ import annotations

import json
import sys

import click
import yaml
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ahpra_check import __version__
from ahpra_check.models.results import IssueType, ValidationResult

console = Console()


def _read_text(text: str | None, file) -> str:
    if text is not None:
        return text
    if file is not None:
        return file.read()
    return sys.stdin.read()


def _print_result(result: ValidationResult, title: str) -> None:
    status = "[green]VALID[/]" if result.is_valid else "[red]INVALID[/]"
    console.print(f"  {status} {title}")
    for e in result.errors:
        console.print(f"  [red]x[/] {escape(e)}")
    for w in result.warnings:
        console.print(f"  [yellow]![/] {escape(w)}")
    if result.sanitized_value not in (None, ""):
        console.print(f"  [dim]normalized:[/] {escape(str(result.sanitized_value))}")
    if result.security_risk:
        console.print(f"  [dim]security risk:[/] {result.security_risk.value}")


@click.group()
@click.version_option(version=__version__)
def main():
    """ahpra-check — AHPRA/TGA compliance checks for healthcare content.

    Scan marketing and patient-education copy for prohibited advertising
    language, therapeutic claims, testimonials and missing disclaimers, and
    validate ABNs, phone numbers, emails and AHPRA registrations.
    """


# ── Content ──────────────────────────────────────────────────────────


@main.command()
@click.argument("text", required=False)
@click.option("--file", "-f", type=click.File("r"), default=None, help="Read content from a file")
def sanitize(text: str | None, file):
    """Strip markup and redact sensitive numbers from TEXT."""
    from ahpra_check.sanitizer import sanitize_healthcare_text

    click.echo(sanitize_healthcare_text(_read_text(text, file)))


@main.command()
@click.argument("text", required=False)
@click.option("--file", "-f", type=click.File("r"), default=None, help="Read content from a file")
@click.option("--json", "as_json", is_flag=True, help="Print the raw check as JSON")
def check(text: str | None, file, as_json: bool):
    """Run the AHPRA/TGA rule engine over TEXT (or a file, or stdin)."""
    from ahpra_check.rules.engine import check_compliance, compliance_score
    from ahpra_check.sanitizer import sanitize_healthcare_text

    result = check_compliance(sanitize_healthcare_text(_read_text(text, file)))
    score = compliance_score(result)

    if as_json:
        click.echo(json.dumps({**result.to_dict(), "compliance_score": score}, indent=2))
        return

    colour = {"low": "green", "medium": "yellow", "high": "red", "critical": "bold red"}[result.risk_level.value]
    console.print(Panel(f"Risk: [{colour}]{result.risk_level.value.upper()}[/]   Score: {score}/100",
                        title="AHPRA Compliance"))
    for v in result.violations:
        console.print(f"  [red]x[/] {escape(v)}")
    for s in result.suggestions:
        console.print(f"  [cyan]>[/] {escape(s)}")
    if not result.violations:
        console.print("  [green]v[/] No compliance issues found")


@main.command()
@click.argument("text", required=False)
@click.option("--file", "-f", type=click.File("r"), default=None, help="Read content from a file")
def scan(text: str | None, file):
    """Scan TEXT for script injection and SQL metacharacters."""
    from ahpra_check.security.scanner import validate_security

    _print_result(validate_security(_read_text(text, file)), "security scan")


@main.command()
@click.argument("text", required=False)
@click.option("--file", "-f", type=click.File("r"), default=None, help="Read content from a file")
def realtime(text: str | None, file):
    """Show the live-editor report (compliance + security) for TEXT."""
    from ahpra_check.realtime.checker import validate_content_in_real_time

    report = validate_content_in_real_time(_read_text(text, file))

    table = Table(title=escape(report.summary()))
    table.add_column("Type", width=8)
    table.add_column("Message")
    for issue in report.issues:
        style = "red" if issue.type == IssueType.ERROR else "yellow"
        table.add_row(f"[{style}]{issue.type.value}[/]", escape(issue.message))
    console.print(table)


# ── Fields ───────────────────────────────────────────────────────────


@main.command()
@click.argument("abn")
def abn(abn: str):
    """Check an ABN's checksum."""
    from ahpra_check.fields.validators import validate_abn

    if validate_abn(abn):
        console.print(f"  [green]v[/] {abn} is a valid ABN")
    else:
        console.print(f"  [red]x[/] {abn} is not a valid ABN")
        raise SystemExit(1)


@main.command()
@click.argument("number")
def phone(number: str):
    """Validate and format an Australian phone number."""
    from ahpra_check.fields.validators import validate_australian_phone

    result = validate_australian_phone(number)
    _print_result(result, result.details.get("phone_type", "phone"))
    if not result.is_valid:
        raise SystemExit(1)


@main.command()
@click.argument("address")
def email(address: str):
    """Validate a healthcare practice email address."""
    from ahpra_check.fields.validators import validate_healthcare_email

    result = validate_healthcare_email(address)
    _print_result(result, "email")
    if not result.is_valid:
        raise SystemExit(1)


@main.command()
@click.argument("payload_path")
@click.option(
    "--type", "-t", "input_type", required=True,
    type=click.Choice(["ahpra_registration", "practice_details", "patient_content", "team_member", "appointment_info"]),
)
@click.option("--no-compliance", is_flag=True, help="Skip the AHPRA rule engine for patient content")
def validate(payload_path: str, input_type: str, no_compliance: bool):
    """Validate a YAML or JSON form payload.

    PAYLOAD_PATH is a file holding one form submission with camelCase keys.
    """
    from ahpra_check.forms.input_validator import validate_healthcare_input

    try:
        with open(payload_path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        console.print(f"  [red]Failed to parse:[/] {e}")
        raise SystemExit(1)

    result = validate_healthcare_input(data, input_type, not no_compliance)
    _print_result(result, input_type)
    if result.compliance_score is not None and input_type == "patient_content":
        console.print(f"  [dim]compliance score:[/] {result.compliance_score}/100")
    if not result.is_valid:
        raise SystemExit(1)


@main.command()
def rules():
    """Print the active rule tables."""
    from ahpra_check.rules.engine import get_active_rules

    active = get_active_rules()
    for category in active.categories:
        table = Table(title=category.label)
        table.add_column("Term", style="cyan")
        for term in category.terms:
            table.add_row(term)
        console.print(table)
    console.print(f"Advice pattern:     {active.advice_pattern}")
    console.print(f"Disclaimer pattern: {active.disclaimer_pattern}")


# ── Audit ────────────────────────────────────────────────────────────


@main.group()
def audit():
    """Inspect the compliance audit log."""


@audit.command(name="list")
@click.option("--audit-dir", default=None, help="Audit log directory")
@click.option("--invalid-only", is_flag=True, help="Only show rejected submissions")
@click.option("--limit", default=50, show_default=True)
def list_events(audit_dir: str | None, invalid_only: bool, limit: int):
    """List recent audit entries."""
    from pathlib import Path

    from ahpra_check.security.audit_log import ComplianceAuditLog

    log = ComplianceAuditLog(Path(audit_dir) if audit_dir else None)
    entries = log.get_events(valid=False if invalid_only else None, limit=limit)
    if not entries:
        console.print("[yellow]No audit entries.[/]")
        return

    table = Table(title=f"Audit log ({len(entries)} entries)")
    table.add_column("Time", style="dim")
    table.add_column("Actor", style="cyan")
    table.add_column("Type")
    table.add_column("Valid", justify="center")
    table.add_column("Score", justify="right")
    for e in entries:
        valid = "[green]Y[/]" if e.is_valid else "[red]N[/]"
        score = "" if e.compliance_score is None else str(e.compliance_score)
        table.add_row(e.timestamp[:19], e.actor, e.content_type, valid, score)
    console.print(table)


@audit.command(name="export")
@click.option("--audit-dir", default=None, help="Audit log directory")
@click.option("--format", "fmt", type=click.Choice(["json", "csv"]), default="json")
def export_events(audit_dir: str | None, fmt: str):
    """Export the audit log as JSON or CSV."""
    from pathlib import Path

    from ahpra_check.security.audit_log import ComplianceAuditLog

    log = ComplianceAuditLog(Path(audit_dir) if audit_dir else None)
    click.echo(log.export_events(fmt))


if __name__ == "__main__":
    main()
