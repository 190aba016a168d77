"""Compliance audit trail.

Every validation decision that matters for publication can be recorded as
newline-delimited JSON, one file per UTC day, under
``<AHPRA_CHECK_HOME>/audit_logs/``.  Only messages and scores are stored,
never the submitted content itself.
"""

from __future__ import annotations

import csv
import io
import json
import logging
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ahpra_check.config import settings
from ahpra_check.models.results import ValidationResult

logger = logging.getLogger(__name__)

CSV_COLUMNS = (
    "id", "timestamp", "actor", "action", "content_type", "content_id",
    "is_valid", "compliance_score", "security_risk", "error_count",
)


@dataclass
class AuditEntry:
    """A single recorded validation decision."""

    id: str
    timestamp: str
    actor: str
    action: str  # "validate_input" | "check_compliance" | ...
    content_type: str
    content_id: str = ""
    is_valid: bool = True
    compliance_score: Optional[int] = None
    security_risk: str = ""
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class ComplianceAuditLog:
    """File-based JSON audit log of validation decisions."""

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base_dir = Path(base_dir) if base_dir else settings.audit_dir
        self._base_dir.mkdir(parents=True, exist_ok=True)

    def _log_file_for_date(self, dt: datetime) -> Path:
        return self._base_dir / f"{dt.strftime('%Y-%m-%d')}.jsonl"

    def _read_all_entries(self) -> list[AuditEntry]:
        entries: list[AuditEntry] = []
        for path in sorted(self._base_dir.glob("*.jsonl")):
            try:
                text = path.read_text(encoding="utf-8")
            except OSError as e:
                logger.warning(f"[Audit] cannot read {path}: {e}")
                continue
            for line in text.splitlines():
                if not line.strip():
                    continue
                try:
                    entries.append(AuditEntry(**json.loads(line)))
                except (json.JSONDecodeError, TypeError) as e:
                    logger.warning(f"[Audit] skipping malformed entry in {path.name}: {e}")
        return entries

    # -- public API ----------------------------------------------------------

    def record(
        self,
        actor: str,
        action: str,
        content_type: str,
        result: ValidationResult,
        content_id: str = "",
    ) -> AuditEntry:
        """Append *result* to today's log file and return the created entry."""
        entry = AuditEntry(
            id=uuid.uuid4().hex[:16],
            timestamp=datetime.now(timezone.utc).isoformat(),
            actor=actor,
            action=action,
            content_type=content_type,
            content_id=content_id,
            is_valid=result.is_valid,
            compliance_score=result.compliance_score,
            security_risk=result.security_risk.value if result.security_risk else "",
            errors=list(result.errors),
            warnings=list(result.warnings),
        )
        log_file = self._log_file_for_date(datetime.now(timezone.utc))
        with log_file.open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(asdict(entry)) + "\n")
        return entry

    def get_events(
        self,
        *,
        actor: Optional[str] = None,
        content_type: Optional[str] = None,
        valid: Optional[bool] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        limit: int = 200,
    ) -> list[AuditEntry]:
        """Return filtered entries, newest first."""
        entries = self._read_all_entries()

        if actor:
            entries = [e for e in entries if e.actor == actor]
        if content_type:
            entries = [e for e in entries if e.content_type == content_type]
        if valid is not None:
            entries = [e for e in entries if e.is_valid == valid]
        if start_date:
            entries = [e for e in entries if e.timestamp >= start_date]
        if end_date:
            entries = [e for e in entries if e.timestamp <= end_date]

        entries.sort(key=lambda e: e.timestamp, reverse=True)
        return entries[:limit]

    def export_events(self, fmt: str = "json", **filters) -> str:
        """Export entries as ``json`` or ``csv``; *filters* go to :meth:`get_events`."""
        entries = self.get_events(**filters)

        if fmt == "csv":
            buf = io.StringIO()
            writer = csv.writer(buf, lineterminator="\n")
            writer.writerow(CSV_COLUMNS)
            for e in entries:
                writer.writerow([
                    e.id, e.timestamp, e.actor, e.action, e.content_type, e.content_id,
                    e.is_valid, "" if e.compliance_score is None else e.compliance_score,
                    e.security_risk, len(e.errors),
                ])
            return buf.getvalue().rstrip("\n")

        return json.dumps([asdict(e) for e in entries], indent=2)
