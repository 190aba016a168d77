"""Runtime configuration read from environment variables.

| Variable | Default |
|---|---|
| ``AHPRA_CHECK_HOME`` | ``~/.ahpra_check`` |
| ``AHPRA_CHECK_RULES`` | unset (built-in rule tables) |
| ``AHPRA_CHECK_MAX_CONTENT_LENGTH`` | ``10000`` |
| ``AHPRA_CHECK_DEBOUNCE_MS`` | ``500`` |
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_MAX_CONTENT_LENGTH = 10_000
DEFAULT_DEBOUNCE_MS = 500


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    home: Path
    rules_path: Optional[Path] = None
    max_content_length: int = DEFAULT_MAX_CONTENT_LENGTH
    debounce_ms: int = DEFAULT_DEBOUNCE_MS

    @property
    def audit_dir(self) -> Path:
        return self.home / "audit_logs"

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000


def load_settings() -> Settings:
    """Build settings from the current environment."""
    home = os.environ.get("AHPRA_CHECK_HOME", "")
    rules = os.environ.get("AHPRA_CHECK_RULES", "")
    return Settings(
        home=Path(home) if home else Path.home() / ".ahpra_check",
        rules_path=Path(rules) if rules else None,
        max_content_length=_int_env("AHPRA_CHECK_MAX_CONTENT_LENGTH", DEFAULT_MAX_CONTENT_LENGTH),
        debounce_ms=_int_env("AHPRA_CHECK_DEBOUNCE_MS", DEFAULT_DEBOUNCE_MS),
    )


settings = load_settings()
