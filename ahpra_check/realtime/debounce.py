"""Debounced scheduling of real-time validation.

A ``DebouncedValidator`` holds at most one pending validation.  Every new
submission cancels the pending one and restarts the delay, so a burst of
keystrokes produces a single validation of the latest text.

Usage:
    validator = DebouncedValidator(on_result=render)
    validator.submit(editor_text)  # from inside a running event loop
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from ahpra_check.config import settings
from ahpra_check.models.results import RealTimeReport
from ahpra_check.realtime.checker import validate_content_in_real_time
from ahpra_check.sanitizer import sanitize_healthcare_text

logger = logging.getLogger(__name__)


class DebouncedValidator:
    """Single-slot scheduler around a synchronous content validator."""

    def __init__(
        self,
        on_result: Callable[[RealTimeReport], None],
        delay: Optional[float] = None,
        validator: Callable[[str], RealTimeReport] = validate_content_in_real_time,
    ) -> None:
        self._on_result = on_result
        self._delay = settings.debounce_seconds if delay is None else delay
        self._validator = validator
        self._handle: Optional[asyncio.TimerHandle] = None
        self.content = ""
        self.last_result: Optional[RealTimeReport] = None

    @property
    def is_pending(self) -> bool:
        return self._handle is not None

    def submit(self, content: Optional[str]) -> str:
        """Schedule validation of *content*, replacing any pending call.

        Must be called from a running event loop.  The raw text is validated;
        the sanitized text is kept in ``content`` and returned.
        """
        raw = content or ""
        self.content = sanitize_healthcare_text(raw)
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self._delay, self._fire, raw)
        return self.content

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def close(self) -> None:
        self.cancel()

    def _fire(self, content: str) -> None:
        self._handle = None
        result = self._validator(content)
        self.last_result = result
        logger.debug(f"[Realtime] {result.summary()}")
        self._on_result(result)
