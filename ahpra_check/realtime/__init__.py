"""Live-editing support: combined content checks and debounced scheduling."""

from ahpra_check.realtime.checker import validate_content_in_real_time
from ahpra_check.realtime.debounce import DebouncedValidator

__all__ = ["DebouncedValidator", "validate_content_in_real_time"]
