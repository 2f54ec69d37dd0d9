"""Parsing and normalization helpers for configuration values."""

import logging
from typing import Any, Iterable, Optional, Tuple

logger = logging.getLogger(__name__)

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _try_parse_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in {"true", "1", "yes", "on"}:
        return True
    if normalized in {"false", "0", "no", "off"}:
        return False
    return None


def _parse_positive_float(value: Any, *, name: str) -> Tuple[Optional[float], Optional[str]]:
    """Return (value, warning); exactly one of them is None."""
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None, f"Ignoring {name}={value!r}: expected a number"
    if parsed <= 0:
        return None, f"Ignoring {name}={value!r}: must be greater than zero"
    return parsed, None


def _normalize_choice(value: Any, choices: Iterable[str], *, name: str) -> Tuple[Optional[str], Optional[str]]:
    """Return (choice, warning) for a case-insensitive enumerated setting."""
    allowed = sorted(choices)
    normalized = str(value).strip().lower()
    if normalized not in allowed:
        return None, f"Ignoring {name}={value!r}: expected one of {', '.join(allowed)}"
    return normalized, None


def _normalize_log_level(value: Any) -> Tuple[Optional[str], Optional[str]]:
    level = str(value).strip().upper()
    if level not in _VALID_LOG_LEVELS:
        return None, f"Ignoring log level {value!r}: expected one of {', '.join(sorted(_VALID_LOG_LEVELS))}"
    return level, None
