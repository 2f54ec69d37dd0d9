"""
Envelope types shared by the CLI and the agent tools.

Every operation answers with a ``ToolResponse``: ``success``, a ``data``
payload, an ``error`` message on failure and a ``meta`` block that always
names the envelope version.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence

RESPONSE_VERSION = "response-v2"


class ErrorCode(str, Enum):
    """Machine-readable failure codes, stable across releases."""

    # Input
    VALIDATION_ERROR = "VALIDATION_ERROR"
    SCHEMA_ERROR = "SCHEMA_ERROR"

    # Lookup
    NOT_FOUND = "NOT_FOUND"
    SECTION_NOT_FOUND = "SECTION_NOT_FOUND"
    ITEM_NOT_FOUND = "ITEM_NOT_FOUND"
    DEPENDENCY_NOT_FOUND = "DEPENDENCY_NOT_FOUND"
    NOT_TRACKED = "NOT_TRACKED"

    # Concurrency
    VERSION_CONFLICT = "VERSION_CONFLICT"
    RESOURCE_BUSY = "RESOURCE_BUSY"

    # Access
    FORBIDDEN = "FORBIDDEN"

    # System
    IO_ERROR = "IO_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorType(str, Enum):
    """Coarse failure category; tells a client whether retrying can help."""

    VALIDATION = "validation"  # fix the input
    AUTHORIZATION = "authorization"  # path outside the spec
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"  # re-read, recompute, resubmit
    UNAVAILABLE = "unavailable"  # lock busy, retry later
    IO = "io"
    INTERNAL = "internal"


@dataclass
class ToolResponse:
    """
    Result envelope.

    Attributes:
        success: True when the operation completed
        data: Operation payload, or ``error_code``/``error_type``/``details`` on failure
        error: Human-readable failure message
        meta: ``version`` plus optional ``warnings``
    """

    success: bool
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=lambda: {"version": RESPONSE_VERSION})


def _build_meta(
    *,
    warnings: Optional[Sequence[str]] = None,
    extra: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    meta: Dict[str, Any] = {"version": RESPONSE_VERSION}
    if warnings:
        meta["warnings"] = list(warnings)
    if extra:
        meta.update(extra)
    return meta
