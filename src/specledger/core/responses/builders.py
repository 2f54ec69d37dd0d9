"""Constructors for success and error envelopes."""

from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from specledger.core.responses.types import ErrorCode, ErrorType, ToolResponse, _build_meta


def success_response(
    data: Optional[Mapping[str, Any]] = None,
    *,
    warnings: Optional[Sequence[str]] = None,
    meta: Optional[Mapping[str, Any]] = None,
    **fields: Any,
) -> ToolResponse:
    """
    Build a success envelope.

    ``data`` and keyword ``fields`` are merged into the payload; ``warnings``
    (e.g. a dependency cycle created by a link) land in ``meta.warnings``.
    """
    payload: Dict[str, Any] = dict(data or {})
    payload.update(fields)
    return ToolResponse(success=True, data=payload, meta=_build_meta(warnings=warnings, extra=meta))


def _enum_value(value: Union[Enum, str]) -> str:
    return value.value if isinstance(value, Enum) else value


def error_response(
    message: str,
    *,
    error_code: Union[ErrorCode, str] = ErrorCode.INTERNAL_ERROR,
    error_type: Union[ErrorType, str] = ErrorType.INTERNAL,
    remediation: Optional[str] = None,
    details: Optional[Mapping[str, Any]] = None,
    data: Optional[Mapping[str, Any]] = None,
) -> ToolResponse:
    """
    Build an error envelope.

    Example:
        >>> error_response(
        ...     "Section not found: Design",
        ...     error_code=ErrorCode.SECTION_NOT_FOUND,
        ...     error_type=ErrorType.NOT_FOUND,
        ...     remediation="Read the document outline and retry with an existing heading",
        ... )
    """
    payload: Dict[str, Any] = dict(data or {})
    payload.setdefault("error_code", _enum_value(error_code))
    payload.setdefault("error_type", _enum_value(error_type))
    if remediation is not None:
        payload.setdefault("remediation", remediation)
    if details:
        payload.setdefault("details", dict(details))
    return ToolResponse(success=False, data=payload, error=message, meta=_build_meta())


def with_content_hash(result: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy an engine result, exposing ``fingerprint`` under its external name ``contentHash``."""
    data = dict(result)
    if "fingerprint" in data:
        data["contentHash"] = data.pop("fingerprint")
    return data
