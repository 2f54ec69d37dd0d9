"""Shorthands for the failures raised by the surfaces themselves rather than the engine."""

from typing import Optional

from specledger.core.responses.builders import error_response
from specledger.core.responses.types import ErrorCode, ErrorType, ToolResponse


def validation_error(message: str, *, field: Optional[str] = None, remediation: Optional[str] = None) -> ToolResponse:
    """Bad argument to a tool or command, e.g. ``validation_error("depth must be 1-6", field="depth")``."""
    return error_response(
        message,
        error_code=ErrorCode.VALIDATION_ERROR,
        error_type=ErrorType.VALIDATION,
        remediation=remediation,
        details={"field": field} if field else None,
    )


def internal_error(message: str = "An internal error occurred") -> ToolResponse:
    return error_response(
        message,
        error_code=ErrorCode.INTERNAL_ERROR,
        error_type=ErrorType.INTERNAL,
        remediation="Check the server logs for details.",
    )
