"""
One table from engine exception type to (ErrorCode, ErrorType).

The CLI and the tools both convert failures through :func:`error_to_response`,
so a given failure carries the same code on either surface:

    try:
        store.update_section(...)
    except SpecEngineError as exc:
        return error_to_response(exc)
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Optional, Tuple, Type

from specledger.core.errors.authorization import PathValidationError
from specledger.core.errors.document import (
    DependencyError,
    ItemNotFoundError,
    NotFoundError,
    SchemaError,
    SectionNotFoundError,
)
from specledger.core.errors.history import NotTrackedError
from specledger.core.errors.storage import (
    ConflictError,
    LockAcquisitionError,
    WriteError,
)
from specledger.core.responses.types import (
    ErrorCode,
    ErrorType,
)

ERROR_MAPPINGS: Dict[Type[Exception], Tuple[ErrorCode, ErrorType]] = {
    # documents
    SchemaError: (ErrorCode.SCHEMA_ERROR, ErrorType.VALIDATION),
    SectionNotFoundError: (ErrorCode.SECTION_NOT_FOUND, ErrorType.NOT_FOUND),
    ItemNotFoundError: (ErrorCode.ITEM_NOT_FOUND, ErrorType.NOT_FOUND),
    NotFoundError: (ErrorCode.NOT_FOUND, ErrorType.NOT_FOUND),
    DependencyError: (ErrorCode.DEPENDENCY_NOT_FOUND, ErrorType.VALIDATION),
    # storage
    ConflictError: (ErrorCode.VERSION_CONFLICT, ErrorType.CONFLICT),
    WriteError: (ErrorCode.IO_ERROR, ErrorType.IO),
    LockAcquisitionError: (ErrorCode.RESOURCE_BUSY, ErrorType.UNAVAILABLE),
    # history
    NotTrackedError: (ErrorCode.NOT_TRACKED, ErrorType.NOT_FOUND),
    # access
    PathValidationError: (ErrorCode.FORBIDDEN, ErrorType.AUTHORIZATION),
}


def _error_details(exc: Exception) -> Dict[str, Any]:
    details: Dict[str, Any] = {}
    identifier = getattr(exc, "identifier", None)
    if identifier:
        details["identifier"] = identifier
    if isinstance(exc, ConflictError):
        details["expectedContentHash"] = exc.expected_fingerprint
        details["contentHash"] = exc.actual_fingerprint
    elif isinstance(exc, SchemaError) and exc.problems:
        details["problems"] = exc.problems
    return details


def error_to_response(exc: Exception) -> Optional[dict]:
    """
    Error envelope (as a dict) for a mapped exception, or None.

    Only the exact type is looked up; subclasses need their own entry.
    """
    mapping = ERROR_MAPPINGS.get(type(exc))
    if mapping is None:
        return None

    from specledger.core.responses.builders import error_response

    code, error_type = mapping
    return asdict(
        error_response(
            str(exc),
            error_code=code,
            error_type=error_type,
            details=_error_details(exc) or None,
        )
    )
