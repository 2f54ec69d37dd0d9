"""Unified error hierarchy for specledger.

All custom exception classes are defined in domain-specific modules within
this package. This __init__.py re-exports everything for convenient access.

Usage:
    from specledger.core.errors import ConflictError, SectionNotFoundError
    from specledger.core.errors import error_to_response
"""

from specledger.core.errors.authorization import PathValidationError
from specledger.core.errors.base import ERROR_MAPPINGS, error_to_response
from specledger.core.errors.document import (
    DependencyError,
    ItemNotFoundError,
    NotFoundError,
    SchemaError,
    SectionNotFoundError,
)
from specledger.core.errors.engine import SpecEngineError
from specledger.core.errors.history import NotTrackedError
from specledger.core.errors.storage import (
    ConflictError,
    LockAcquisitionError,
    WriteError,
)

__all__ = [
    "ERROR_MAPPINGS",
    "ConflictError",
    "DependencyError",
    "ItemNotFoundError",
    "LockAcquisitionError",
    "NotFoundError",
    "NotTrackedError",
    "PathValidationError",
    "SchemaError",
    "SectionNotFoundError",
    "SpecEngineError",
    "WriteError",
    "error_to_response",
]
