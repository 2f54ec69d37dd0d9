"""
Response envelopes for the CLI and the agent tools.

Sub-modules:
    types           - ErrorCode, ErrorType, ToolResponse
    builders        - success_response, error_response, with_content_hash
    errors_generic  - validation_error, internal_error
"""

from specledger.core.responses.types import (  # noqa: F401
    RESPONSE_VERSION,
    ErrorCode,
    ErrorType,
    ToolResponse,
)
from specledger.core.responses.builders import (  # noqa: F401
    error_response,
    success_response,
    with_content_hash,
)
from specledger.core.responses.errors_generic import (  # noqa: F401
    internal_error,
    validation_error,
)

__all__ = [
    "RESPONSE_VERSION",
    "ErrorCode",
    "ErrorType",
    "ToolResponse",
    "error_response",
    "internal_error",
    "success_response",
    "validation_error",
    "with_content_hash",
]
