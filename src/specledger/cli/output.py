"""JSON envelope output for CLI commands.

Commands print exactly one ``ToolResponse`` envelope on stdout. Errors exit
with status 1 after printing, so callers can rely on both the exit code and
``success`` in the payload.
"""

import json
import logging
import sys
from dataclasses import asdict
from typing import Any, Mapping, NoReturn, Optional, Sequence

import click

from specledger.core.errors import error_to_response
from specledger.core.responses import error_response, internal_error, success_response, with_content_hash

logger = logging.getLogger(__name__)


def _echo(payload: Mapping[str, Any]) -> None:
    click.echo(json.dumps(payload, indent=2, default=str))


def emit_success(data: Mapping[str, Any], *, warnings: Optional[Sequence[str]] = None) -> None:
    """Print a success envelope."""
    _echo(asdict(success_response(with_content_hash(data), warnings=warnings or None)))


def emit_error(
    message: str,
    *,
    code: str,
    error_type: str,
    remediation: Optional[str] = None,
    details: Optional[Mapping[str, Any]] = None,
) -> NoReturn:
    """Print an error envelope and exit with status 1."""
    _echo(
        asdict(
            error_response(
                message,
                error_code=code,
                error_type=error_type,
                remediation=remediation,
                details=details,
            )
        )
    )
    sys.exit(1)


def emit_exception(exc: Exception) -> NoReturn:
    """Print the envelope for an engine exception and exit with status 1."""
    response = error_to_response(exc)
    if response is None:
        logger.exception("Unexpected CLI failure")
        response = asdict(internal_error(f"Unexpected error: {exc}"))
    _echo(response)
    sys.exit(1)
