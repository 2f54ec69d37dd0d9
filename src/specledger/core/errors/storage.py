"""Storage and concurrency error classes for the persistence layer."""

from typing import Optional

from specledger.core.errors.engine import SpecEngineError


class ConflictError(SpecEngineError):
    """Raised when the on-disk fingerprint differs from the expected one.

    The file is left untouched. Callers re-read, recompute their edit and
    resubmit; the engine never retries or merges on their behalf.
    """

    def __init__(self, path: str, expected: str, actual: Optional[str]) -> None:
        self.path = path
        self.expected_fingerprint = expected
        self.actual_fingerprint = actual
        on_disk = actual[:12] if actual else "missing"
        super().__init__(
            f"Content conflict for {path}: expected {expected[:12]}, on-disk {on_disk}",
            identifier=path,
        )


class WriteError(SpecEngineError):
    """Raised when the underlying filesystem write or rename fails."""

    def __init__(self, path: str, cause: Exception) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write {path}: {cause}", identifier=path)


class LockAcquisitionError(SpecEngineError):
    """Raised when the per-path write lock cannot be acquired within timeout."""

    def __init__(self, path: str, timeout: float) -> None:
        self.path = path
        self.timeout = timeout
        super().__init__(f"Timed out after {timeout}s waiting for write lock on {path}", identifier=path)
