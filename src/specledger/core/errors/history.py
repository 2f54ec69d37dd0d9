"""Version-control history error classes."""

from specledger.core.errors.engine import SpecEngineError


class NotTrackedError(SpecEngineError):
    """Raised when a path has no commit history (or is outside a repository)."""

    def __init__(self, path: str, reason: str = "Not in git history") -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}", identifier=path)
