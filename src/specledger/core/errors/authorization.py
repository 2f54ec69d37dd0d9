"""Path validation errors for sub-document access."""

from specledger.core.errors.engine import SpecEngineError


class PathValidationError(SpecEngineError):
    """Raised when a requested file resolves outside its spec directory."""

    def __init__(self, path: str, root: str) -> None:
        self.path = path
        self.root = root
        super().__init__(f"Path {path} escapes spec directory {root}", identifier=path)
