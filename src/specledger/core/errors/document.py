"""Document-level error classes: metadata schema, addressing and lookup failures."""

from typing import List, Optional

from specledger.core.errors.engine import SpecEngineError


class SchemaError(SpecEngineError):
    """Raised when frontmatter is malformed or violates field constraints.

    Attributes:
        problems: One human-readable line per violated constraint.
    """

    def __init__(
        self,
        message: str,
        problems: Optional[List[str]] = None,
        identifier: Optional[str] = None,
    ) -> None:
        self.problems = list(problems or [])
        detail = f": {'; '.join(self.problems)}" if self.problems else ""
        super().__init__(f"{message}{detail}", identifier=identifier)


class SectionNotFoundError(SpecEngineError):
    """Raised when no heading at the requested depth matches a section title."""

    def __init__(self, title: str, depth: int = 2, identifier: Optional[str] = None) -> None:
        self.title = title
        self.depth = depth
        super().__init__(f"Section not found: {title}", identifier=identifier)


class ItemNotFoundError(SpecEngineError):
    """Raised when no checklist line contains the requested item text."""

    def __init__(self, item_text: str, identifier: Optional[str] = None) -> None:
        self.item_text = item_text
        super().__init__(f"Checklist item not found: {item_text}", identifier=identifier)


class NotFoundError(SpecEngineError):
    """Raised when a spec, document file or path does not exist."""

    def __init__(self, resource_type: str, identifier: str) -> None:
        self.resource_type = resource_type
        super().__init__(f"{resource_type} not found: {identifier}", identifier=identifier)


class DependencyError(SpecEngineError):
    """Raised when a dependency link is rejected (self-link, unknown target)."""

    def __init__(self, source: str, target: str, reason: str) -> None:
        self.source = source
        self.target = target
        self.reason = reason
        super().__init__(f"Invalid dependency {source} -> {target}: {reason}", identifier=source)
