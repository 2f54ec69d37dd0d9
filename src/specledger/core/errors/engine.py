"""Root of the engine's exception hierarchy."""

from typing import Optional


class SpecEngineError(Exception):
    """Base class for every failure the document engine reports.

    Attributes:
        identifier: Spec identifier or file path the failure concerns.
    """

    def __init__(self, message: str, identifier: Optional[str] = None) -> None:
        super().__init__(message)
        self.identifier = identifier
