"""EngineConfig dataclass.

This module defines the ``EngineConfig`` class (field declarations and
logging setup). Loading and validation logic lives in the
``_EngineConfigLoader`` mixin (``loader.py``) which ``EngineConfig``
inherits from.

There is no process-wide instance: entry points build one with
``EngineConfig.from_env()`` and pass it to whatever needs it.
"""

import logging
from dataclasses import dataclass, field
from importlib import metadata
from pathlib import Path
from typing import List

from specledger.config.loader import _EngineConfigLoader
from specledger.core.spec._constants import DEFAULT_SPEC_FILE


_TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
# One JSON object per line
_JSON_FORMAT = (
    '{"timestamp":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}'
)


def _installed_version() -> str:
    try:
        return metadata.version("specledger")
    except metadata.PackageNotFoundError:
        return "0.1.0"  # source checkout without install


@dataclass
class EngineConfig(_EngineConfigLoader):
    """Engine configuration with support for env vars and TOML overrides."""

    # Workspace configuration
    specs_dir: Path = field(default_factory=lambda: Path("./specs"))
    default_file: str = DEFAULT_SPEC_FILE
    include_archived: bool = True

    # Logging configuration
    log_level: str = "INFO"
    structured_logging: bool = False

    # Git and storage
    git_timeout: float = 30.0
    lock_timeout: float = 5.0

    # Relationship views
    hierarchy_sort: str = "id-asc"
    dangling_dependencies: str = "keep"

    # Server configuration
    server_name: str = "specledger"
    server_version: str = field(default_factory=_installed_version)

    startup_warnings: List[str] = field(default_factory=list, repr=False)
    loaded_files: List[Path] = field(default_factory=list, repr=False)

    def _add_startup_warning(self, message: str) -> None:
        if message and message not in self.startup_warnings:
            self.startup_warnings.append(message)

    def setup_logging(self) -> None:
        """
        Attach one stderr handler to the ``specledger`` logger and replay startup warnings.

        Calling it again replaces the handler installed by the previous call.
        """
        package_logger = logging.getLogger("specledger")
        package_logger.setLevel(getattr(logging, self.log_level, logging.INFO))

        for old in [h for h in package_logger.handlers if getattr(h, "_specledger_handler", False)]:
            package_logger.removeHandler(old)

        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_JSON_FORMAT if self.structured_logging else _TEXT_FORMAT))
        handler._specledger_handler = True  # type: ignore[attr-defined]
        package_logger.addHandler(handler)

        for warning in self.startup_warnings:
            package_logger.warning("%s", warning)
