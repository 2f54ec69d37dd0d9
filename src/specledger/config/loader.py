"""EngineConfig loading and validation logic.

Provides ``_EngineConfigLoader``, a mixin class whose methods are inherited by
``EngineConfig`` (defined in ``server.py``). Splitting loading/validation
logic into its own module keeps ``server.py`` focused on field definitions.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple, cast

if TYPE_CHECKING:
    from specledger.config.server import EngineConfig

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # Python < 3.11 fallback

from specledger.config.parsing import (
    _normalize_choice,
    _normalize_log_level,
    _parse_positive_float,
    _try_parse_bool,
)
from specledger.core.spec.relationships import DanglingPolicy, HierarchySort

logger = logging.getLogger(__name__)

ENV_PREFIX = "SPECLEDGER_"
CONFIG_DIR_NAME = "specledger"
PROJECT_CONFIG_NAMES = ("specledger.toml", ".specledger.toml")

# (toml table, toml key) -> setting name
_TOML_KEYS: Dict[Tuple[str, str], str] = {
    ("workspace", "specs_dir"): "specs_dir",
    ("workspace", "default_file"): "default_file",
    ("workspace", "include_archived"): "include_archived",
    ("logging", "level"): "log_level",
    ("logging", "structured"): "structured_logging",
    ("git", "timeout"): "git_timeout",
    ("storage", "lock_timeout"): "lock_timeout",
    ("relationships", "hierarchy_sort"): "hierarchy_sort",
    ("relationships", "dangling_dependencies"): "dangling_dependencies",
    ("server", "name"): "server_name",
}

_ENV_KEYS: Dict[str, str] = {
    "SPECLEDGER_SPECS_DIR": "specs_dir",
    "SPECLEDGER_DEFAULT_FILE": "default_file",
    "SPECLEDGER_INCLUDE_ARCHIVED": "include_archived",
    "SPECLEDGER_LOG_LEVEL": "log_level",
    "SPECLEDGER_STRUCTURED_LOGGING": "structured_logging",
    "SPECLEDGER_GIT_TIMEOUT": "git_timeout",
    "SPECLEDGER_LOCK_TIMEOUT": "lock_timeout",
    "SPECLEDGER_HIERARCHY_SORT": "hierarchy_sort",
    "SPECLEDGER_DANGLING_DEPENDENCIES": "dangling_dependencies",
    "SPECLEDGER_SERVER_NAME": "server_name",
}


class _EngineConfigLoader:
    """Mixin providing config-loading methods for ``EngineConfig``.

    At runtime ``self`` is always an ``EngineConfig`` instance.
    """

    if TYPE_CHECKING:
        specs_dir: Path
        default_file: str
        include_archived: bool
        log_level: str
        structured_logging: bool
        git_timeout: float
        lock_timeout: float
        hierarchy_sort: str
        dangling_dependencies: str
        server_name: str
        startup_warnings: List[str]
        loaded_files: List[Path]

        def _add_startup_warning(self, message: str) -> None: ...

    @classmethod
    def from_env(cls, config_file: Optional[str] = None) -> "EngineConfig":
        """
        Create configuration from environment variables and optional TOML files.

        Priority (highest to lowest):
        1. Environment variables (``SPECLEDGER_*``)
        2. Project TOML config (./specledger.toml or ./.specledger.toml)
        3. User TOML config (~/.specledger.toml)
        4. XDG config (~/.config/specledger/config.toml)
        5. Default values

        An explicit ``config_file`` (or ``SPECLEDGER_CONFIG_FILE``) replaces
        the layered lookup.
        """
        config = cls()

        toml_path = config_file or os.environ.get(f"{ENV_PREFIX}CONFIG_FILE")
        if toml_path:
            config._load_toml(Path(toml_path))
        else:
            xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
            xdg_config = Path(xdg_config_home) / CONFIG_DIR_NAME / "config.toml"
            if xdg_config.exists():
                config._load_toml(xdg_config)

            home_config = Path.home() / ".specledger.toml"
            if home_config.exists():
                config._load_toml(home_config)

            for name in PROJECT_CONFIG_NAMES:
                project_config = Path(name)
                if project_config.exists():
                    config._load_toml(project_config)
                    break

        config._load_env()
        return cast("EngineConfig", config)

    def _load_toml(self, path: Path) -> None:
        """Load settings from one TOML file; problems become startup warnings."""
        if not path.exists():
            self._add_startup_warning(f"Config file not found: {path}")
            return

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            self._add_startup_warning(f"Error loading config file {path}: {e}")
            return

        for (table, key), setting in _TOML_KEYS.items():
            section = data.get(table)
            if isinstance(section, dict) and key in section:
                self._apply_setting(setting, section[key], source=f"{path}: [{table}].{key}")

        self.loaded_files.append(path)
        logger.debug("Loaded config from %s", path)

    def _load_env(self) -> None:
        """Load settings from ``SPECLEDGER_*`` environment variables."""
        for env_name, setting in _ENV_KEYS.items():
            value = os.environ.get(env_name)
            if value:
                self._apply_setting(setting, value, source=env_name)

    def _apply_setting(self, setting: str, value: Any, *, source: str) -> None:
        """Validate and assign one setting. Invalid values keep the current value."""
        parsed: Any = None
        warning: Optional[str] = None

        if setting == "specs_dir":
            parsed = Path(str(value)).expanduser()
        elif setting in ("default_file", "server_name"):
            parsed = str(value).strip() or None
            if parsed is None:
                warning = f"Ignoring {source}: value must not be empty"
        elif setting in ("include_archived", "structured_logging"):
            parsed = _try_parse_bool(value)
            if parsed is None:
                warning = f"Ignoring {source}={value!r}: expected true/false"
        elif setting == "log_level":
            parsed, warning = _normalize_log_level(value)
        elif setting in ("git_timeout", "lock_timeout"):
            parsed, warning = _parse_positive_float(value, name=source)
        elif setting == "hierarchy_sort":
            parsed, warning = _normalize_choice(value, [s.value for s in HierarchySort], name=source)
        elif setting == "dangling_dependencies":
            parsed, warning = _normalize_choice(value, [p.value for p in DanglingPolicy], name=source)

        if warning:
            self._add_startup_warning(warning)
            return
        if parsed is not None:
            setattr(self, setting, parsed)
