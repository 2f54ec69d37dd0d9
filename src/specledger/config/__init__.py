"""Configuration package for specledger.

Sub-modules:
    parsing    – Boolean/number/choice parsing helpers
    server     – EngineConfig dataclass
    loader     – EngineConfig loading/validation mixin (_EngineConfigLoader)
"""

from specledger.config.parsing import (  # noqa: F401
    _normalize_choice,
    _parse_positive_float,
    _try_parse_bool,
)
from specledger.config.server import (  # noqa: F401
    EngineConfig,
)

__all__ = ["EngineConfig"]
