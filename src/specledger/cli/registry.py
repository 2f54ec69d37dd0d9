"""Per-invocation CLI context shared between the group and its commands."""

from dataclasses import dataclass, field
from typing import Optional

import click

from specledger.config import EngineConfig
from specledger.core.spec import SpecStore


@dataclass
class CLIContext:
    """Resolved configuration plus a lazily built store."""

    config: EngineConfig
    _store: Optional[SpecStore] = field(default=None, repr=False)

    @property
    def store(self) -> SpecStore:
        if self._store is None:
            self._store = SpecStore.from_config(self.config)
        return self._store


def get_context(ctx: click.Context) -> CLIContext:
    """Return the ``CLIContext`` stored on the root click context."""
    obj = ctx.find_object(CLIContext)
    if obj is None:
        raise click.UsageError("CLI context not initialised")
    return obj
