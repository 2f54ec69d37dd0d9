"""CLI commands.

Each command resolves the shared ``CLIContext`` and delegates to
``SpecStore``; output is a JSON envelope (``backfill`` prints a readable
summary unless ``--json`` is given).
"""

from specledger.cli.commands.backfill import backfill_cmd
from specledger.cli.commands.deps import deps_cmd, link_cmd, tree_cmd, unlink_cmd
from specledger.cli.commands.edit import check_cmd, section_cmd

__all__ = [
    "backfill_cmd",
    "check_cmd",
    "deps_cmd",
    "link_cmd",
    "section_cmd",
    "tree_cmd",
    "unlink_cmd",
]
