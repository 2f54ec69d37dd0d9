"""specledger command-line entry point."""

from pathlib import Path
from typing import Optional

import click

from specledger.cli.commands import backfill_cmd, check_cmd, deps_cmd, link_cmd, section_cmd, tree_cmd, unlink_cmd
from specledger.cli.registry import CLIContext
from specledger.config import EngineConfig


@click.group()
@click.option(
    "--specs-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Documents root (overrides SPECLEDGER_SPECS_DIR and config files).",
)
@click.option("--config", "config_file", type=click.Path(dir_okay=False), help="Explicit TOML config file.")
@click.option("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR).")
@click.version_option(package_name="specledger")
@click.pass_context
def cli(ctx: click.Context, specs_dir: Optional[Path], config_file: Optional[str], log_level: Optional[str]) -> None:
    """Manage markdown spec documents and their lifecycle metadata."""
    config = EngineConfig.from_env(config_file)
    if specs_dir is not None:
        config.specs_dir = specs_dir
    if log_level:
        config.log_level = log_level.upper()
    config.setup_logging()
    ctx.obj = CLIContext(config=config)


cli.add_command(backfill_cmd)
cli.add_command(deps_cmd)
cli.add_command(link_cmd)
cli.add_command(unlink_cmd)
cli.add_command(tree_cmd)
cli.add_command(section_cmd)
cli.add_command(check_cmd)


if __name__ == "__main__":
    cli()
