"""Relationship commands: dependency views, linking and the parent tree."""

from typing import List, Optional

import click

from specledger.cli.output import emit_error, emit_exception, emit_success
from specledger.cli.registry import get_context
from specledger.core.errors import SpecEngineError
from specledger.core.spec import DependencyMode, HierarchySort


def _targets(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


@click.command("deps")
@click.argument("spec")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in DependencyMode]),
    default=DependencyMode.COMPLETE.value,
    show_default=True,
    help="Which side of the graph to show.",
)
@click.option("--depth", type=click.IntRange(min=1), default=3, show_default=True, help="Traversal depth.")
@click.pass_context
def deps_cmd(ctx: click.Context, spec: str, mode: str, depth: int) -> None:
    """Show what SPEC depends on and what depends on it."""
    try:
        emit_success(get_context(ctx).store.dependencies(spec, mode=mode, depth=depth))
    except SpecEngineError as exc:
        emit_exception(exc)


@click.command("link")
@click.argument("spec")
@click.option("--depends-on", "depends_on", required=True, help="Comma-separated specs SPEC depends on.")
@click.pass_context
def link_cmd(ctx: click.Context, spec: str, depends_on: str) -> None:
    """Add dependencies to SPEC."""
    targets = _targets(depends_on)
    if not targets:
        emit_error("--depends-on must name at least one spec", code="VALIDATION_ERROR", error_type="validation")
    try:
        result = get_context(ctx).store.link(spec, targets)
    except SpecEngineError as exc:
        emit_exception(exc)
    warnings = result.pop("warnings", [])
    emit_success(result, warnings=warnings)


@click.command("unlink")
@click.argument("spec")
@click.option("--depends-on", "depends_on", required=True, help="Comma-separated specs to remove.")
@click.pass_context
def unlink_cmd(ctx: click.Context, spec: str, depends_on: str) -> None:
    """Remove dependencies from SPEC."""
    targets = _targets(depends_on)
    if not targets:
        emit_error("--depends-on must name at least one spec", code="VALIDATION_ERROR", error_type="validation")
    try:
        emit_success(get_context(ctx).store.unlink(spec, targets))
    except SpecEngineError as exc:
        emit_exception(exc)


@click.command("tree")
@click.option("--sort", "sort_order", type=click.Choice([s.value for s in HierarchySort]), help="Sibling order.")
@click.pass_context
def tree_cmd(ctx: click.Context, sort_order: Optional[str]) -> None:
    """Show specs as a parent/child tree."""
    cli_ctx = get_context(ctx)
    try:
        result = cli_ctx.store.hierarchy(sort_order, include_archived=cli_ctx.config.include_archived)
    except SpecEngineError as exc:
        emit_exception(exc)
    emit_success(result, warnings=[f"{e['spec']}: {e['error']}" for e in result["errors"]])
