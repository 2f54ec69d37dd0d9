"""Backfill lifecycle timestamps from git history."""

from typing import Any, Dict, List, Tuple

import click

from specledger.cli.output import emit_exception, emit_success
from specledger.cli.registry import get_context
from specledger.core.errors import SpecEngineError
from specledger.core.spec import BackfillOptions, BackfillResult, summarize_results

_MARKS = {
    "git": ("✓", "green"),
    "bootstrapped": ("✓", "green"),
    "existing": ("=", None),
    "skipped": ("-", "yellow"),
}


def _describe(result: BackfillResult, dry_run: bool) -> str:
    mark, color = _MARKS.get(result.source, ("?", None))
    line = f"{click.style(mark, fg=color)} {result.spec_name}"
    if result.source in ("git", "bootstrapped"):
        changed = ", ".join(sorted(result.updates))
        verb = "would set" if dry_run else "set"
        line += f": {verb} {changed}" if changed else ""
    elif result.reason:
        line += f": {result.reason}"
    return line


def _print_summary(results: List[BackfillResult], summary: Dict[str, Any], options: BackfillOptions) -> None:
    for result in results:
        click.echo(_describe(result, options.dry_run))

    click.echo("")
    click.echo(f"  {summary['analyzed']} specs analyzed")
    prefix = "would be " if options.dry_run else ""
    if options.bootstrap:
        click.echo(f"  {summary['bootstrapped']} {prefix}bootstrapped")
    click.echo(f"  {summary['updated']} {prefix}updated")
    click.echo(f"  {summary['existing']} already complete")
    click.echo(f"  {summary['skipped']} skipped")

    if summary["skipReasons"]:
        click.echo("")
        click.echo(click.style("Skipped reasons:", fg="yellow"))
        for reason, names in summary["skipReasons"].items():
            click.echo(f"  - {reason} ({len(names)})")

    if options.dry_run:
        click.echo("")
        click.echo("Run without --dry-run to apply changes")
        if not (options.include_assignee and options.include_transitions):
            click.echo("Use --all to include optional fields (assignee, transitions)")
        if not options.bootstrap and summary["skipped"]:
            click.echo("Use --bootstrap to create frontmatter for files without it")


@click.command("backfill")
@click.argument("specs", nargs=-1)
@click.option("--dry-run", is_flag=True, help="Show what would be updated without writing.")
@click.option("--force", is_flag=True, help="Overwrite existing timestamp values.")
@click.option("--assignee", is_flag=True, help="Include assignee from the first commit author.")
@click.option("--transitions", is_flag=True, help="Include the full status transition history.")
@click.option("--all", "all_fields", is_flag=True, help="Include all optional fields (assignee + transitions).")
@click.option("--bootstrap", is_flag=True, help="Create frontmatter for documents without valid frontmatter.")
@click.option("--json", "as_json", is_flag=True, help="Emit a JSON envelope instead of a summary.")
@click.pass_context
def backfill_cmd(
    ctx: click.Context,
    specs: Tuple[str, ...],
    dry_run: bool,
    force: bool,
    assignee: bool,
    transitions: bool,
    all_fields: bool,
    bootstrap: bool,
    as_json: bool,
) -> None:
    """Backfill created/updated/completed timestamps from git for SPECS (default: all)."""
    cli_ctx = get_context(ctx)
    config = cli_ctx.config
    options = BackfillOptions(
        force=force,
        include_assignee=assignee or all_fields,
        include_transitions=transitions or all_fields,
        dry_run=dry_run,
        bootstrap=bootstrap,
        git_timeout=config.git_timeout,
        lock_timeout=config.lock_timeout,
    )

    try:
        results = cli_ctx.store.backfill(
            targets=list(specs) or None,
            options=options,
            include_archived=config.include_archived,
        )
    except SpecEngineError as exc:
        emit_exception(exc)

    summary = summarize_results(results, dry_run=dry_run)
    if as_json:
        emit_success({"summary": summary, "results": [r.to_dict() for r in results]})
    else:
        _print_summary(results, summary, options)
