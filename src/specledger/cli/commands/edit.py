"""Structured edit commands for section content and checklist items."""

from typing import Optional, TextIO

import click

from specledger.cli.output import emit_error, emit_exception, emit_success
from specledger.cli.registry import get_context
from specledger.core.errors import SpecEngineError


@click.command("section")
@click.argument("spec")
@click.argument("title")
@click.option("--content", help="New section content.")
@click.option("--file", "content_file", type=click.File("r", encoding="utf-8"), help="Read content from a file ('-' for stdin).")
@click.option("--append", is_flag=True, help="Append instead of replacing.")
@click.option("--depth", type=click.IntRange(1, 6), default=2, show_default=True, help="Heading level of TITLE.")
@click.option("--expected-hash", help="Only write if the document still has this content hash.")
@click.pass_context
def section_cmd(
    ctx: click.Context,
    spec: str,
    title: str,
    content: Optional[str],
    content_file: Optional[TextIO],
    append: bool,
    depth: int,
    expected_hash: Optional[str],
) -> None:
    """Replace or append to the section TITLE of SPEC."""
    if (content is None) == (content_file is None):
        emit_error(
            "Provide exactly one of --content or --file",
            code="VALIDATION_ERROR",
            error_type="validation",
            remediation="Pass the new text with --content, or a path (or '-') with --file",
        )
    text = content if content is not None else content_file.read()

    try:
        result = get_context(ctx).store.update_section(
            spec,
            title,
            text,
            append=append,
            depth=depth,
            expected_fingerprint=expected_hash,
        )
    except SpecEngineError as exc:
        emit_exception(exc)
    emit_success(dict(result, section=title, mode="append" if append else "replace"))


@click.command("check")
@click.argument("spec")
@click.argument("item")
@click.option("--uncheck", is_flag=True, help="Uncheck instead of check.")
@click.option("--expected-hash", help="Only write if the document still has this content hash.")
@click.pass_context
def check_cmd(ctx: click.Context, spec: str, item: str, uncheck: bool, expected_hash: Optional[str]) -> None:
    """Check (or uncheck) the first checklist item of SPEC containing ITEM."""
    if not item.strip():
        emit_error("ITEM must be non-empty text", code="VALIDATION_ERROR", error_type="validation")
    try:
        result = get_context(ctx).store.toggle_checklist(
            spec,
            item,
            not uncheck,
            expected_fingerprint=expected_hash,
        )
    except SpecEngineError as exc:
        emit_exception(exc)
    emit_success(dict(result, item=item, checked=not uncheck))
