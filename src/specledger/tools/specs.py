"""
Spec document tools for specledger.

Thin adapters over ``SpecStore``: every tool returns a ``ToolResponse`` dict
and never lets an engine error escape. Fingerprints travel as
``contentHash`` and come back as ``expectedContentHash``; when a caller
passes ``expectedContentHash`` and the document changed underneath it, the
tool answers with a ``VERSION_CONFLICT`` error carrying both hashes.
"""

import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from specledger.config import EngineConfig
from specledger.core.errors import error_to_response
from specledger.core.naming import canonical_tool
from specledger.core.observability import audit_log, get_metrics
from specledger.core.responses import internal_error, success_response, validation_error, with_content_hash
from specledger.core.spec import (
    BackfillOptions,
    DependencyMode,
    HierarchySort,
    SpecStore,
    analyze_structure,
    split_frontmatter,
    summarize_results,
)

logger = logging.getLogger(__name__)

_metrics = get_metrics()


def _failure(exc: Exception, tool: str) -> dict:
    """Convert an exception raised by the engine into an error envelope."""
    response = error_to_response(exc)
    if response is not None:
        _metrics.counter(f"specs.{tool}", labels={"status": response["data"]["error_code"].lower()})
        if response["data"]["error_code"] == "VERSION_CONFLICT":
            audit_log("write_conflict", tool=tool, identifier=getattr(exc, "identifier", None))
        return response
    logger.exception("Unexpected error in %s", tool)
    _metrics.counter(f"specs.{tool}", labels={"status": "internal_error"})
    return asdict(internal_error(f"Unexpected error: {exc}"))


def _split_targets(value: Any) -> List[str]:
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return [str(part).strip() for part in value or [] if str(part).strip()]


def register_spec_tools(mcp: FastMCP, config: EngineConfig) -> None:
    """
    Register the spec document tools with the FastMCP server.

    Args:
        mcp: FastMCP server instance
        config: Engine configuration; provides the documents root and defaults
    """
    store = SpecStore.from_config(config)

    @canonical_tool(mcp, canonical_name="spec-read")
    def spec_read(spec: str, include_structure: bool = False) -> dict:
        """
        Read a spec's main document with its content hash.

        WHEN TO USE:
        - Before any edit, to obtain the ``contentHash`` to send back as
          ``expectedContentHash``
        - To inspect the heading outline and checklist (``include_structure``)

        Args:
            spec: Spec identifier (directory name, number, or name fragment)
            include_structure: Also return the section outline and checklist

        Returns:
            JSON object with ``spec``, ``file``, ``content`` and ``contentHash``
        """
        try:
            data = with_content_hash(store.get_raw(spec))
            if include_structure:
                _, body = split_frontmatter(data["content"])
                data["structure"] = analyze_structure(body)
            return asdict(success_response(data))
        except Exception as exc:
            return _failure(exc, "spec-read")

    @canonical_tool(mcp, canonical_name="spec-update")
    def spec_update(spec: str, content: str, expectedContentHash: Optional[str] = None) -> dict:
        """
        Replace a spec's main document.

        Omitting ``expectedContentHash`` forces an unconditional write.

        Args:
            spec: Spec identifier
            content: Full new document content (frontmatter included)
            expectedContentHash: ``contentHash`` from the read this edit is based on
        """
        try:
            result = store.update_raw(spec, content, expectedContentHash)
            audit_log("document_write", tool="spec-update", spec=result["spec"], conditional=expectedContentHash is not None)
            return asdict(success_response(with_content_hash(result)))
        except Exception as exc:
            return _failure(exc, "spec-update")

    @canonical_tool(mcp, canonical_name="spec-read-file")
    def spec_read_file(spec: str, file: Optional[str] = None) -> dict:
        """
        Read a document inside a spec directory.

        Args:
            spec: Spec identifier
            file: Path relative to the spec directory; omit to list the
                available documents alongside the main one

        Returns:
            JSON object with ``content`` and ``contentHash``; ``files`` when
            ``file`` is omitted
        """
        try:
            data = with_content_hash(store.get_file_raw(spec, file))
            if not file:
                data["files"] = store.list_files(spec)
            return asdict(success_response(data))
        except Exception as exc:
            return _failure(exc, "spec-read-file")

    @canonical_tool(mcp, canonical_name="spec-update-file")
    def spec_update_file(
        spec: str,
        file: str,
        content: str,
        expectedContentHash: Optional[str] = None,
    ) -> dict:
        """
        Replace a document inside a spec directory.

        Paths that escape the spec directory are refused with ``FORBIDDEN``.
        """
        if not file or not file.strip():
            return asdict(validation_error("file must be a non-empty path", field="file"))
        try:
            result = store.update_file_raw(spec, file, content, expectedContentHash)
            audit_log("document_write", tool="spec-update-file", spec=result["spec"], file=file)
            return asdict(success_response(with_content_hash(result)))
        except Exception as exc:
            return _failure(exc, "spec-update-file")

    @canonical_tool(mcp, canonical_name="spec-update-section")
    def spec_update_section(
        spec: str,
        title: str,
        content: str,
        mode: str = "replace",
        depth: int = 2,
        file: Optional[str] = None,
        expectedContentHash: Optional[str] = None,
    ) -> dict:
        """
        Replace or append to one section of a spec document.

        The section runs from its heading to the next heading of level
        ``depth`` or higher. Heading matching ignores case and surrounding
        whitespace; headings inside fenced code are not sections.

        Args:
            spec: Spec identifier
            title: Heading text of the target section
            content: New section content (heading excluded)
            mode: ``replace`` or ``append``
            depth: Heading level of the target section (1-6)
            file: Optional sub-document path
            expectedContentHash: ``contentHash`` the edit is based on
        """
        if mode not in ("replace", "append"):
            return asdict(validation_error("mode must be 'replace' or 'append'", field="mode"))
        if not 1 <= depth <= 6:
            return asdict(validation_error("depth must be between 1 and 6", field="depth"))
        try:
            result = store.update_section(
                spec,
                title,
                content,
                append=mode == "append",
                depth=depth,
                file_name=file,
                expected_fingerprint=expectedContentHash,
            )
            audit_log("document_write", tool="spec-update-section", spec=result["spec"], section=title, mode=mode)
            return asdict(success_response(with_content_hash(result), section=title, mode=mode))
        except Exception as exc:
            return _failure(exc, "spec-update-section")

    @canonical_tool(mcp, canonical_name="spec-toggle-checklist")
    def spec_toggle_checklist(
        spec: str,
        item: str,
        checked: bool = True,
        file: Optional[str] = None,
        expectedContentHash: Optional[str] = None,
    ) -> dict:
        """
        Check or uncheck a checklist item.

        The first item whose text contains ``item`` (case-insensitive) is
        toggled. Use a distinctive fragment when items share wording.
        """
        if not item or not item.strip():
            return asdict(validation_error("item must be non-empty text", field="item"))
        try:
            result = store.toggle_checklist(
                spec,
                item,
                checked,
                file_name=file,
                expected_fingerprint=expectedContentHash,
            )
            audit_log(
                "document_write", tool="spec-toggle-checklist", spec=result["spec"], item=item, changed=result["changed"]
            )
            return asdict(success_response(with_content_hash(result), item=item, checked=checked))
        except Exception as exc:
            return _failure(exc, "spec-toggle-checklist")

    @canonical_tool(mcp, canonical_name="spec-update-metadata")
    def spec_update_metadata(
        spec: str,
        updates: Dict[str, Any],
        remove: Optional[List[str]] = None,
        expectedContentHash: Optional[str] = None,
    ) -> dict:
        """
        Set or remove frontmatter fields; the body is left byte-for-byte intact.

        A ``null`` value in ``updates`` removes that field. The resulting
        header must still validate (``status`` and ``created`` present,
        ``status`` from the allowed set).
        """
        if not isinstance(updates, dict):
            return asdict(validation_error("updates must be an object", field="updates"))
        try:
            result = store.update_metadata(
                spec,
                updates,
                remove=remove or [],
                expected_fingerprint=expectedContentHash,
            )
            audit_log("document_write", tool="spec-update-metadata", spec=result["spec"], fields=sorted(updates))
            return asdict(success_response(with_content_hash(result)))
        except Exception as exc:
            return _failure(exc, "spec-update-metadata")

    @canonical_tool(mcp, canonical_name="spec-link")
    def spec_link(spec: str, depends_on: List[str], expectedContentHash: Optional[str] = None) -> dict:
        """
        Add dependencies to a spec.

        Each target is resolved to a spec name; self-links and unknown specs
        are rejected. Newly created cycles are reported in ``meta.warnings``.
        """
        targets = _split_targets(depends_on)
        if not targets:
            return asdict(validation_error("depends_on must name at least one spec", field="depends_on"))
        try:
            result = store.link(spec, targets, expected_fingerprint=expectedContentHash)
            audit_log("document_write", tool="spec-link", spec=result["spec"], added=result["added"], changed=result["changed"])
            warnings = result.pop("warnings", [])
            return asdict(success_response(with_content_hash(result), warnings=warnings or None))
        except Exception as exc:
            return _failure(exc, "spec-link")

    @canonical_tool(mcp, canonical_name="spec-unlink")
    def spec_unlink(spec: str, depends_on: List[str], expectedContentHash: Optional[str] = None) -> dict:
        """Remove dependencies from a spec. Targets that were not linked are listed in ``not_linked``."""
        targets = _split_targets(depends_on)
        if not targets:
            return asdict(validation_error("depends_on must name at least one spec", field="depends_on"))
        try:
            result = store.unlink(spec, targets, expected_fingerprint=expectedContentHash)
            audit_log("document_write", tool="spec-unlink", spec=result["spec"], removed=result["removed"], changed=result["changed"])
            return asdict(success_response(with_content_hash(result)))
        except Exception as exc:
            return _failure(exc, "spec-unlink")

    @canonical_tool(mcp, canonical_name="spec-hierarchy")
    def spec_hierarchy(sort: Optional[str] = None, include_archived: bool = True) -> dict:
        """
        Parent/child tree of all specs.

        Specs without a parent, with an unknown parent, or caught in a parent
        cycle are roots.

        Args:
            sort: One of id-asc, id-desc, updated-desc, title-asc, priority-desc
            include_archived: Include specs under ``archived/``
        """
        choices = [s.value for s in HierarchySort]
        if sort is not None and sort not in choices:
            return asdict(validation_error(f"sort must be one of: {', '.join(choices)}", field="sort"))
        try:
            result = store.hierarchy(sort, include_archived=include_archived)
            warnings = [f"{e['spec']}: {e['error']}" for e in result["errors"]]
            return asdict(success_response(result, warnings=warnings or None))
        except Exception as exc:
            return _failure(exc, "spec-hierarchy")

    @canonical_tool(mcp, canonical_name="spec-deps")
    def spec_deps(spec: str, mode: str = "complete", depth: int = 3) -> dict:
        """
        Dependency view around one spec.

        Args:
            spec: Spec identifier
            mode: ``complete`` (direct both ways plus cycles), ``upstream``,
                ``downstream`` or ``impact`` (both ways, transitive)
            depth: Maximum traversal depth for transitive modes
        """
        choices = [m.value for m in DependencyMode]
        if mode not in choices:
            return asdict(validation_error(f"mode must be one of: {', '.join(choices)}", field="mode"))
        if depth < 1:
            return asdict(validation_error("depth must be at least 1", field="depth"))
        try:
            return asdict(success_response(store.dependencies(spec, mode=mode, depth=depth)))
        except Exception as exc:
            return _failure(exc, "spec-deps")

    @canonical_tool(mcp, canonical_name="spec-backfill")
    def spec_backfill(
        specs: Optional[List[str]] = None,
        dry_run: bool = False,
        force: bool = False,
        include_assignee: bool = False,
        include_transitions: bool = False,
        bootstrap: bool = False,
        include_archived: Optional[bool] = None,
    ) -> dict:
        """
        Fill in lifecycle timestamps from git history.

        Existing fields are kept unless ``force`` is set. ``bootstrap``
        synthesises frontmatter for documents that have none. Per-document
        failures are reported as ``skipped`` results; the run continues.

        Returns:
            JSON object with a ``summary`` (counts and skip reasons) and one
            entry per document in ``results``
        """
        options = BackfillOptions(
            force=force,
            include_assignee=include_assignee,
            include_transitions=include_transitions,
            dry_run=dry_run,
            bootstrap=bootstrap,
            git_timeout=config.git_timeout,
            lock_timeout=config.lock_timeout,
        )
        archived = config.include_archived if include_archived is None else include_archived
        try:
            results = store.backfill(targets=specs or None, options=options, include_archived=archived)
            summary = summarize_results(results, dry_run=dry_run)
            audit_log("backfill", tool="spec-backfill", dry_run=dry_run, **{k: summary[k] for k in ("updated", "skipped")})
            return asdict(success_response(summary=summary, results=[r.to_dict() for r in results]))
        except Exception as exc:
            return _failure(exc, "spec-backfill")
