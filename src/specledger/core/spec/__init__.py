"""Spec document engine.

Re-exports the public API::

    from specledger.core.spec import parse_document, replace_section, SpecStore

Sub-modules:
- ``_constants``: Shared constants
- ``models``: ``SpecMetadata`` / ``SpecDocument`` data models
- ``document``: Frontmatter split/join, validation, fingerprints
- ``sections``: Section and checklist addressing
- ``io``: Atomic and fingerprint-checked writes
- ``history``: Git-derived timestamps, authorship and status transitions
- ``inference``: Status/created heuristics for bootstrap
- ``discovery``: Spec directory discovery and identifier resolution
- ``backfill``: Merge policy, bootstrap and batch reconciliation
- ``relationships``: Hierarchy trees and dependency graphs
- ``store``: ``SpecStore`` service used by the CLI and tools
"""

from specledger.core.spec.backfill import (
    BackfillOptions,
    BackfillResult,
    backfill_spec,
    bootstrap_spec,
    merge_history,
    reconcile_specs,
    summarize_results,
    synthesize_header,
)
from specledger.core.spec.discovery import SpecEntry, discover_specs, resolve_spec
from specledger.core.spec.document import (
    compute_fingerprint,
    join_frontmatter,
    load_header,
    parse_document,
    render_frontmatter,
    split_frontmatter,
    update_metadata,
    validate_metadata,
)
from specledger.core.spec.history import HistoryRecord, get_history
from specledger.core.spec.inference import (
    infer_created_from_content,
    infer_status_from_content,
    normalize_status,
)
from specledger.core.spec.io import (
    atomic_write,
    read_document,
    write_document,
    write_with_expected_fingerprint,
)
from specledger.core.spec.models import (
    SpecDocument,
    SpecMetadata,
    SpecPriority,
    SpecStatus,
    StatusTransition,
)
from specledger.core.spec.relationships import (
    DanglingPolicy,
    DependencyMode,
    HierarchySort,
    build_dependency_graph,
    build_hierarchy,
    dependency_view,
    find_cycles,
    required_by,
)
from specledger.core.spec.sections import (
    SectionRange,
    analyze_structure,
    append_to_section,
    find_section,
    parse_sections,
    replace_section,
    toggle_checklist_item,
)
from specledger.core.spec.store import SpecStore

__all__ = [
    # models
    "SpecDocument",
    "SpecMetadata",
    "SpecPriority",
    "SpecStatus",
    "StatusTransition",
    # document
    "compute_fingerprint",
    "join_frontmatter",
    "load_header",
    "parse_document",
    "render_frontmatter",
    "split_frontmatter",
    "update_metadata",
    "validate_metadata",
    # sections
    "SectionRange",
    "analyze_structure",
    "append_to_section",
    "find_section",
    "parse_sections",
    "replace_section",
    "toggle_checklist_item",
    # io
    "atomic_write",
    "read_document",
    "write_document",
    "write_with_expected_fingerprint",
    # history / reconciliation
    "BackfillOptions",
    "BackfillResult",
    "HistoryRecord",
    "backfill_spec",
    "bootstrap_spec",
    "get_history",
    "infer_created_from_content",
    "infer_status_from_content",
    "merge_history",
    "normalize_status",
    "reconcile_specs",
    "summarize_results",
    "synthesize_header",
    # discovery
    "SpecEntry",
    "discover_specs",
    "resolve_spec",
    # relationships
    "DanglingPolicy",
    "DependencyMode",
    "HierarchySort",
    "build_dependency_graph",
    "build_hierarchy",
    "dependency_view",
    "find_cycles",
    "required_by",
    # service
    "SpecStore",
]
