"""Core document engine for specledger."""

from specledger.core.spec import (
    SpecStore,
    build_dependency_graph,
    build_hierarchy,
    parse_document,
    reconcile_specs,
)

__all__ = [
    "SpecStore",
    "build_dependency_graph",
    "build_hierarchy",
    "parse_document",
    "reconcile_specs",
]
