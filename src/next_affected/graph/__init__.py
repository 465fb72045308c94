"""Dependency graph: building, exclusion, and reverse traversal.

Public API::

    from next_affected.graph import build_graph, find_affected_pages

    graph = await build_graph(project_dir, config)
    routes = find_affected_pages(graph, "src/components/Button.tsx", project_dir, config)
"""

from next_affected.graph.builder import (
    build_graph,
    existing_entry_points,
    filter_graph,
    find_tsconfig,
    load_graph,
    parse_graph,
)
from next_affected.graph.exclusion import should_exclude_module
from next_affected.graph.traversal import ReverseIndex, find_affected_pages

__all__ = [
    "ReverseIndex",
    "build_graph",
    "existing_entry_points",
    "filter_graph",
    "find_affected_pages",
    "find_tsconfig",
    "load_graph",
    "parse_graph",
    "should_exclude_module",
]
