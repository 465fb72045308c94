"""Reverse dependency traversal — changed module -> affected page routes.

Walks the dependency graph against its edges, from a changed module to every
module that (transitively) imports it, and collects the route of each page
found on the way.

The walk is breadth-first over an explicit work queue:

- No language-level recursion, so deep graphs cannot exhaust the stack.
- Every module is first reached at its minimal hop count, so the result
  for a given ``max_depth`` does not depend on graph ordering and grows
  monotonically with ``max_depth``.

Dependents are looked up in a ``ReverseIndex`` built once per graph instead
of scanning every edge for each visited module.
"""

from __future__ import annotations

import sys
from collections import deque
from typing import TYPE_CHECKING

from next_affected.graph.exclusion import should_exclude_module
from next_affected.paths import normalize_path, resolve_module
from next_affected.routes.pages import is_page, route_from_page

if TYPE_CHECKING:
    from os import PathLike

    from next_affected._types import DependencyGraph, ModulePath, ProgressCallback, Route
    from next_affected.config import NextAffectedConfig

# Emit a verbose progress line every this many processed modules
PROGRESS_LOG_INTERVAL = 100


class ReverseIndex:
    """Reverse adjacency of a dependency graph.

    Maps the normalized path of every imported module to the raw graph keys
    that import it, in graph order.  Built in O(V + E) and read-only
    afterwards, so one index can serve every traversal of a run.

    Args:
        graph: Module -> direct imports, as produced by the graph builder.
        project_dir: Root that relative module ids resolve against.

    """

    __slots__ = ("_dependents", "_graph", "_project_dir")

    def __init__(self, graph: DependencyGraph, project_dir: str | PathLike[str]) -> None:
        self._graph = graph
        self._project_dir = normalize_path(project_dir)
        self._dependents: dict[str, list[ModulePath]] = {}
        for key, deps in graph.items():
            if not deps:
                continue
            seen: set[str] = set()
            for dep in deps:
                target = resolve_module(dep, project_dir)
                # A module importing the same target twice is one dependent.
                if target in seen:
                    continue
                seen.add(target)
                self._dependents.setdefault(target, []).append(key)

    @property
    def graph(self) -> DependencyGraph:
        """The graph this index was built from."""
        return self._graph

    @property
    def project_dir(self) -> str:
        """Normalized root the module ids were resolved against."""
        return self._project_dir

    def dependents_of(self, normalized_path: str) -> list[ModulePath]:
        """Raw ids of the modules that directly import *normalized_path*."""
        return self._dependents.get(normalized_path, [])


def find_affected_pages(
    graph: DependencyGraph,
    changed_component: ModulePath,
    project_dir: str | PathLike[str],
    config: NextAffectedConfig,
    max_depth: int | None = None,
    verbose: bool = False,
    on_progress: ProgressCallback | None = None,
    *,
    index: ReverseIndex | None = None,
) -> list[Route]:
    """Return the routes of every page affected by *changed_component*.

    Args:
        graph: Module -> direct imports.
        changed_component: Changed module id, relative to *project_dir* or
            absolute.  It is itself classified, so a changed page is its own
            affected page.
        project_dir: Project root used to resolve module ids and config paths.
        config: Pages directories and exclusion rules.
        max_depth: Maximum number of reverse-edge hops from the changed
            module; ``None`` means unbounded and ``0`` classifies only the
            changed module itself.
        verbose: Print a progress line every ``PROGRESS_LOG_INTERVAL``
            processed modules and a total at the end (stderr).
        on_progress: Called with ``1`` after each processed module.
        index: Prebuilt reverse index for *graph* and *project_dir*; built on
            the fly if omitted or built for another graph or root.

    Returns:
        Distinct routes, in discovery order.

    Excluded modules are boundaries: they are never classified and their
    dependents are never reached through them.  The visited set is local to
    this call.

    """
    if (
        index is None
        or index.graph is not graph
        or index.project_dir != normalize_path(project_dir)
    ):
        index = ReverseIndex(graph, project_dir)

    visited: set[ModulePath] = set()
    affected: dict[Route, None] = {}
    processed = 0

    queue: deque[tuple[ModulePath, int]] = deque([(changed_component, 0)])
    while queue:
        module, depth = queue.popleft()
        if module in visited or (max_depth is not None and depth > max_depth):
            continue

        module_path = resolve_module(module, project_dir)
        if should_exclude_module(module_path, config, project_dir):
            continue

        visited.add(module)

        if is_page(module_path, project_dir, config):
            affected.setdefault(route_from_page(module_path, project_dir, config), None)

        for dependent in index.dependents_of(module_path):
            if dependent in visited:
                continue
            dependent_path = resolve_module(dependent, project_dir)
            if should_exclude_module(dependent_path, config, project_dir):
                continue
            queue.append((dependent, depth + 1))

        processed += 1
        if on_progress is not None:
            on_progress(1)
        if verbose and processed % PROGRESS_LOG_INTERVAL == 0:
            print(f"Processed {processed} modules...", file=sys.stderr)

    if verbose:
        print(f"Total modules processed: {processed}", file=sys.stderr)

    return list(affected)
