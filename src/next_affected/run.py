"""Affected pages run — graph, changed modules, traversal, union of routes.

``run_next_affected`` is the primary entry point: it loads the project
config, builds (or loads) the dependency graph, works out which modules
changed, and runs one reverse traversal per changed module through an
``AffectedPagesAnalyzer``.

Two modes:

- Component mode: one file path, resolved against the current directory.
- Changes mode: every file git reports between ``base`` and ``head``
  (optionally with uncommitted changes).  Each file gets an independent
  traversal; routes are unioned.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from next_affected._errors import UsageError
from next_affected.changes.git import get_changed_files
from next_affected.config_loader import load_config
from next_affected.graph.builder import build_graph, load_graph
from next_affected.graph.traversal import ReverseIndex, find_affected_pages
from next_affected.observability import RunCollector, Stopwatch
from next_affected.paths import normalize_path
from next_affected.report import ProgressLine, print_warning

if TYPE_CHECKING:
    from collections.abc import Iterable

    from next_affected._types import DependencyGraph, ModulePath, ProgressCallback, Route
    from next_affected.config import NextAffectedConfig


@dataclass(frozen=True, slots=True)
class RunOptions:
    """Options for one run, mirroring the ``run`` command's flags.

    Attributes:
        project: Project root, relative to the current directory or absolute.
        base: Base commit or branch for change detection.
        head: Head commit or branch for change detection.
        depth: Maximum reverse-edge hops; None for unbounded.
        verbose: Log progress lines instead of a rewriting progress line.
        uncommitted: Add working-tree and untracked changes.
        only_uncommitted: Use only working-tree and untracked changes.
        graph_file: Previously exported ``madge --json`` graph to use
            instead of running madge.

    """

    project: Path = Path(".")
    base: str | None = None
    head: str = "HEAD"
    depth: int | None = None
    verbose: bool = False
    uncommitted: bool = False
    only_uncommitted: bool = False
    graph_file: Path | None = None

    @property
    def detects_changes(self) -> bool:
        """Whether this run takes its modules from git."""
        return self.base is not None or self.uncommitted or self.only_uncommitted


@dataclass(frozen=True, slots=True)
class AffectedPagesResult:
    """Outcome of one run.

    Attributes:
        routes: Distinct affected routes, in discovery order.
        mode: ``"component"`` or ``"changes"``.
        changed_files: Modules the traversals started from.
        modules_processed: Modules processed over all traversals (a module
            reached from two changed files counts twice).
        total_modules: Number of modules in the graph.

    """

    routes: tuple[Route, ...]
    mode: Literal["component", "changes"]
    changed_files: tuple[ModulePath, ...]
    modules_processed: int
    total_modules: int

    @property
    def route_set(self) -> frozenset[Route]:
        return frozenset(self.routes)


class AffectedPagesAnalyzer:
    """Runs reverse traversals over one graph and unions their routes.

    The reverse index is built once and shared; the visited set is not, so
    every changed module gets an independent traversal.

    Args:
        graph: Module -> direct imports.
        project_dir: Absolute project root.
        config: Pages directories and exclusion rules.
        max_depth: Maximum reverse-edge hops per traversal; None for unbounded.
        verbose: Log per-file and periodic progress lines to stderr.
        collector: Records one ``TraversalCompleted`` event per traversal.
        progress: Rewriting progress line used when not verbose.

    """

    def __init__(
        self,
        graph: DependencyGraph,
        project_dir: Path,
        config: NextAffectedConfig,
        *,
        max_depth: int | None = None,
        verbose: bool = False,
        collector: RunCollector | None = None,
        progress: ProgressLine | None = None,
    ) -> None:
        self._graph = graph
        self._project_dir = Path(project_dir)
        self._config = config
        self._max_depth = max_depth
        self._verbose = verbose
        self._collector = collector if collector is not None else RunCollector()
        self._progress = progress if progress is not None else ProgressLine()
        self._index = ReverseIndex(graph, self._project_dir)
        self._processed = 0

    @property
    def total_modules(self) -> int:
        return len(self._graph)

    @property
    def modules_processed(self) -> int:
        """Cumulative processed-module count; only ever grows."""
        return self._processed

    def relative_to_project(self, component_path: str | Path) -> ModulePath:
        """Resolve *component_path* against the cwd, relative to the project."""
        return os.path.relpath(normalize_path(component_path), self._project_dir)

    def analyze_component(self, component_path: str | Path) -> list[Route]:
        """Routes affected by a single file, given relative to the cwd."""
        module = self.relative_to_project(component_path)
        if self._verbose:
            print(f"Analyzing component: {component_path}", file=sys.stderr)

        def on_progress(count: int) -> None:
            self._processed += count
            if not self._verbose:
                self._progress.update(self._module_progress())

        routes = self._traverse(module, on_progress)
        if not self._verbose:
            self._progress.finish(self._module_progress())
        return routes

    def analyze_files(self, files: Iterable[ModulePath]) -> list[Route]:
        """Union of the routes affected by each of *files* (project-relative)."""
        files = list(files)
        affected: dict[Route, None] = {}

        def on_progress(count: int) -> None:
            self._processed += count

        for position, file in enumerate(files, start=1):
            if self._verbose:
                print(f"Processing file: {file}", file=sys.stderr)
            else:
                self._progress.update(f"Processing files: {position}/{len(files)}")
            for route in self._traverse(file, on_progress):
                affected.setdefault(route, None)

        if not self._verbose:
            self._progress.finish()
            self._progress.finish(f"Total modules processed: {self._module_progress(bare=True)}")
        return list(affected)

    def _traverse(self, module: ModulePath, on_progress: ProgressCallback) -> list[Route]:
        before = self._processed
        watch = Stopwatch().start()
        routes = find_affected_pages(
            self._graph,
            module,
            self._project_dir,
            self._config,
            self._max_depth,
            self._verbose,
            on_progress,
            index=self._index,
        )
        self._collector.record_traversal(
            module,
            modules_processed=self._processed - before,
            routes_found=len(routes),
            duration_ms=watch.elapsed_ms(),
        )
        return routes

    def _module_progress(self, *, bare: bool = False) -> str:
        counts = f"{self._processed}/{self.total_modules}"
        return counts if bare else f"Processed modules: {counts}"


async def load_dependency_graph(
    project_dir: Path,
    config: NextAffectedConfig,
    options: RunOptions,
    collector: RunCollector,
) -> DependencyGraph:
    """Build the graph with madge, or load ``options.graph_file``."""
    watch = Stopwatch().start()
    if options.graph_file is not None:
        graph = load_graph(options.graph_file, project_dir, config)
        source = str(options.graph_file)
    else:
        print("Building dependency graph. This may take a while...", file=sys.stderr)
        graph = await build_graph(project_dir, config, verbose=options.verbose)
        source = "madge"
    collector.record_graph(source, graph, duration_ms=watch.elapsed_ms())
    if not graph:
        print_warning(f"Dependency graph from {source} is empty")
    if options.verbose:
        print("Dependency graph built.", file=sys.stderr)
    return graph


async def run_next_affected(
    component_path: str | Path | None,
    options: RunOptions,
    *,
    collector: RunCollector | None = None,
) -> AffectedPagesResult:
    """Compute the pages affected by a component or by git changes.

    Args:
        component_path: File to analyze, relative to the current directory.
            When given, git is not consulted.
        options: Run options.
        collector: Receives graph, change and traversal events.

    Raises:
        UsageError: If neither a component nor a change source is given.
        ConfigError: If the project config cannot be read.
        GraphBuildError: If the dependency graph cannot be built.
        GitError: If change detection fails.

    """
    if component_path is None and not options.detects_changes:
        msg = (
            "You must specify a component path or use --base to compare "
            "commits or branches."
        )
        raise UsageError(msg)

    collector = collector if collector is not None else RunCollector()
    if options.verbose:
        print("Starting next-affected analysis...", file=sys.stderr)

    project_dir = Path(normalize_path(options.project))
    config = load_config(project_dir)
    graph = await load_dependency_graph(project_dir, config, options, collector)

    analyzer = AffectedPagesAnalyzer(
        graph,
        project_dir,
        config,
        max_depth=options.depth,
        verbose=options.verbose,
        collector=collector,
    )

    if component_path is not None:
        routes = analyzer.analyze_component(component_path)
        return AffectedPagesResult(
            routes=tuple(routes),
            mode="component",
            changed_files=(analyzer.relative_to_project(component_path),),
            modules_processed=analyzer.modules_processed,
            total_modules=analyzer.total_modules,
        )

    base = options.base or "HEAD"
    if options.only_uncommitted:
        print("Getting uncommitted changes", file=sys.stderr)
    else:
        print(f"Getting changed files between {base} and {options.head}", file=sys.stderr)
    changed_files = get_changed_files(
        base,
        options.head,
        project_dir,
        include_uncommitted=options.uncommitted,
        only_uncommitted=options.only_uncommitted,
    )
    collector.record_changes(
        "" if options.only_uncommitted else base,
        options.head,
        file_count=len(changed_files),
        include_uncommitted=options.uncommitted,
        only_uncommitted=options.only_uncommitted,
    )

    routes: list[Route] = []
    if changed_files:
        print(f"Found {len(changed_files)} changed files.", file=sys.stderr)
        print("Analyzing affected pages...", file=sys.stderr)
        routes = analyzer.analyze_files(changed_files)

    return AffectedPagesResult(
        routes=tuple(routes),
        mode="changes",
        changed_files=tuple(changed_files),
        modules_processed=analyzer.modules_processed,
        total_modules=analyzer.total_modules,
    )
