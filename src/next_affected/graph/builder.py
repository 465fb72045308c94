"""Graph builder — module dependency graph from ``madge``.

Import parsing, alias resolution and bundler awareness are delegated to the
``madge`` CLI, run through ``npx`` against the configured pages directories.
Its ``--json`` output is exactly a ``DependencyGraph``: module -> direct
imports, relative to the project root.

A graph exported earlier (``madge --json ... > graph.json``) can be loaded
with ``load_graph`` instead of invoking madge.

Both paths drop excluded modules from the keys and the edges.  This is a
convenience only: the traversal re-applies the exclusion policy.
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from next_affected._errors import GraphBuildError
from next_affected.graph.exclusion import should_exclude_module
from next_affected.paths import resolve_module

if TYPE_CHECKING:
    from next_affected._types import DependencyGraph
    from next_affected.config import NextAffectedConfig

TSCONFIG_NAMES: tuple[str, ...] = ("tsconfig.json", "tsconfig.base.json")
SOURCE_EXTENSIONS: tuple[str, ...] = ("js", "jsx", "ts", "tsx")
_WEBPACK_CONFIG = "next.config.js"


def find_tsconfig(project_dir: Path) -> Path | None:
    """Find the closest tsconfig, walking up from *project_dir*.

    Returns None for plain JavaScript projects without a tsconfig.
    """
    current = Path(project_dir).resolve()
    while True:
        for name in TSCONFIG_NAMES:
            candidate = current / name
            if candidate.is_file():
                return candidate
        if current.parent == current:
            return None
        current = current.parent


def existing_entry_points(project_dir: Path, config: NextAffectedConfig) -> list[Path]:
    """Configured pages directories that exist under *project_dir*."""
    candidates = [Path(project_dir) / directory for directory in config.pages_directories]
    return [path for path in candidates if path.exists()]


def madge_command(project_dir: Path, config: NextAffectedConfig) -> list[str]:
    """Build the ``npx madge`` argument list for *project_dir*.

    Raises:
        GraphBuildError: If none of the pages directories exist.

    """
    project_dir = Path(project_dir)
    entry_points = existing_entry_points(project_dir, config)
    if not entry_points:
        msg = f"No valid entry points found in {project_dir}"
        raise GraphBuildError(msg)

    cmd = [
        "npx", "--yes", "madge",
        "--json",
        "--extensions", ",".join(SOURCE_EXTENSIONS),
        "--basedir", str(project_dir),
    ]
    tsconfig = find_tsconfig(project_dir)
    if tsconfig is not None:
        cmd += ["--ts-config", str(tsconfig)]
    webpack_config = project_dir / _WEBPACK_CONFIG
    if webpack_config.is_file():
        cmd += ["--webpack-config", str(webpack_config)]
    cmd += [str(path) for path in entry_points]
    return cmd


async def build_graph(
    project_dir: Path,
    config: NextAffectedConfig,
    *,
    verbose: bool = False,
) -> DependencyGraph:
    """Run madge over the project's pages directories and return the graph.

    Raises:
        GraphBuildError: If there are no entry points, ``npx`` is missing,
            madge exits non-zero, or its output is not a valid graph.

    """
    project_dir = Path(project_dir)
    cmd = madge_command(project_dir, config)
    if verbose:
        print(f"  Running: {' '.join(cmd)}", file=sys.stderr)

    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            cwd=project_dir,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as exc:
        msg = "npx not found; Node.js is required to build the dependency graph"
        raise GraphBuildError(msg) from exc

    stdout, stderr = await proc.communicate()
    if proc.returncode != 0:
        detail = stderr.decode(errors="replace").strip() or f"exit status {proc.returncode}"
        msg = f"madge failed: {detail}"
        raise GraphBuildError(msg)

    graph = parse_graph(stdout.decode(errors="replace"), source="madge output")
    return filter_graph(graph, project_dir, config)


def load_graph(path: Path, project_dir: Path, config: NextAffectedConfig) -> DependencyGraph:
    """Load a graph exported with ``madge --json`` from *path*.

    Raises:
        GraphBuildError: If the file cannot be read or is not a valid graph.

    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Failed to read dependency graph {path}: {exc}"
        raise GraphBuildError(msg) from exc
    return filter_graph(parse_graph(text, source=str(path)), project_dir, config)


def parse_graph(text: str, *, source: str) -> DependencyGraph:
    """Parse and validate a JSON dependency graph.

    Raises:
        GraphBuildError: On invalid JSON or a value that is not a list of strings.

    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"Invalid dependency graph JSON in {source}: {exc}"
        raise GraphBuildError(msg) from exc

    if not isinstance(data, dict):
        msg = f"Dependency graph in {source} must be a JSON object"
        raise GraphBuildError(msg)

    graph: DependencyGraph = {}
    for module, deps in data.items():
        if not isinstance(deps, list) or not all(isinstance(d, str) for d in deps):
            msg = f"Dependencies of {module!r} in {source} must be a list of strings"
            raise GraphBuildError(msg)
        graph[module] = list(deps)
    return graph


def filter_graph(
    graph: DependencyGraph,
    project_dir: Path,
    config: NextAffectedConfig,
) -> DependencyGraph:
    """Drop excluded modules from the keys and from every import list."""
    filtered: DependencyGraph = {}
    for module, deps in graph.items():
        if should_exclude_module(resolve_module(module, project_dir), config, project_dir):
            continue
        filtered[module] = [
            dep for dep in deps
            if not should_exclude_module(resolve_module(dep, project_dir), config, project_dir)
        ]
    return filtered
