"""Exclusion policy — modules the traversal never enters.

A module is excluded when its path ends with one of the configured
extensions (stylesheets, images) or lies under one of the configured
excluded paths.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from next_affected.paths import resolve_module

if TYPE_CHECKING:
    from os import PathLike

    from next_affected.config import NextAffectedConfig


def should_exclude_module(
    module_path: str,
    config: NextAffectedConfig,
    project_dir: str | PathLike[str],
) -> bool:
    """Return True if the normalized *module_path* must be skipped.

    Checks, in order:
        1. Exact, case-sensitive suffix match against ``excluded_extensions``.
        2. Prefix match against each ``excluded_paths`` entry resolved
           against *project_dir*.

    """
    if any(module_path.endswith(ext) for ext in config.excluded_extensions):
        return True
    return any(
        module_path.startswith(resolve_module(excluded, project_dir))
        for excluded in config.excluded_paths
    )
