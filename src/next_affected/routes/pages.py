"""Page classification and route derivation.

A module is a page when it lives under one of the configured pages
directories.  Its route is its path relative to that directory, without the
source extension::

    pages/about.tsx          -> /about
    src/pages/blog/post.tsx  -> /blog/post
    pages/index.tsx          -> /index

The first configured directory that prefixes the path wins, so listing
``app`` before ``pages`` gives ``app`` priority for nested roots.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from next_affected.paths import normalize_path, resolve_module

if TYPE_CHECKING:
    from os import PathLike

    from next_affected._types import Route
    from next_affected.config import NextAffectedConfig

_SOURCE_EXTENSION = re.compile(r"\.(js|jsx|ts|tsx)$")


def pages_roots(project_dir: str | PathLike[str], config: NextAffectedConfig) -> list[str]:
    """Normalized absolute pages directories, in configured order."""
    return [resolve_module(directory, project_dir) for directory in config.pages_directories]


def is_page(
    module_path: str,
    project_dir: str | PathLike[str],
    config: NextAffectedConfig,
) -> bool:
    """Return True if *module_path* lies under a configured pages directory."""
    normalized = normalize_path(module_path)
    return any(normalized.startswith(root) for root in pages_roots(project_dir, config))


def route_from_page(
    page_path: str,
    project_dir: str | PathLike[str],
    config: NextAffectedConfig,
) -> Route:
    """Derive the route for *page_path*.

    Falls back to the full normalized path when no pages directory matches.
    An empty route becomes ``/``.

    """
    normalized = normalize_path(page_path)
    route = normalized
    for root in pages_roots(project_dir, config):
        if normalized.startswith(root):
            route = normalized[len(root):]
            break
    route = _SOURCE_EXTENSION.sub("", route)
    return route or "/"
