"""Path normalization shared by every comparison in the traversal.

The dependency graph may mix project-relative and absolute module ids, so
paths are only ever compared in normalized form: absolute, ``..`` collapsed,
forward slashes.
"""

from __future__ import annotations

import os


def normalize_path(path: str | os.PathLike[str]) -> str:
    """Return *path* as an absolute, forward-slash separated string.

    Relative paths resolve against the current working directory.  Symlinks
    are not followed.  Normalizing an already-normalized path is a no-op.

    """
    return os.path.abspath(os.fspath(path)).replace("\\", "/")


def resolve_module(module: str | os.PathLike[str], project_dir: str | os.PathLike[str]) -> str:
    """Normalize *module* relative to *project_dir*.

    An absolute *module* ignores *project_dir*.
    """
    return normalize_path(os.path.join(os.fspath(project_dir), os.fspath(module)))
