"""Changed-file detection.

Public API::

    from next_affected.changes import get_changed_files

    files = get_changed_files("main", "HEAD", project_dir, include_uncommitted=True)
"""

from next_affected.changes.git import get_changed_files, run_git, uncommitted_files

__all__ = [
    "get_changed_files",
    "run_git",
    "uncommitted_files",
]
