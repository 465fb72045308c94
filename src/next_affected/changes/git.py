"""Changed-file detection from git.

Lists files changed between two refs, optionally together with (or only)
the uncommitted changes in the working tree.  Paths are reported relative to
the project directory (``--relative``), so they can be fed straight into the
traversal.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from next_affected._errors import GitError


def run_git(project_dir: Path, args: list[str]) -> str:
    """Run ``git <args>`` in *project_dir* and return its stdout.

    Raises:
        GitError: If git is missing or exits non-zero.

    """
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=project_dir,
            check=True,
            capture_output=True,
            encoding="utf-8",
        )
    except FileNotFoundError as exc:
        msg = "git executable not found"
        raise GitError(msg) from exc
    except subprocess.CalledProcessError as exc:
        detail = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
        msg = f"git {' '.join(args)} failed: {detail}"
        raise GitError(msg) from exc
    return result.stdout


def _split_paths(output: str) -> list[str]:
    # -z output: NUL-terminated, never C-quoted
    return [path for path in output.split("\0") if path]


def uncommitted_files(project_dir: Path) -> list[str]:
    """Staged, unstaged and untracked files, relative to *project_dir*."""
    tracked = _split_paths(
        run_git(project_dir, ["diff", "--name-only", "-z", "--relative", "HEAD"])
    )
    untracked = _split_paths(
        run_git(project_dir, ["ls-files", "-z", "--others", "--exclude-standard"])
    )
    return tracked + untracked


def get_changed_files(
    base: str,
    head: str = "HEAD",
    project_dir: Path | None = None,
    *,
    include_uncommitted: bool = False,
    only_uncommitted: bool = False,
) -> list[str]:
    """Return the files changed between *base* and *head*.

    Args:
        base: Base commit or branch.
        head: Head commit or branch.
        project_dir: Directory git runs in; the current directory by default.
        include_uncommitted: Also include working-tree and untracked changes.
        only_uncommitted: Ignore *base*/*head* and report only working-tree
            and untracked changes.

    Returns:
        Distinct paths relative to *project_dir*, in git's order.

    Raises:
        GitError: If any git command fails.

    """
    project_dir = Path(project_dir or Path.cwd())
    files: list[str] = []
    if not only_uncommitted:
        files += _split_paths(
            run_git(project_dir, ["diff", "--name-only", "-z", "--relative", base, head])
        )
    if include_uncommitted or only_uncommitted:
        files += uncommitted_files(project_dir)
    return list(dict.fromkeys(files))
