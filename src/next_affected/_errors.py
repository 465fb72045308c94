"""next-affected error hierarchy.

All next-affected errors inherit from NextAffectedError for easy catching.
"""


class NextAffectedError(Exception):
    """Base error for all next-affected operations."""


class ConfigError(NextAffectedError):
    """Invalid or unreadable configuration."""


class UsageError(NextAffectedError):
    """Invalid combination of run options."""


class GraphBuildError(NextAffectedError):
    """Error building or loading the module dependency graph."""


class GitError(NextAffectedError):
    """A git command failed while detecting changed files."""
