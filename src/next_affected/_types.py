"""Shared type definitions for next-affected."""

from collections.abc import Callable
from typing import TypeAlias

# Module identifier as stored in the dependency graph (raw or normalized)
ModulePath: TypeAlias = str

# Route derived from a page module (e.g., "/blog/post")
Route: TypeAlias = str

# Module -> modules it directly imports
DependencyGraph: TypeAlias = dict[ModulePath, list[ModulePath]]

# Called with the number of modules just processed
ProgressCallback: TypeAlias = Callable[[int], None]
