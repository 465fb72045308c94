"""Event model for run observability.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

"""

import time
from dataclasses import dataclass
from typing import Literal, TypeAlias


# ---------------------------------------------------------------------------
# Input events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class GraphBuilt:
    """The dependency graph was built or loaded.

    Attributes:
        source: Where the graph came from (``madge`` or a JSON file path).
        module_count: Number of modules (graph keys) after filtering.
        edge_count: Number of import edges after filtering.
        duration_ms: Time spent building or loading, in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    source: str
    module_count: int
    edge_count: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class ChangesDetected:
    """The changed-file set was computed from git.

    Attributes:
        base: Base ref (empty when only uncommitted changes were used).
        head: Head ref.
        mode: Which changes were considered.
        file_count: Number of distinct changed files.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    base: str
    head: str
    mode: Literal["refs", "refs+uncommitted", "uncommitted"]
    file_count: int
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Traversal events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TraversalCompleted:
    """One reverse traversal from a changed module finished.

    Attributes:
        changed_component: The module the traversal started from.
        modules_processed: Modules visited (and counted) by this traversal.
        routes_found: Distinct routes this traversal reported.
        duration_ms: Traversal time in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    changed_component: str
    modules_processed: int
    routes_found: int
    duration_ms: float
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

RunEvent: TypeAlias = GraphBuilt | ChangesDetected | TraversalCompleted


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
