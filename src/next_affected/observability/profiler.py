"""Traversal statistics — aggregates TraversalCompleted events.

Used by the CLI in verbose mode to print a one-line summary of the run.

"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Any

from next_affected.observability.events import ChangesDetected, GraphBuilt, TraversalCompleted

if TYPE_CHECKING:
    from next_affected.observability.log import EventLog


def compute_traversal_stats(
    log: EventLog,
    *,
    limit: int = 10_000,
) -> dict[str, Any]:
    """Compute aggregate statistics from recent ``TraversalCompleted`` events.

    Returns a dict with traversal count, total modules processed and routes
    found, and p50/p95/max traversal latency.

    """
    traversals = log.query(event_type=TraversalCompleted, limit=limit)
    if not traversals:
        return {"count": 0}

    durations = sorted(t.duration_ms for t in traversals)
    count = len(durations)

    def percentile(data: list[float], pct: float) -> float:
        idx = int(len(data) * pct / 100)
        return data[min(idx, len(data) - 1)]

    return {
        "count": count,
        "modules_processed": sum(t.modules_processed for t in traversals),
        "routes_found": sum(t.routes_found for t in traversals),
        "duration_ms": {
            "p50": round(percentile(durations, 50), 1),
            "p95": round(percentile(durations, 95), 1),
            "max": round(durations[-1], 1),
        },
    }


def print_run_summary(log: EventLog) -> None:
    """Print graph size, changed-file count and traversal timing to stderr."""
    graphs = log.query(event_type=GraphBuilt, limit=1)
    if graphs:
        g = graphs[0]
        print(
            f"  [{g.duration_ms:.0f}ms] graph from {g.source}: "
            f"{g.module_count} modules, {g.edge_count} imports",
            file=sys.stderr,
        )

    changes = log.query(event_type=ChangesDetected, limit=1)
    if changes:
        c = changes[0]
        print(f"  {c.file_count} changed files ({_describe_changes(c)})", file=sys.stderr)

    stats = compute_traversal_stats(log)
    if stats["count"] == 0:
        return
    noun = "traversal" if stats["count"] == 1 else "traversals"
    timing = stats["duration_ms"]
    print(
        f"  {stats['count']} {noun}, {stats['modules_processed']} modules processed "
        f"(p50: {timing['p50']:.1f}ms, p95: {timing['p95']:.1f}ms, max: {timing['max']:.1f}ms)",
        file=sys.stderr,
    )


def _describe_changes(event: ChangesDetected) -> str:
    if event.mode == "uncommitted":
        return "uncommitted"
    refs = f"{event.base}..{event.head}"
    return f"{refs} + uncommitted" if event.mode == "refs+uncommitted" else refs
