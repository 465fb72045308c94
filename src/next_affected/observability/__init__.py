"""Run observability — what a next-affected run built, detected and walked.

All events are frozen dataclasses with monotonic nanosecond timestamps,
stored in a bounded ``EventLog``.

Quick Start:
    >>> from next_affected.observability import EventLog, RunCollector
    >>> collector = RunCollector(EventLog())
    >>> collector.record_traversal("src/components/Button.tsx", modules_processed=12)

"""

from next_affected.observability.collector import RunCollector, Stopwatch
from next_affected.observability.events import (
    ChangesDetected,
    GraphBuilt,
    RunEvent,
    TraversalCompleted,
    now_ns,
)
from next_affected.observability.log import EventLog
from next_affected.observability.profiler import compute_traversal_stats, print_run_summary

__all__ = [
    "ChangesDetected",
    "EventLog",
    "GraphBuilt",
    "RunCollector",
    "RunEvent",
    "Stopwatch",
    "TraversalCompleted",
    "compute_traversal_stats",
    "now_ns",
    "print_run_summary",
]
