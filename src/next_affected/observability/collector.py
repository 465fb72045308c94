"""Run collector — records what a next-affected run did into an EventLog.

The orchestrator reports graph construction, change detection and every
traversal through one collector; the CLI summarizes the log afterwards.

"""

from __future__ import annotations

import time
from dataclasses import dataclass

from next_affected.observability.events import (
    ChangesDetected,
    GraphBuilt,
    TraversalCompleted,
    now_ns,
)
from next_affected.observability.log import EventLog


@dataclass(slots=True)
class Stopwatch:
    """Wall-clock timer for one measured step."""

    _start: float = 0.0

    def start(self) -> Stopwatch:
        self._start = time.perf_counter()
        return self

    def elapsed_ms(self) -> float:
        if self._start <= 0:
            return 0.0
        return (time.perf_counter() - self._start) * 1000


class RunCollector:
    """Event collector for a single run.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    def record_graph(
        self,
        source: str,
        graph: dict[str, list[str]],
        *,
        duration_ms: float = 0.0,
    ) -> None:
        """Record a built or loaded dependency graph."""
        self._log.append(
            GraphBuilt(
                source=source,
                module_count=len(graph),
                edge_count=sum(len(deps) for deps in graph.values()),
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_changes(
        self,
        base: str,
        head: str,
        *,
        file_count: int,
        include_uncommitted: bool = False,
        only_uncommitted: bool = False,
    ) -> None:
        """Record a git change-detection step."""
        if only_uncommitted:
            mode = "uncommitted"
        elif include_uncommitted:
            mode = "refs+uncommitted"
        else:
            mode = "refs"
        self._log.append(
            ChangesDetected(
                base=base,
                head=head,
                mode=mode,
                file_count=file_count,
                timestamp_ns=now_ns(),
            )
        )

    def record_traversal(
        self,
        changed_component: str,
        *,
        modules_processed: int = 0,
        routes_found: int = 0,
        duration_ms: float = 0.0,
    ) -> None:
        """Record one finished reverse traversal."""
        self._log.append(
            TraversalCompleted(
                changed_component=changed_component,
                modules_processed=modules_processed,
                routes_found=routes_found,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )
