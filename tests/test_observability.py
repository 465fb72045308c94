"""Tests for next_affected.observability — run events and statistics."""

from __future__ import annotations

import io
import sys
from unittest.mock import patch

from next_affected.observability import (
    ChangesDetected,
    EventLog,
    GraphBuilt,
    RunCollector,
    Stopwatch,
    TraversalCompleted,
    compute_traversal_stats,
    now_ns,
    print_run_summary,
)


def _traversal(component: str = "lib/a.ts", duration_ms: float = 1.0) -> TraversalCompleted:
    return TraversalCompleted(
        changed_component=component, modules_processed=3, routes_found=1,
        duration_ms=duration_ms, timestamp_ns=now_ns(),
    )


# ---------------------------------------------------------------------------
# EventLog
# ---------------------------------------------------------------------------


class TestEventLog:
    """Tests for the event log store."""

    def test_append_and_len(self) -> None:
        log = EventLog()
        assert len(log) == 0
        log.append(_traversal())
        assert len(log) == 1

    def test_max_events_enforced(self) -> None:
        log = EventLog(max_events=5)
        for i in range(10):
            log.append(_traversal(f"lib/{i}.ts"))
        assert len(log) == 5
        assert log.query(limit=1)[0].changed_component == "lib/9.ts"

    def test_query_by_type(self) -> None:
        log = EventLog()
        log.append(_traversal())
        log.append(GraphBuilt(
            source="madge", module_count=2, edge_count=1, duration_ms=5.0, timestamp_ns=now_ns(),
        ))
        assert len(log.query(event_type=GraphBuilt)) == 1
        assert len(log.query(event_type=TraversalCompleted)) == 1

    def test_query_newest_first_with_limit(self) -> None:
        log = EventLog()
        for name in ("lib/a.ts", "lib/b.ts", "lib/c.ts"):
            log.append(_traversal(name))
        results = log.query(event_type=TraversalCompleted, limit=2)
        assert [e.changed_component for e in results] == ["lib/c.ts", "lib/b.ts"]

    def test_query_without_type_returns_all(self) -> None:
        log = EventLog()
        log.append(_traversal())
        log.append(GraphBuilt(
            source="madge", module_count=0, edge_count=0, duration_ms=0.0, timestamp_ns=now_ns(),
        ))
        assert [type(e) for e in log.query()] == [GraphBuilt, TraversalCompleted]


# ---------------------------------------------------------------------------
# RunCollector
# ---------------------------------------------------------------------------


class TestRunCollector:
    """Tests for the run collector."""

    def test_creates_log_by_default(self) -> None:
        assert isinstance(RunCollector().log, EventLog)

    def test_record_graph_counts(self) -> None:
        collector = RunCollector()
        collector.record_graph("madge", {"a.ts": ["b.ts", "c.ts"], "b.ts": []}, duration_ms=2.0)
        (event,) = collector.log.query(event_type=GraphBuilt)
        assert event.module_count == 2
        assert event.edge_count == 2

    def test_record_changes_modes(self) -> None:
        collector = RunCollector()
        collector.record_changes("main", "HEAD", file_count=1)
        collector.record_changes("main", "HEAD", file_count=1, include_uncommitted=True)
        collector.record_changes("", "HEAD", file_count=1, only_uncommitted=True)
        modes = [e.mode for e in collector.log.query(event_type=ChangesDetected)]
        assert modes == ["uncommitted", "refs+uncommitted", "refs"]

    def test_record_traversal(self) -> None:
        collector = RunCollector()
        collector.record_traversal("lib/a.ts", modules_processed=7, routes_found=2)
        (event,) = collector.log.query(event_type=TraversalCompleted)
        assert event.modules_processed == 7
        assert event.routes_found == 2


class TestStopwatch:
    """Stopwatch timing."""

    def test_unstarted_is_zero(self) -> None:
        assert Stopwatch().elapsed_ms() == 0.0

    def test_started_is_non_negative(self) -> None:
        assert Stopwatch().start().elapsed_ms() >= 0.0


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------


class TestTraversalStats:
    """compute_traversal_stats and print_run_summary."""

    def test_empty_log(self) -> None:
        assert compute_traversal_stats(EventLog()) == {"count": 0}

    def test_aggregates(self) -> None:
        log = EventLog()
        for ms in (1.0, 2.0, 3.0, 10.0):
            log.append(_traversal(duration_ms=ms))
        stats = compute_traversal_stats(log)
        assert stats["count"] == 4
        assert stats["modules_processed"] == 12
        assert stats["routes_found"] == 4
        assert stats["duration_ms"]["max"] == 10.0
        assert stats["duration_ms"]["p50"] == 3.0

    def test_summary_printed_to_stderr(self) -> None:
        collector = RunCollector()
        collector.record_graph("madge", {"a.ts": ["b.ts"], "b.ts": []}, duration_ms=12.0)
        collector.record_traversal("a.ts", modules_processed=2, routes_found=1, duration_ms=1.0)

        buf = io.StringIO()
        with patch.object(sys, "stderr", buf):
            print_run_summary(collector.log)
        output = buf.getvalue()
        assert "graph from madge: 2 modules, 1 imports" in output
        assert "1 traversal, 2 modules processed" in output

    def test_summary_includes_changes(self) -> None:
        collector = RunCollector()
        collector.record_changes("main", "HEAD", file_count=3, include_uncommitted=True)

        buf = io.StringIO()
        with patch.object(sys, "stderr", buf):
            print_run_summary(collector.log)
        assert "3 changed files (main..HEAD + uncommitted)" in buf.getvalue()

    def test_summary_uncommitted_only(self) -> None:
        collector = RunCollector()
        collector.record_changes("", "HEAD", file_count=1, only_uncommitted=True)

        buf = io.StringIO()
        with patch.object(sys, "stderr", buf):
            print_run_summary(collector.log)
        assert "1 changed files (uncommitted)" in buf.getvalue()
